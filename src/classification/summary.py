"""Side-by-side comparison of the methods whose metrics files exist."""

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import json

import pandas as pd

from config import OUT, POSITIVE_LABEL
from modeling import METHODS


def collect(out_dir=OUT):
    rows = []
    for method in METHODS:
        path = f"{out_dir}/metrics_{method}.json"
        if not os.path.exists(path):
            continue
        with open(path) as f:
            res = json.load(f)
        row = {"method": method}
        row.update({k: v for k, v in res["metrics"].items() if k != "label"})
        row.update({f"as_{k}": v for k, v in res["resemblance"].items()})
        rows.append(row)
    return pd.DataFrame(rows)


def closer_to(summary):
    """'poor', 'no' or 'tie': where the misclassified label of interest lands more."""
    def side(r):
        if r["as_poor"] == r["as_no"]:
            return "tie"
        return "poor" if r["as_poor"] > r["as_no"] else "no"

    return summary.apply(side, axis=1)


def main():
    summary = collect()
    if summary.empty:
        print(f"No metrics found in {OUT}/, run the classification scripts first")
        return
    summary["closer_to"] = closer_to(summary)

    print(f"\n{'='*60}")
    print(f"Method comparison ({POSITIVE_LABEL} as label of interest)")
    print(f"{'='*60}")
    print(summary.round(4).to_string(index=False))
    summary.to_csv(f"{OUT}/summary.csv", index=False)


if __name__ == "__main__":
    main()
