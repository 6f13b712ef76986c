import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import logging

from data_loader import load_clean
from modeling import run_method


def main():
    logging.basicConfig(level=logging.INFO,
                        format="%(asctime)s - %(levelname)s - %(message)s")
    logging.captureWarnings(True)

    df = load_clean()
    results = run_method("pca", df)

    print(f"\nPCA: {results['n_components']} components retained")
    print("Centroid distances in component space:")
    for pair, dist in results["centroid_distances"].items():
        print(f"  {pair}: {dist:.3f}")


if __name__ == "__main__":
    main()
