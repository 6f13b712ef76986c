import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import logging

import pandas as pd

from config import OUT, OUTCOME_REFERENCE
from data_loader import load_clean
from modeling import run_method


def main():
    logging.basicConfig(level=logging.INFO,
                        format="%(asctime)s - %(levelname)s - %(message)s")
    logging.captureWarnings(True)

    df = load_clean()
    run_method("multinomial", df)

    coefs = pd.read_csv(f"{OUT}/coefficients_multinomial.csv", index_col=0)
    print(f"\nLog-odds against '{OUTCOME_REFERENCE}' (standardized continuous fields):")
    print(coefs.round(3).to_string())


if __name__ == "__main__":
    main()
