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
    for method in ("lda", "qda"):
        run_method(method, df)


if __name__ == "__main__":
    main()
