import logging

import pandas as pd

from config import (
    RAW_DATA_PATH, CLEAN_DATA_PATH, RAW_COLUMNS, LABEL_SOURCE_FIELDS,
    GROUP_COL, GROUP_ORDER,
)
from errors import DataIntegrityError
from labels import derive_groups, group_counts
from outliers import filter_outliers
from encoding import encode_levels, apply_levels

logger = logging.getLogger(__name__)


def load_raw(path=RAW_DATA_PATH, columns=RAW_COLUMNS):
    df = pd.read_csv(path, usecols=lambda c: c.strip() in columns)
    df.columns = df.columns.str.strip()
    logger.info("Loaded %s: %d rows, %d columns", path, len(df), df.shape[1])
    return df


def reduce_columns(df, columns=RAW_COLUMNS):
    """Project onto the configured raw columns and rename them."""
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise DataIntegrityError(f"raw extract is missing columns {missing}")
    return df[list(columns)].rename(columns=columns)


def build_clean_table(raw):
    """Raw extract -> labeled, filtered, encoded analysis table."""
    df = reduce_columns(raw)
    df = derive_groups(df)
    df = filter_outliers(df)
    df = encode_levels(df)
    # The label is a function of these, so they never reach a model.
    df = df.drop(columns=LABEL_SOURCE_FIELDS)
    return df.reset_index(drop=True)


def save_clean(df, path=CLEAN_DATA_PATH):
    df.to_csv(path, index=False)
    logger.info("Wrote %d rows to %s", len(df), path)


def load_clean(path=CLEAN_DATA_PATH):
    df = pd.read_csv(path)
    df = apply_levels(df)
    unknown = df[GROUP_COL].notna() & ~df[GROUP_COL].isin(GROUP_ORDER)
    if unknown.any() or df[GROUP_COL].isna().any():
        raise DataIntegrityError(f"{path}: {GROUP_COL} outside {GROUP_ORDER}")
    df[GROUP_COL] = pd.Categorical(df[GROUP_COL], categories=GROUP_ORDER)
    return df


def main():
    logging.basicConfig(level=logging.INFO,
                        format="%(asctime)s - %(levelname)s - %(message)s")

    df = build_clean_table(load_raw())
    counts = group_counts(df)

    print(f"\n{'='*50}")
    print("Cleaned analysis table")
    print(f"{'='*50}")
    print(f"Rows: {len(df):,}")
    for group, n in counts.items():
        print(f"  {group}: {n:,} ({n/len(df)*100:.1f}%)")

    save_clean(df)


if __name__ == "__main__":
    main()
