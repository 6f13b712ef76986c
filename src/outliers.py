import logging

import pandas as pd

from config import MIN_AGE, N_STD, OUTLIER_FIELDS

logger = logging.getLogger(__name__)


def compute_bounds(df, fields=OUTLIER_FIELDS, n_std=N_STD):
    """Upper bound mean + n_std * sd per field, all from the same snapshot."""
    return pd.Series(
        {field: df[field].mean() + n_std * df[field].std() for field in fields},
        dtype=float,
    )


def apply_bounds(df, bounds, min_age=MIN_AGE):
    # Upper tail only; one combined predicate.
    keep = df["age"] >= min_age
    for field, bound in bounds.items():
        keep &= ~(df[field] > bound)
    return df.loc[keep].copy()


def filter_outliers(df, fields=OUTLIER_FIELDS, n_std=N_STD, min_age=MIN_AGE):
    bounds = compute_bounds(df, fields, n_std)
    out = apply_bounds(df, bounds, min_age)
    logger.info("Outlier filter kept %d of %d rows (bounds: %s)",
                len(out), len(df), bounds.round(1).to_dict())
    return out
