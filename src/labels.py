"""Group label derivation: poor / aid / no.

A person is ``poor`` under either the official or the supplemental poverty
measure. Otherwise they are ``aid`` if they receive any of the configured
subsidies, and ``no`` if they receive none. The conditions are evaluated in
that order, so a poor subsidy recipient is labeled ``poor`` and never ``aid``.
"""

import logging

import numpy as np
import pandas as pd

from config import GROUP_COL, GROUP_ORDER, POVERTY_FLAGS, SUBSIDY_FIELDS
from errors import DataIntegrityError, describe_rows

logger = logging.getLogger(__name__)


def decode_flags(df, flags=POVERTY_FLAGS):
    """Decode raw poverty codes to True/False, leaving missing values as NaN."""
    decoded = {}
    for field, code_map in flags.items():
        raw = df[field]
        unknown = raw.notna() & ~raw.isin(list(code_map))
        if unknown.any():
            codes = sorted(raw[unknown].unique().tolist())
            raise DataIntegrityError(
                f"{field}: codes {codes} are not in {sorted(code_map)} "
                f"(rows {describe_rows(df.index[unknown])})"
            )
        decoded[field] = raw.map(code_map)
    return pd.DataFrame(decoded, index=df.index)


def derive_groups(df, flags=POVERTY_FLAGS, subsidy_fields=SUBSIDY_FIELDS):
    """Return a copy of ``df`` with a categorical ``group`` column."""
    poverty = decode_flags(df, flags)
    subsidies = df[subsidy_fields]

    negative = (subsidies < 0).any(axis=1)
    if negative.any():
        raise DataIntegrityError(
            f"negative subsidy amount in {subsidy_fields} "
            f"(rows {describe_rows(df.index[negative])})"
        )

    known_poor = poverty.eq(True).any(axis=1)
    flags_known = poverty.notna().all(axis=1)
    any_subsidy = (subsidies > 0).any(axis=1)
    subsidies_known = subsidies.notna().all(axis=1)

    # np.select takes the first true condition, so order is the rule.
    conditions = [
        known_poor,
        flags_known & any_subsidy,
        flags_known & subsidies_known,
    ]
    labels = np.select(conditions, ["poor", "aid", "no"], default="")

    unresolved = labels == ""
    if unresolved.any():
        raise DataIntegrityError(
            "poverty or subsidy fields missing, group cannot be resolved "
            f"(rows {describe_rows(df.index[unresolved])})"
        )

    out = df.copy()
    out[GROUP_COL] = pd.Categorical(labels, categories=GROUP_ORDER)
    logger.info("Derived groups: %s", group_counts(out).to_dict())
    return out


def group_counts(df):
    return df[GROUP_COL].value_counts().reindex(GROUP_ORDER, fill_value=0)
