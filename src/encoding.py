"""Categorical encoding with fixed level sets and explicit reference levels."""

import pandas as pd

from config import CATEGORICAL_LEVELS, REFERENCE_LEVELS
from errors import DataIntegrityError, describe_rows


def _check_values(df, field, allowed):
    bad = ~df[field].isin(list(allowed))
    if bad.any():
        values = sorted(str(v) for v in df.loc[bad, field].unique())
        raise DataIntegrityError(
            f"{field}: values {values} outside {list(allowed)} "
            f"(rows {describe_rows(df.index[bad])})"
        )


def encode_levels(df, fields=CATEGORICAL_LEVELS):
    """Map raw codes to ordered level names."""
    out = df.copy()
    for field, (code_map, levels) in fields.items():
        _check_values(out, field, code_map)
        out[field] = pd.Categorical(out[field].map(code_map), categories=levels)
    return out


def apply_levels(df, fields=CATEGORICAL_LEVELS):
    """Restore categorical dtypes on level names read back from disk."""
    out = df.copy()
    for field, (_, levels) in fields.items():
        if field not in out.columns:
            continue
        _check_values(out, field, levels)
        out[field] = pd.Categorical(out[field], categories=levels)
    return out


def indicator_columns(fields=CATEGORICAL_LEVELS, reference_levels=REFERENCE_LEVELS):
    columns = []
    for field, (_, levels) in fields.items():
        reference = reference_levels[field]
        if reference not in levels:
            raise DataIntegrityError(
                f"{field}: reference level {reference!r} not in {levels}"
            )
        columns += [f"{field}_{level}" for level in levels if level != reference]
    return columns


def expand_indicators(df, fields=CATEGORICAL_LEVELS, reference_levels=REFERENCE_LEVELS):
    """Replace each k-level field with k-1 0/1 columns, one per non-reference level.

    Columns come from the configured levels, not the observed values, so every
    split gets the same design even when a level is absent from it.
    """
    indicators = {}
    for field, (_, levels) in fields.items():
        reference = reference_levels[field]
        if reference not in levels:
            raise DataIntegrityError(
                f"{field}: reference level {reference!r} not in {levels}"
            )
        _check_values(df, field, levels)
        values = df[field].astype(str)
        for level in levels:
            if level != reference:
                indicators[f"{field}_{level}"] = (values == level).astype(int)
    return pd.concat(
        [df.drop(columns=list(fields)), pd.DataFrame(indicators, index=df.index)],
        axis=1,
    )


def reference_table(fields=CATEGORICAL_LEVELS, reference_levels=REFERENCE_LEVELS):
    return pd.DataFrame(
        [
            {"field": field, "reference": reference_levels[field],
             "levels": ", ".join(levels)}
            for field, (_, levels) in fields.items()
        ]
    )
