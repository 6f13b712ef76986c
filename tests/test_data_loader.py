import pandas as pd
import pytest

from config import CATEGORICAL_LEVELS, LABEL_SOURCE_FIELDS, RAW_COLUMNS
from data_loader import (
    build_clean_table, load_clean, load_raw, reduce_columns, save_clean,
)
from errors import DataIntegrityError


def test_reduce_columns_projects_and_renames(raw_frame):
    out = reduce_columns(raw_frame)
    assert list(out.columns) == list(RAW_COLUMNS.values())
    assert "H_SEQ" not in out.columns
    assert (out["age"] == raw_frame["A_AGE"]).all()


def test_reduce_columns_missing_raw_field(raw_frame):
    with pytest.raises(DataIntegrityError, match="SPM_WICVAL"):
        reduce_columns(raw_frame.drop(columns=["SPM_WICVAL"]))


def test_load_raw_keeps_configured_columns(tmp_path, raw_frame):
    path = tmp_path / "pppub.csv"
    raw_frame.to_csv(path, index=False)
    df = load_raw(path)
    assert set(df.columns) == set(RAW_COLUMNS)
    assert len(df) == len(raw_frame)


def test_build_clean_table(raw_frame):
    df = build_clean_table(raw_frame)
    assert (df["age"] >= 26).all()
    assert not set(LABEL_SOURCE_FIELDS) & set(df.columns)
    assert set(df["group"]) <= {"aid", "poor", "no"}
    assert list(df["marital"].cat.categories) == CATEGORICAL_LEVELS["marital"][1]
    assert list(df.index) == list(range(len(df)))


def test_children_without_education_are_dropped_before_encoding(raw_frame):
    raw = raw_frame.copy()
    raw.loc[0, "A_AGE"] = 10
    raw.loc[0, "A_HGA"] = 0
    df = build_clean_table(raw)
    assert len(df) < len(raw)


def test_adult_with_unknown_education_code(raw_frame):
    raw = raw_frame.copy()
    raw["A_AGE"] = 40
    raw.loc[0, "A_HGA"] = 0
    raw.loc[0, ["PTOTVAL", "PEARNVAL", "SPM_TOTVAL", "SPM_MEDXPNS",
                "SPM_CHILDCAREXPNS"]] = 0
    with pytest.raises(DataIntegrityError, match="educ"):
        build_clean_table(raw)


def test_clean_file_round_trip(tmp_path, raw_frame):
    path = tmp_path / "cleaned.csv"
    df = build_clean_table(raw_frame)
    save_clean(df, path)
    back = load_clean(path)
    assert back["group"].dtype == df["group"].dtype
    assert back["state"].dtype == df["state"].dtype
    pd.testing.assert_series_equal(back["income"], df["income"], check_dtype=False)


def test_load_clean_rejects_unknown_group(tmp_path, raw_frame):
    path = tmp_path / "cleaned.csv"
    df = build_clean_table(raw_frame)
    df["group"] = df["group"].astype(str)
    df.loc[0, "group"] = "rich"
    save_clean(df, path)
    with pytest.raises(DataIntegrityError, match="group"):
        load_clean(path)
