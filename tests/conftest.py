import numpy as np
import pandas as pd
import pytest

from config import CATEGORICAL_LEVELS, GROUP_ORDER, RAW_COLUMNS


def make_raw(n=400, seed=0):
    """CPS-shaped extract with valid codes plus one column nobody asked for."""
    rng = np.random.RandomState(seed)
    states = list(CATEGORICAL_LEVELS["state"][0])
    df = pd.DataFrame({
        "H_SEQ": np.arange(n),
        "A_AGE": rng.randint(18, 80, n),
        "A_SEX": rng.choice([1, 2], n),
        "A_MARITL": rng.randint(1, 8, n),
        "PRDTRACE": rng.randint(1, 27, n),
        "A_HGA": rng.randint(31, 47, n),
        "SPM_TENMORTSTATUS": rng.randint(1, 4, n),
        "GESTFIPS": rng.choice(states, n),
        "PTOTVAL": rng.gamma(2.0, 20000, n).round(),
        "PEARNVAL": rng.gamma(2.0, 15000, n).round(),
        "SPM_TOTVAL": rng.gamma(2.0, 40000, n).round(),
        "SPM_MEDXPNS": rng.gamma(1.0, 3000, n).round(),
        "SPM_CHILDCAREXPNS": rng.gamma(0.5, 2000, n).round(),
        "SPM_NUMPER": rng.randint(1, 7, n),
        "SPM_NUMKIDS": rng.randint(0, 4, n),
        "OFFPOV": rng.choice([1, 2], n, p=[0.1, 0.9]),
        "SPM_POOR": rng.choice([0, 1], n, p=[0.88, 0.12]),
        "SPM_SNAPSUB": rng.choice([0, 0, 0, 1200], n),
        "SPM_CAPHOUSESUB": rng.choice([0, 0, 0, 0, 5000], n),
        "SPM_SCHLUNCH": rng.choice([0, 0, 0, 600], n),
        "SPM_WICVAL": rng.choice([0, 0, 0, 0, 0, 400], n),
    })
    assert set(RAW_COLUMNS) <= set(df.columns)
    return df


def make_clean(n_per_group=150, seed=0):
    """Analysis table in which the three groups separate on the money fields."""
    rng = np.random.RandomState(seed)
    centres = {"poor": 8000, "aid": 30000, "no": 90000}
    frames = []
    for group in GROUP_ORDER:
        n = n_per_group
        base = centres[group]
        frame = pd.DataFrame({
            "age": rng.randint(26, 80, n),
            "income": rng.normal(base, base * 0.1, n),
            "earnings": rng.normal(base * 0.8, base * 0.1, n),
            "famincome": rng.normal(base * 1.5, base * 0.1, n),
            "medexp": rng.gamma(1.0, 3000, n),
            "childcare": rng.gamma(0.5, 2000, n),
            "famsize": rng.randint(1, 7, n),
            "kids": rng.randint(0, 4, n),
            "group": group,
        })
        for field, (_, levels) in CATEGORICAL_LEVELS.items():
            frame[field] = rng.choice(levels, n)
        frames.append(frame)
    df = pd.concat(frames, ignore_index=True)
    df = df.sample(frac=1, random_state=seed).reset_index(drop=True)
    for field, (_, levels) in CATEGORICAL_LEVELS.items():
        df[field] = pd.Categorical(df[field], categories=levels)
    df["group"] = pd.Categorical(df["group"], categories=GROUP_ORDER)
    return df


@pytest.fixture
def raw_frame():
    return make_raw()


@pytest.fixture
def clean_frame():
    return make_clean()


@pytest.fixture
def ten_rows():
    groups = ["aid", "aid", "poor", "poor", "poor", "no", "no", "no", "no", "no"]
    return pd.DataFrame({
        "group": pd.Categorical(groups, categories=GROUP_ORDER),
        "x": range(10),
    })
