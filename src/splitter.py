"""Seeded stratified train/validation/test assignment.

The split is driven by an explicit sampling plan: an ordered list of
(group, fraction, stage) steps consumed against a single
``numpy.random.RandomState``. Each step draws ``round(fraction * n)`` rows
without replacement from the rows of ``group`` that are still unassigned;
whatever is left after the plan becomes ``test``. With the default plan this
gives 50% train, 30% validation (60% of the remaining half) and 20% test
within every group.

The plan order fixes which random numbers each group consumes, so the same
seed and the same row order always give the same partition. Counts use
Python's ``round`` (half to even).
"""

import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd

from config import (
    SEED, GROUP_COL, GROUP_ORDER, SAMPLE_COL, TRAIN_FRACTION, VALIDATION_FRACTION,
)
from errors import SplitConsistencyError

logger = logging.getLogger(__name__)

TRAIN = "train"
VALIDATION = "validation"
TEST = "test"
STAGES = [TRAIN, VALIDATION, TEST]


@dataclass(frozen=True)
class SamplingStep:
    group: str
    fraction: float
    stage: str


def sampling_plan(groups=GROUP_ORDER, train_fraction=TRAIN_FRACTION,
                  validation_fraction=VALIDATION_FRACTION):
    plan = [SamplingStep(g, train_fraction, TRAIN) for g in groups]
    plan += [SamplingStep(g, validation_fraction, VALIDATION) for g in groups]
    return plan


def draw_count(fraction, pool_size):
    if pool_size < 0:
        raise SplitConsistencyError(f"negative pool size {pool_size}")
    if not 0 <= fraction <= 1:
        raise SplitConsistencyError(f"fraction {fraction} outside [0, 1]")
    return int(round(fraction * pool_size))


def assign_samples(df, seed=SEED, plan=None):
    """Return a copy of ``df`` with a ``sample`` column: train, validation or test."""
    if plan is None:
        plan = sampling_plan()

    rng = np.random.RandomState(seed)
    groups = df[GROUP_COL].to_numpy()
    sample = np.full(len(df), "", dtype=object)

    for step in plan:
        if step.stage not in (TRAIN, VALIDATION):
            raise SplitConsistencyError(f"plan step {step} has no drawable stage")
        pool = np.flatnonzero((groups == step.group) & (sample == ""))
        k = draw_count(step.fraction, len(pool))
        if k > len(pool):
            raise SplitConsistencyError(
                f"{step}: cannot draw {k} rows from a pool of {len(pool)}"
            )
        if k == 0:
            continue
        chosen = pool[rng.choice(len(pool), k, replace=False)]
        sample[chosen] = step.stage

    sample[sample == ""] = TEST

    out = df.copy()
    out[SAMPLE_COL] = pd.Categorical(sample, categories=STAGES)
    _check_partition(out)
    logger.info("Split (seed=%s): %s", seed,
                out[SAMPLE_COL].value_counts().reindex(STAGES).to_dict())
    return out


def _check_partition(df):
    counts = df[SAMPLE_COL].value_counts()
    if df[SAMPLE_COL].isna().any() or counts.sum() != len(df):
        raise SplitConsistencyError(
            f"split is not a partition: {counts.to_dict()} for {len(df)} rows"
        )


def partition(assigned):
    """(train, validation, test) frames, each keeping the original row labels."""
    return tuple(
        assigned.loc[assigned[SAMPLE_COL] == stage].drop(columns=[SAMPLE_COL])
        for stage in STAGES
    )


def split_frames(df, seed=SEED, plan=None):
    return partition(assign_samples(df, seed, plan))


def split_summary(assigned):
    """Group x sample counts with each stage's share of its group."""
    counts = pd.crosstab(assigned[GROUP_COL], assigned[SAMPLE_COL], dropna=False)
    counts = counts.reindex(index=GROUP_ORDER, columns=STAGES, fill_value=0)
    shares = counts.div(counts.sum(axis=1).replace(0, np.nan), axis=0)
    return counts.join(shares.add_suffix("_share"))
