"""Shared fit / cross-check / score routine for the three classification methods.

Every method sees the same design: continuous fields standardized, categorical
fields expanded to indicators against the configured reference levels. Each
model is fit twice, once on train and once on validation, and the two sets of
coefficients are compared for stability before the train fit is scored on
test.
"""

import json
import logging
import os

import joblib
import numpy as np
import pandas as pd
from sklearn.compose import ColumnTransformer
from sklearn.decomposition import PCA
from sklearn.discriminant_analysis import (
    LinearDiscriminantAnalysis, QuadraticDiscriminantAnalysis,
)
from sklearn.linear_model import LogisticRegression
from sklearn.neighbors import NearestCentroid
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import StandardScaler

from config import (
    SEED, OUT, MODEL_DIR, GROUP_COL, GROUP_ORDER, CONTINUOUS_FIELDS, MAXIT,
    PCA_VARIANCE, QDA_REG_PARAM, OUTCOME_REFERENCE, POSITIVE_LABEL,
)
from encoding import expand_indicators, indicator_columns, reference_table
from errors import SplitConsistencyError
from metrics import (
    confusion_table, classification_metrics, per_class_metrics, resemblance,
    print_report,
)
from splitter import assign_samples, partition, split_summary

logger = logging.getLogger(__name__)

METHODS = ["pca", "lda", "qda", "multinomial"]


def feature_columns():
    return CONTINUOUS_FIELDS + indicator_columns()


def prepare_design(split):
    X = expand_indicators(split)[feature_columns()]
    y = split[GROUP_COL].astype(str).to_numpy()
    return X, y


def build_preprocessor(numeric_cols, indicator_cols):
    return ColumnTransformer([
        ("num", StandardScaler(), numeric_cols),
        ("ind", "passthrough", indicator_cols),
    ])


def build_model(method):
    prep = build_preprocessor(CONTINUOUS_FIELDS, indicator_columns())
    if method == "pca":
        steps = [("pca", PCA(n_components=PCA_VARIANCE, random_state=SEED)),
                 ("clf", NearestCentroid())]
    elif method == "lda":
        steps = [("clf", LinearDiscriminantAnalysis())]
    elif method == "qda":
        steps = [("clf", QuadraticDiscriminantAnalysis(reg_param=QDA_REG_PARAM))]
    elif method == "multinomial":
        steps = [("clf", LogisticRegression(max_iter=MAXIT))]
    else:
        raise ValueError(f"unknown method {method!r}, expected one of {METHODS}")
    return Pipeline([("prep", prep)] + steps)


def _by_group(values, classes):
    df = pd.DataFrame(values, index=list(classes), columns=feature_columns())
    return df.reindex([g for g in GROUP_ORDER if g in df.index]).T


def coefficients(model, method):
    """Features x terms table of whatever the method has for coefficients.

    pca: loadings per component; lda: discriminant coefficients per group;
    qda: group means in the standardized design; multinomial: log-odds
    against the reference outcome.
    """
    clf = model.named_steps["clf"]
    if method == "pca":
        pca = model.named_steps["pca"]
        return pd.DataFrame(
            pca.components_.T,
            index=feature_columns(),
            columns=[f"PC{i + 1}" for i in range(pca.n_components_)],
        )
    if method == "lda":
        coef = clf.coef_
        if coef.shape[0] == 1:
            raise SplitConsistencyError(
                f"LDA fit saw only groups {list(clf.classes_)}, expected {GROUP_ORDER}"
            )
        return _by_group(coef, clf.classes_)
    if method == "qda":
        return _by_group(np.asarray(clf.means_), clf.classes_)
    if method == "multinomial":
        table = _by_group(clf.coef_, clf.classes_)
        return table.sub(table[OUTCOME_REFERENCE], axis=0).drop(columns=[OUTCOME_REFERENCE])
    raise ValueError(f"unknown method {method!r}")


def align_signs(reference, other):
    """Flip columns of ``other`` whose direction opposes ``reference``.

    Principal component loadings are only defined up to sign.
    """
    common = reference.columns.intersection(other.columns)
    aligned = other[common].copy()
    for col in common:
        if np.dot(reference[col], aligned[col]) < 0:
            aligned[col] = -aligned[col]
    return aligned


def coefficient_stability(train_coefs, valid_coefs):
    common = train_coefs.columns.intersection(valid_coefs.columns)
    train_long = train_coefs[common].stack()
    valid_long = valid_coefs[common].stack()
    out = pd.DataFrame({"train": train_long, "validation": valid_long})
    out.index.names = ["feature", "term"]
    out["diff"] = out["validation"] - out["train"]
    out["same_sign"] = np.sign(out["train"]) == np.sign(out["validation"])
    return out


def centroid_distances(model):
    """Euclidean distances between group centroids in component space."""
    clf = model.named_steps["clf"]
    centroids = pd.DataFrame(clf.centroids_, index=list(clf.classes_))
    pairs = [("aid", "poor"), ("aid", "no"), ("poor", "no")]
    return {
        f"{a}-{b}": float(np.linalg.norm(centroids.loc[a] - centroids.loc[b]))
        for a, b in pairs
        if a in centroids.index and b in centroids.index
    }


def run_method(method, df, seed=SEED, out_dir=OUT, model_dir=MODEL_DIR):
    os.makedirs(out_dir, exist_ok=True)
    os.makedirs(model_dir, exist_ok=True)

    assigned = assign_samples(df, seed)
    print(f"\nSplit by group (seed={seed}):")
    print(split_summary(assigned).round(3).to_string())

    train, valid, test = partition(assigned)
    X_train, y_train = prepare_design(train)
    X_valid, y_valid = prepare_design(valid)
    X_test, y_test = prepare_design(test)

    model = build_model(method).fit(X_train, y_train)
    valid_model = build_model(method).fit(X_valid, y_valid)

    train_coefs = coefficients(model, method)
    valid_coefs = coefficients(valid_model, method)
    if method == "pca":
        valid_coefs = align_signs(train_coefs, valid_coefs)
    stability = coefficient_stability(train_coefs, valid_coefs)
    agreement = stability["same_sign"].mean()
    logger.info("%s: %.1f%% of train/validation coefficients agree in sign",
                method, agreement * 100)

    y_pred = model.predict(X_test)
    table = confusion_table(y_test, y_pred)
    metrics = classification_metrics(table, POSITIVE_LABEL)
    print_report(method.upper(), table, metrics)

    results = {
        "method": method,
        "seed": seed,
        "n_train": len(train),
        "n_validation": len(valid),
        "n_test": len(test),
        "metrics": metrics,
        "per_class": per_class_metrics(table).to_dict(orient="index"),
        "resemblance": resemblance(table, POSITIVE_LABEL),
        "sign_agreement": float(agreement),
        "confusion": {k: {p: int(n) for p, n in row.items()}
                      for k, row in table.to_dict(orient="index").items()},
    }
    if method == "pca":
        results["n_components"] = int(model.named_steps["pca"].n_components_)
        results["centroid_distances"] = centroid_distances(model)

    joblib.dump(model, f"{model_dir}/{method}.joblib")
    train_coefs.to_csv(f"{out_dir}/coefficients_{method}.csv")
    stability.to_csv(f"{out_dir}/stability_{method}.csv")
    reference_table().to_csv(f"{out_dir}/reference_levels.csv", index=False)
    with open(f"{out_dir}/metrics_{method}.json", "w") as f:
        json.dump(results, f, indent=2)

    return results
