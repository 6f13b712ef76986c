import logging

import numpy as np
import pandas as pd
from sklearn.metrics import confusion_matrix

from config import GROUP_ORDER, POSITIVE_LABEL
from errors import MetricUndefinedError

logger = logging.getLogger(__name__)


def confusion_table(y_true, y_pred, labels=GROUP_ORDER):
    """Rows are true labels, columns predicted labels, both in ``labels`` order."""
    cm = confusion_matrix(np.asarray(y_true, dtype=object),
                          np.asarray(y_pred, dtype=object), labels=labels)
    return pd.DataFrame(
        cm,
        index=pd.Index(labels, name="true"),
        columns=pd.Index(labels, name="predicted"),
    )


def _ratio(num, den, what, label):
    if den == 0:
        raise MetricUndefinedError(f"{what} undefined for {label!r}: denominator is 0")
    return num / den


def classification_metrics(table, positive=POSITIVE_LABEL):
    """Accuracy plus recall/precision/F1 of ``positive`` from a confusion table."""
    if positive not in table.index:
        raise MetricUndefinedError(f"{positive!r} is not a label of the table")
    values = table.to_numpy()
    total = values.sum()
    tp = table.loc[positive, positive]

    accuracy = _ratio(np.trace(values), total, "accuracy", positive)
    recall = _ratio(tp, table.loc[positive].sum(), "recall", positive)
    precision = _ratio(tp, table[positive].sum(), "precision", positive)
    f1 = _ratio(2 * recall * precision, recall + precision, "F1", positive)

    return {
        "label": positive,
        "accuracy": float(accuracy),
        "recall": float(recall),
        "precision": float(precision),
        "f1": float(f1),
    }


def per_class_metrics(table):
    """Metrics with each label as the positive class.

    Labels whose metrics are undefined are left out of the table and logged.
    """
    rows = []
    for label in table.index:
        try:
            rows.append(classification_metrics(table, label))
        except MetricUndefinedError as e:
            logger.warning("Per-class metrics omitted: %s", e)
    return pd.DataFrame(rows, columns=["label", "accuracy", "recall", "precision", "f1"]).set_index("label")


def resemblance(table, label=POSITIVE_LABEL):
    """Share of true ``label`` rows predicted as each label.

    For ``aid`` this answers the question the analysis is about: are
    misclassified subsidy recipients taken for poor or for neither?
    """
    row = table.loc[label]
    total = _ratio(row, row.sum(), "resemblance", label)
    return {k: float(v) for k, v in total.items()}


def print_report(name, table, metrics):
    print(f"\n{'='*50}")
    print(name)
    print(f"{'='*50}")
    print(table.to_string())
    print(f"Accuracy:  {metrics['accuracy']:.4f}")
    print(f"Recall ({metrics['label']}):    {metrics['recall']:.4f}")
    print(f"Precision ({metrics['label']}): {metrics['precision']:.4f}")
    print(f"F1 ({metrics['label']}):        {metrics['f1']:.4f}")
