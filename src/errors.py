"""Fatal pipeline faults. None of these are retried or defaulted."""


class PipelineError(Exception):
    pass


class DataIntegrityError(PipelineError, ValueError):
    """A row does not resolve to one group, or a code is outside its level set."""


class SplitConsistencyError(PipelineError):
    """The sampling plan cannot produce a valid train/validation/test partition."""


class MetricUndefinedError(PipelineError, ZeroDivisionError):
    """A recall/precision/F1 denominator is zero."""


def describe_rows(index, limit=10):
    rows = list(index)
    shown = ", ".join(str(r) for r in rows[:limit])
    if len(rows) > limit:
        shown += f", ... ({len(rows)} rows)"
    return shown
