# heldout/utils/errors.py
class EvaluationConfigError(RuntimeError):
    """
    Raised when a run cannot start from its configuration.
    Fatal: nothing has been trained when this is raised.
    """


class ResultFileError(EvaluationConfigError):
    """
    Raised when a result file (metrics dump / predictions) cannot be opened.
    """


class TestSetUnavailableError(EvaluationConfigError):
    """
    Raised when the stream runs dry before the cached test set is full.
    """

    __test__ = False


class TaskAborted(Exception):
    """
    Cooperative cancellation signal.

    Raised from inside a long-running phase once the monitor asks to abort;
    caught by the scheduler, which then returns no result.
    """


class StreamExhaustedError(RuntimeError):
    """
    Raised by next_example() on a stream with nothing left.
    Callers are expected to check has_more() first.
    """
