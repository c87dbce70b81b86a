"""Attach a prefix, and the reason a request was abandoned, to an error."""

from __future__ import annotations


class AnnotatedError(Exception):
    """An error with a prefix and, optionally, the error that ended its request."""

    def __init__(
        self,
        prefix: str,
        error: BaseException,
        context_error: BaseException | None = None,
    ) -> None:
        self.prefix = prefix
        self.error = error
        self.context_error = context_error
        if context_error is None:
            message = f"{prefix}: {error}"
        else:
            message = f"{prefix}: {error} ({context_error})"
        super().__init__(message)


def annotate(
    prefix: str,
    err: BaseException,
    context_error: BaseException | None = None,
) -> AnnotatedError:
    """Return ``err`` wrapped with ``prefix``.

    If the request was cancelled or timed out, ``context_error`` is the
    reason, and it is added to the message in parentheses.
    """
    annotated = AnnotatedError(prefix, err, context_error)
    annotated.__cause__ = err
    return annotated