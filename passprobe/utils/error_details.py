"""
Utility functions for turning exceptions into report-friendly error text.
"""

from typing import Optional


def extract_error_message(exception: BaseException) -> str:
    """
    Build a single-line description of an exception.

    Includes the exception type and message and, when the exception was
    raised from another one, the root cause of the chain. Driver errors
    wrapped by SQLAlchemy carry the server's real reason in the root cause.

    Args:
        exception: The exception to describe

    Returns:
        Error text such as ``OperationalError: ... | RootCause=...``
    """
    message = str(exception).strip() or "Unknown error"
    details = [f"{type(exception).__name__}: {message}"]

    root_cause = exception
    while root_cause.__cause__ is not None:
        root_cause = root_cause.__cause__

    if root_cause is not exception:
        details.append(f"RootCause={type(root_cause).__name__}: {root_cause}")

    return " | ".join(details)


def truncate_error(error: Optional[str], limit: int = 200) -> str:
    """Shorten long error text for summary tables."""
    if not error:
        return ""
    if len(error) <= limit:
        return error
    return error[:limit] + "..."
