"""
Error serializers

The serializer turns an exception into something a transport can emit.
It is called at most once per log call.
"""

import traceback
from typing import Any, Dict, Union


def serialize_error(error: Any) -> Union[Dict[str, Any], str]:
    """
    Default error serializer.

    Exceptions become a dict with type, message and the formatted stack.
    Any other value is coerced to a string.

    Args:
        error: Value passed to with_error() or error_only()

    Returns:
        Serializable representation
    """
    if not isinstance(error, BaseException):
        return str(error)

    serialized: Dict[str, Any] = {
        "type": type(error).__name__,
        "message": str(error),
    }

    if error.__traceback__ is not None:
        serialized["stack"] = "".join(
            traceback.format_exception(type(error), error, error.__traceback__)
        )

    cause = error.__cause__
    if cause is None and not error.__suppress_context__:
        cause = error.__context__
    if cause is not None:
        serialized["cause"] = serialize_error(cause)

    return serialized


def fallback_serialize_error(error: Any) -> Union[Dict[str, Any], str]:
    """
    Minimal representation used when the configured serializer fails.

    Never raises.
    """
    try:
        if isinstance(error, BaseException):
            fallback: Dict[str, Any] = {"message": str(error)}
            if error.__traceback__ is not None:
                fallback["stack"] = "".join(traceback.format_tb(error.__traceback__))
            return fallback
        return str(error)
    except Exception:
        return object.__repr__(error)
