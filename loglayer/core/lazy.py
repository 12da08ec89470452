"""
Lazy log values

Wrap an expensive computation so it only runs when the log level is enabled:

    log.with_context({"memory": lazy(lambda: process.memory_info().rss)})
    log.with_metadata({"dump": lazy(lambda: json.dumps(big))}).debug("done")

Only root-level values are resolved.
"""

from typing import Any, Callable, Dict, List, Tuple


LAZY_ERROR_MARKER = "[LazyEvalError]"


class LazyValue:
    """Deferred value; the callable runs once per log call that uses it."""

    __slots__ = ("fn",)

    def __init__(self, fn: Callable[[], Any]):
        if not callable(fn):
            raise TypeError("lazy() requires a callable")
        self.fn = fn

    def resolve(self) -> Any:
        return self.fn()

    def __repr__(self) -> str:
        fn_name = getattr(self.fn, "__name__", repr(self.fn))
        return f"LazyValue({fn_name})"


def lazy(fn: Callable[[], Any]) -> LazyValue:
    """Defer evaluation of fn until log time."""
    return LazyValue(fn)


def is_lazy(value: Any) -> bool:
    return isinstance(value, LazyValue)


def count_lazy_values(data: Dict[str, Any]) -> int:
    return sum(1 for value in data.values() if isinstance(value, LazyValue))


def resolve_lazy_values(
    data: Dict[str, Any]
) -> Tuple[Dict[str, Any], List[Tuple[str, BaseException]]]:
    """
    Resolve root-level lazy values.

    Returns the input unchanged when it holds no lazy values. A callable
    that raises is replaced by an error marker string and reported in the
    failure list.

    Args:
        data: Context or metadata mapping

    Returns:
        Tuple of (resolved mapping, list of (key, exception))
    """
    if not any(isinstance(value, LazyValue) for value in data.values()):
        return data, []

    resolved: Dict[str, Any] = {}
    failures: List[Tuple[str, BaseException]] = []

    for key, value in data.items():
        if not isinstance(value, LazyValue):
            resolved[key] = value
            continue
        try:
            resolved[key] = value.resolve()
        except Exception as e:
            resolved[key] = f"{LAZY_ERROR_MARKER} {e}"
            failures.append((key, e))

    return resolved, failures
