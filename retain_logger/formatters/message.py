"""
Message body rendering

Turns the variadic arguments of a log call into the %m token.
"""

from collections.abc import Mapping
from enum import Enum
import json
import numbers
from typing import Any, List, Sequence


class _Undefined:
    """Marker for an argument that was explicitly left undefined."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False


UNDEFINED = _Undefined()

_SCALARS = (str, bytes, numbers.Number, Enum)
_CONTAINERS = (Mapping, list, tuple, set, frozenset)


def _has_own_str(value: Any) -> bool:
    return type(value).__str__ is not object.__str__


def _is_structured(value: Any) -> bool:
    return isinstance(value, _CONTAINERS) or hasattr(value, "__dict__")


def _to_json(value: Any) -> Any:
    """json.dumps default hook for values json does not know."""
    if isinstance(value, (set, frozenset)):
        return list(value)
    if hasattr(value, "__dict__"):
        return vars(value)
    if _has_own_str(value):
        try:
            return str(value)
        except Exception as e:
            raise TypeError(f"Object of type {type(value).__name__} has no usable str()") from e
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _keys_of(value: Any) -> List[str]:
    try:
        return _collect_keys(value)
    except Exception:
        return []


def _collect_keys(value: Any) -> List[str]:
    if isinstance(value, Mapping):
        return [str(k) for k in value.keys()]
    if isinstance(value, (list, tuple)):
        return [str(i) for i in range(len(value))]
    if hasattr(value, "__dict__"):
        return [str(k) for k in vars(value)]
    return []


def stringify_argument(value: Any) -> str:
    """
    Render one log argument.

    Containers and plain objects become compact JSON. When serialization
    fails (circular references, opaque members) the value degrades to
    ``TypeName(key1,key2)``. Never raises.

    Args:
        value: Any log argument

    Returns:
        String form of the argument
    """
    if value is UNDEFINED:
        return "[undefined]"
    if value is None:
        return "[null]"
    if isinstance(value, BaseException):
        try:
            return f"{type(value).__name__}: {value}"
        except Exception:
            return f"{type(value).__name__}()"
    if isinstance(value, _SCALARS) or not _is_structured(value):
        try:
            return str(value)
        except Exception:
            return f"{type(value).__name__}()"

    try:
        return json.dumps(value, default=_to_json, separators=(",", ":"), ensure_ascii=False)
    except Exception:
        return f"{type(value).__name__}({','.join(_keys_of(value))})"


def render_message(args: Sequence[Any]) -> str:
    """Join rendered arguments with single spaces."""
    return " ".join(stringify_argument(arg) for arg in args)
