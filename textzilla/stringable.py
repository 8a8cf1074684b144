"""
Conversion of the closed set of "stringable" inputs into `str`.

Accepted shapes are `None`, `bool`, real numbers, `str`, and objects whose
class defines its own `__str__`. Containers such as `list` or `dict` only
inherit `object.__str__` and are rejected, as are raw `bytes`.
"""

import json
import numbers
from typing import Any

from textzilla.errors import InvalidArgument


def is_stringable(value: Any) -> bool:
    if value is None or isinstance(value, (str, bool, numbers.Real)):
        return True
    if isinstance(value, (bytes, bytearray, memoryview)):
        return False
    return type(value).__str__ is not object.__str__


def to_string(value: Any) -> str:
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, numbers.Integral):
        return str(int(value))
    if isinstance(value, numbers.Real):
        return json.dumps(float(value))
    if not is_stringable(value):
        raise InvalidArgument(f"Value of type {type(value).__name__} is not stringable.")
    return str(value)
