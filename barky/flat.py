"""Flattening of nested mappings and sequences into dotted string keys."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any, Dict

__all__ = ["to_string", "flatten_map", "flatten_value"]


def _float_to_string(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return format(Decimal(repr(value)).normalize(), "f")


def to_string(val: Any) -> str:
    """Convert a scalar to its string form; unsupported types give ``""``."""
    if val is None:
        return ""
    if isinstance(val, str):
        return val
    if isinstance(val, bool):
        return "true" if val else "false"
    if isinstance(val, int):
        return str(val)
    if isinstance(val, float):
        return _float_to_string(val)
    if isinstance(val, (bytes, bytearray)):
        return bytes(val).decode("utf-8", errors="replace")
    if isinstance(val, BaseException):
        return str(val)
    return ""


def _is_sequence(val: Any) -> bool:
    return isinstance(val, Sequence) and not isinstance(val, (str, bytes, bytearray))


def flatten_value(key: str, val: Any, result: Dict[str, str]) -> None:
    """Flatten ``val`` into ``result`` under ``key``.

    Mappings extend the key with ``.name``, sequences with ``[i]``.
    ``None`` is skipped; ``None`` elements of sequences and empty
    containers become ``""``.
    """
    if val is None:
        return
    if isinstance(val, Mapping):
        if not val:
            result[key] = ""
            return
        for sub_key, sub_val in val.items():
            flatten_value(f"{key}.{to_string(sub_key)}", sub_val, result)
    elif _is_sequence(val):
        if not val:
            result[key] = ""
            return
        for index, item in enumerate(val):
            sub_key = f"{key}[{index}]"
            if item is None:
                # Keep the slot so the sequence length is preserved.
                result[sub_key] = ""
                continue
            flatten_value(sub_key, item, result)
    else:
        result[key] = to_string(val)


def flatten_map(m: Mapping[str, Any]) -> Dict[str, str]:
    """Flatten a nested mapping into a mapping of dotted keys to strings."""
    result: Dict[str, str] = {}
    for key, val in m.items():
        flatten_value(key, val, result)
    return result