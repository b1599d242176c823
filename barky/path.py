"""Hierarchical key paths such as ``foo.bar[0]``."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, List

__all__ = ["PathType", "Path", "PathError", "join_path", "split_path"]

_MAX_INDEX = 1 << 64
_DIGITS = frozenset("0123456789")
_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
}


class PathType(IntEnum):
    """Kind of a path segment: a map key or a list index."""

    KEY = 0
    INDEX = 1


@dataclass(frozen=True)
class Path:
    """One segment of a parsed key path."""

    type: PathType
    elem: str


class PathError(ValueError):
    """Raised when a key string cannot be parsed into a path."""


def _escape(text: str, quote: str) -> str:
    out = []
    for ch in text:
        if ch == quote:
            out.append("\\" + ch)
        elif ch in _ESCAPES:
            out.append(_ESCAPES[ch])
        elif ch.isprintable():
            out.append(ch)
        else:
            code = ord(ch)
            if code < 0x80:
                out.append(f"\\x{code:02x}")
            elif code <= 0xFFFF:
                out.append(f"\\u{code:04x}")
            else:
                out.append(f"\\U{code:08x}")
    return quote + "".join(out) + quote


def _quote(text: str) -> str:
    return _escape(text, '"')


def _quote_char(ch: str) -> str:
    return _escape(ch, "'")


def _byte_pos(key: str, index: int) -> int:
    """Byte offset, in UTF-8, of the character at ``index``."""
    return len(key[:index].encode("utf-8", "surrogatepass"))


def _key_segment(segment: str) -> Path:
    if not segment:
        raise PathError("empty key segment")
    if " " in segment:
        raise PathError(f"key segment {_quote(segment)} contains space")
    return Path(PathType.KEY, segment)


def _index_segment(segment: str) -> Path:
    if not segment:
        raise PathError("empty index")
    if not (set(segment) <= _DIGITS and int(segment) < _MAX_INDEX):
        raise PathError(
            f"index must be an unsigned integer (got {_quote(segment)})"
        )
    return Path(PathType.INDEX, segment)


def join_path(path: Iterable[Path]) -> str:
    """Render path segments as a key string: keys joined by dots, indices in brackets."""
    parts = []
    for position, segment in enumerate(path):
        if segment.type == PathType.KEY:
            if position > 0:
                parts.append(".")
            parts.append(segment.elem)
        elif segment.type == PathType.INDEX:
            parts.append(f"[{segment.elem}]")
    return "".join(parts)


def split_path(key: str) -> List[Path]:
    """Parse a key such as ``a.b[0]`` into path segments.

    Raises PathError if the key is malformed.
    """
    if not key:
        raise PathError("invalid key: empty string")

    quoted = _quote(key)

    def error(pos: int, reason: str) -> PathError:
        return PathError(f"invalid key {quoted} at pos {_byte_pos(key, pos)}: {reason}")

    def add(make, start: int, end: int | None) -> None:
        try:
            path.append(make(key[start:end]))
        except PathError as exc:
            raise error(start, str(exc)) from None

    path: List[Path] = []
    last_pos = 0
    last_char = ""
    open_bracket = False

    for i, ch in enumerate(key):
        if ch == " ":
            raise PathError(
                f"invalid key {quoted}: contains space at pos {_byte_pos(key, i)}"
            )
        if ch == ".":
            if open_bracket:
                raise error(i, "'.' not allowed inside brackets")
            if last_char == ".":
                raise error(i, "empty key between dots")
            if last_char != "]":
                add(_key_segment, last_pos, i)
            last_pos = i + 1
            last_char = "."
        elif ch == "[":
            if open_bracket:
                raise error(i, "nested '['")
            if last_char == ".":
                raise error(i, "'[' cannot directly follow '.'")
            if i > 0 and last_char != "]":
                add(_key_segment, last_pos, i)
            open_bracket = True
            last_pos = i + 1
            last_char = "["
        elif ch == "]":
            if not open_bracket:
                raise error(i, "']' without matching '['")
            if last_pos == i:
                raise error(last_pos, "empty index")
            add(_index_segment, last_pos, i)
            open_bracket = False
            last_pos = i + 1
            last_char = "]"
        else:
            if last_char == "]":
                raise error(i, f"unexpected character {_quote_char(ch)} after ']'")
            last_char = ch

    if open_bracket:
        raise error(last_pos - 1, "unclosed '['")
    if last_char == ".":
        raise error(len(key) - 1, "ends with '.'")
    if last_char != "]":
        add(_key_segment, last_pos, None)

    return path