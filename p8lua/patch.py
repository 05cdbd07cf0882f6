"""Rewrite the PICO-8 dialect of Lua into plain Lua.

The conversion is a sequence of regular-expression rewrites rather than a
full parser, so unusual but valid PICO-8 expressions may slip through.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator

__all__ = [
    "IncludeError",
    "find_includes",
    "patch_includes",
    "patch_lua",
    "try_patch_includes",
    "was_patched",
]

_FLAGS = re.MULTILINE | re.ASCII

_INCLUDE = re.compile(r"^\s*#include\s+(\S+)", _FLAGS)
_BUTTON = re.compile(r"(btnp?)\(\s*(\S+)\s*\)", re.ASCII)
_SHORTHAND_IF = re.compile(r"^(\s*)if\s*(\([^\n]*)$", _FLAGS)
_THEN = re.compile(r"\bthen\b", re.ASCII)
_ASSIGN_OP = re.compile(
    r"([^-\s]\S*)\s*([+\-*/%])=\s*([^\n\r]+?)(\s*(\bend|\belse|;|--|$))", _FLAGS
)
_PRINT_SHORTHAND = re.compile(r"^(\s*)\?([^\n\r]+)", _FLAGS)
_BINARY_LITERAL = re.compile(r"([^A-Za-z0-9_])0[bB]([01.]+)", re.ASCII)

_BUTTON_SYMBOLS = {
    "⬅": "0",
    "➡": "1",
    "⬆": "2",
    "⬇": "3",
    "🅾": "4",
    "❎": "5",
}

_U64_LIMIT = 1 << 64


class IncludeError(Exception):
    """Raised when an ``#include`` path cannot be resolved."""

    def __init__(self, path: str, cause: BaseException) -> None:
        super().__init__(f"failed to include {path!r}: {cause}")
        self.path = path
        self.cause = cause


def try_patch_includes(lua: str, resolve: Callable[[str], str]) -> str:
    """Replace each ``#include path`` with ``resolve(path)``.

    Every include is attempted; if any resolution raises, an
    :class:`IncludeError` for the first failure is raised.
    """
    failures: list[tuple[str, Exception]] = []

    def replace(match: re.Match[str]) -> str:
        path = match.group(1)
        try:
            return resolve(path)
        except Exception as exc:  # noqa: BLE001 - reported after all includes
            failures.append((path, exc))
            return f'error("failed to include {path!r}: {exc}")'

    result = _INCLUDE.sub(replace, lua)
    if failures:
        path, exc = failures[0]
        raise IncludeError(path, exc) from exc
    return result


def patch_includes(lua: str, resolve: Callable[[str], str]) -> str:
    """Replace each ``#include path`` with ``resolve(path)``."""
    return _INCLUDE.sub(lambda match: resolve(match.group(1)), lua)


def find_includes(lua: str) -> Iterator[str]:
    """Yield the path of every ``#include`` statement, in order."""
    for match in _INCLUDE.finditer(lua):
        yield match.group(1)


def was_patched(original: str, patched: str) -> bool:
    """Return True if patching changed the text."""
    return original != patched


def _find_matching_paren(text: str, start: int) -> int | None:
    if not text[start:].startswith("("):
        return None
    depth = 0
    for index, char in enumerate(text[start:], start):
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return index
    return None


def _replace_button(match: re.Match[str]) -> str:
    func = match.group(1)
    symbol = match.group(2).rstrip("\ufe0f")
    return f"{func}({_BUTTON_SYMBOLS.get(symbol, symbol)})"


def _replace_shorthand_if(match: re.Match[str]) -> str:
    prefix, line = match.group(1), match.group(2)
    if _THEN.search(line):
        return match.group(0)
    index = _find_matching_paren(line, 0)
    if index is None:
        return match.group(0)
    cond = line[1:index]
    body = line[index + 1 :].lstrip()
    comment_start = body.find("--")
    if comment_start == -1:
        return f"{prefix}if {cond} then {body} end"
    code, comment = body[:comment_start], body[comment_start:]
    return f"{prefix}if {cond} then {code.rstrip()} end {comment}"


def _parse_u64(digits: str) -> int | None:
    if not digits:
        return None
    value = int(digits, 2)
    return value if value < _U64_LIMIT else None


def _replace_binary(match: re.Match[str]) -> str:
    prefix, literal = match.group(1), match.group(2)
    parts = literal.split(".")
    whole = parts[0]
    fraction = parts[1] if len(parts) > 1 else ""

    int_val = _parse_u64(whole)
    frac_val = _parse_u64(fraction.ljust(4, "0")) if fraction else None

    if int_val is None:
        return match.group(0)
    if frac_val is None:
        return f"{prefix}0x{int_val:x}"
    return f"{prefix}0x{int_val:x}.{frac_val:x}"


def patch_lua(lua: str) -> str:
    """Convert PICO-8 flavoured Lua source into plain Lua.

    ``#include`` statements are left alone; resolve them first with
    :func:`patch_includes` since included files may use the dialect too.
    """
    lua = lua.replace("!=", "~=")
    lua = lua.replace("//", "--")
    lua = _BUTTON.sub(_replace_button, lua)
    lua = _SHORTHAND_IF.sub(_replace_shorthand_if, lua)
    lua = _ASSIGN_OP.sub(r"\1 = \1 \2 (\3)\4", lua)
    lua = _PRINT_SHORTHAND.sub(r"\1print(\2)", lua)
    lua = _BINARY_LITERAL.sub(_replace_binary, lua)
    return lua