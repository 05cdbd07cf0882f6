"""Command-line entry point that converts a PICO-8 cartridge or Lua file."""

from __future__ import annotations

import sys
from dataclasses import dataclass

from p8lua.patch import patch_lua

__all__ = ["Cartridge", "convert", "main", "split_cartridge"]

CARTRIDGE_MAGIC = "pico-8 cartridge"
LUA_DELIMITER = "__lua__\n"
GFX_DELIMITER = "__gfx__"


@dataclass(frozen=True)
class Cartridge:
    """The sections of a ``.p8`` cartridge around its Lua code."""

    header: str | None
    lua: str
    footer: str | None


def split_cartridge(text: str) -> Cartridge:
    """Split cartridge text into the part before, inside and after ``__lua__``."""
    parts = text.split(LUA_DELIMITER)
    if len(parts) < 2:
        return Cartridge(header=None, lua=text, footer=None)
    lua_parts = parts[1].split(GFX_DELIMITER)
    footer = lua_parts[1] if len(lua_parts) > 1 else None
    return Cartridge(header=parts[0], lua=lua_parts[0], footer=footer)


def convert(text: str, lua_only: bool = False) -> str:
    """Convert a cartridge or bare Lua source to plain Lua.

    For a cartridge the surrounding sections are kept unless ``lua_only``.
    """
    if not text.startswith(CARTRIDGE_MAGIC):
        return patch_lua(text)
    cartridge = split_cartridge(text)
    patched = patch_lua(cartridge.lua)
    if lua_only:
        return patched
    output = f"{cartridge.header or ''}{LUA_DELIMITER}{patched}"
    if cartridge.footer is not None:
        output += f"{GFX_DELIMITER}{cartridge.footer}"
    return output


def _read_input(filename: str) -> str:
    if filename == "-":
        return sys.stdin.buffer.read().decode("utf-8")
    with open(filename, encoding="utf-8", newline="") as handle:
        return handle.read()


def main(argv: list[str] | None = None) -> int:
    """Run the converter; return the process exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        print("ERROR: Must provide filename argument", file=sys.stderr)
        return 1

    filename = args[0]
    lua_only = len(args) > 1 and args[1] == "--lua-only"

    try:
        text = _read_input(filename)
    except (OSError, UnicodeDecodeError):
        if filename == "-":
            raise
        print(f"ERROR: File {filename} not found", file=sys.stderr)
        return 1

    sys.stdout.write(convert(text, lua_only))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())