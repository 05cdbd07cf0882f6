# p8lua

Convert PICO-8's dialect of Lua into plain Lua that any Lua interpreter can run.

PICO-8 adds a handful of conveniences to Lua. `p8lua.patch.patch_lua` rewrites them:

| PICO-8                   | Plain Lua                        |
|--------------------------|----------------------------------|
| `a != b`                 | `a ~= b`                         |
| `// comment`             | `-- comment`                     |
| `btnp(➡️)`               | `btnp(1)`                        |
| `if (cond) stmt`         | `if cond then stmt end`          |
| `x += 1`                 | `x = x + (1)`                    |
| `?expr`                  | `print(expr)`                    |
| `0b1010.1`               | `0xa.8`                          |

The button symbols ⬅ ➡ ⬆ ⬇ 🅾 ❎ inside `btn(...)` and `btnp(...)` become
0 to 5. The conversion is a series of regular expressions rather than a full
parser, so unusual constructs may not always be rewritten correctly.

## Installation

```
pip install p8lua
```

## Command line

```
pico8-to-lua game.p8
pico8-to-lua game.p8 --lua-only
cat code.lua | pico8-to-lua -
```

The first argument is the file to convert; pass `-` to read from standard
input. The result is written to standard output.

When the input starts with `pico-8 cartridge`, only the code between
`__lua__` and `__gfx__` is converted and the whole cartridge is written back
out. If `--lua-only` is given as the second argument, only the converted Lua
code is written. Any other input is converted as plain Lua.

With no argument, or a file that cannot be read, the command prints an
`ERROR:` message to standard error and exits with status 1.

## Library

```python
from p8lua.patch import patch_lua, patch_includes, find_includes, was_patched

source = "if (a != b) x += 1"
lua = patch_lua(source)
# 'if a ~= b then x = x + (1) end'
was_patched(source, lua)  # True
```

`#include file.p8` lines are not handled by `patch_lua`. Resolve them first:

```python
from pathlib import Path

code = "#include util.lua\n?hello"
paths = list(find_includes(code))  # ['util.lua']
code = patch_includes(code, lambda path: Path(path).read_text())
code = patch_lua(code)
```

`try_patch_includes` works the same way, but lets the resolver raise. Every
include is attempted, and the first exception raised by the resolver is
reported as an `IncludeError`, which carries the failing `path` and the
original `cause`.

To work with whole cartridges from Python, `p8lua.cli.split_cartridge(text)`
returns a `Cartridge` with `header`, `lua` and `footer` fields, and
`p8lua.cli.convert(text, lua_only=False)` returns the converted text just as
the command writes it.

## Limits

The `pico8-to-lua` command does not resolve `#include` lines; they are passed
through unchanged. Use `patch_includes` or `try_patch_includes` from Python
when a cartridge pulls in other files.

## Tests

```
pip install -e ".[test]"
pytest
```