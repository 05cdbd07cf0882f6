"""Convert PICO-8's dialect of Lua to plain Lua, as a library and a command."""

__version__ = "0.1.0"