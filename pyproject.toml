[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "p8lua"
version = "0.1.0"
description = "Convert PICO-8's dialect of Lua to plain Lua"
requires-python = ">=3.10"
keywords = ["pico-8", "lua", "gamedev", "preprocessor"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Environment :: Console",
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Pre-processors",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pico8-to-lua = "p8lua.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["p8lua"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
