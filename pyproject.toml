[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gbcore"
version = "1.1.0"
description = "Game Boy emulator building blocks: CPU instruction set, registers, cartridges, ROM header parsing and a step debugger"
requires-python = ">=3.10"
dependencies = []
keywords = ["gameboy", "emulator", "lr35902", "cpu", "cartridge", "mbc1", "rom"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Emulators",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gbcore"]

[tool.pytest.ini_options]
addopts = "-ra"
