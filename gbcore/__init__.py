"""Game Boy emulator components: CPU instruction set, registers, cartridges, ROM parsing, debugger, logging and timing."""

__version__ = "1.1.0"