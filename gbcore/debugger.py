"""Interactive step debugger with line and opcode breakpoints."""

from __future__ import annotations

from enum import Enum
from typing import Callable

from gbcore.logger import log_debug
from gbcore.registers import Register

_HELP_TEXT = (
    "'s': step\n'c': continue\n'bl': add line breakpoint\n"
    "'bo': add opcode breakpoint\n'p': print register\n'h': help\n'q': quit"
)


class DebugAction(Enum):
    """Commands the debugger understands."""

    NONE = "none"
    STEP = "step"
    CONTINUE = "continue"
    BREAKPOINT_LINE = "breakpoint_line"
    BREAKPOINT_OPCODE = "breakpoint_opcode"
    PRINT = "print"
    HELP = "help"
    QUIT = "quit"


class BreakpointType(Enum):
    """What a breakpoint value is compared against."""

    LINE = "line"
    OPCODE = "opcode"


_SINGLE_COMMANDS = {
    "s": DebugAction.STEP,
    "c": DebugAction.CONTINUE,
    "h": DebugAction.HELP,
    "q": DebugAction.QUIT,
}

_ARGUMENT_COMMANDS = {
    "bl": DebugAction.BREAKPOINT_LINE,
    "bo": DebugAction.BREAKPOINT_OPCODE,
    "p": DebugAction.PRINT,
}


def parse_register(name: str) -> Register:
    """Return the register with mnemonic ``name``, e.g. ``"HL"``."""
    try:
        return Register(name)
    except ValueError:
        raise ValueError(f"Register does not exist: {name!r}") from None


def _parse_hex(text: str) -> int:
    return int(text, 16) & 0xFFFF


class Debugger:
    """Pauses execution at breakpoints and reads commands from the user."""

    def __init__(self, cpu, read_line: Callable[[], str] = input) -> None:
        self._cpu = cpu
        self._read_line = read_line
        self._arg = ""
        self._first_started = True
        self._stopped = True
        self._step = False
        self._quit = False
        self._breakpoints: dict[BreakpointType, list[int]] = {
            BreakpointType.LINE: [],
            BreakpointType.OPCODE: [],
        }

    @property
    def step(self) -> bool:
        """Whether the emulator may execute the current instruction."""
        return self._step

    @property
    def quit(self) -> bool:
        """Whether the user asked to quit."""
        return self._quit

    def tick(self, pc: int, opcode: int) -> None:
        """Check breakpoints at ``pc`` and, when stopped, handle one command."""
        if self._first_started:
            self.help()
            self._first_started = False
            log_debug("Starting at 0x%X", pc)

        if not self._stopped:
            if self.check_breakpoints(pc, BreakpointType.LINE):
                log_debug("Stopped at line 0x%X", pc)
            elif self.check_breakpoints(opcode, BreakpointType.OPCODE):
                log_debug("Stopped at opcode 0x%X", opcode)
            else:
                return
            self._stopped = True

        action = self.get_input()
        self._step = False

        if action is DebugAction.STEP:
            self._step = True
        elif action is DebugAction.CONTINUE:
            self._step = True
            self._stopped = False
        elif action is DebugAction.BREAKPOINT_LINE:
            line = _parse_hex(self._arg)
            self.set_breakpoint(line, BreakpointType.LINE)
            log_debug("Set breakpoint at line 0x%X", line)
        elif action is DebugAction.BREAKPOINT_OPCODE:
            value = _parse_hex(self._arg)
            self.set_breakpoint(value, BreakpointType.OPCODE)
            log_debug("Set breakpoint at opcode 0x%X", value)
        elif action is DebugAction.PRINT:
            self.print_reg(self._arg)
        elif action is DebugAction.HELP:
            self.help()
        elif action is DebugAction.QUIT:
            self._quit = True

    def get_input(self) -> DebugAction:
        """Read one command line and return the action it names."""
        words = self._read_line().split()
        if len(words) == 1:
            return _SINGLE_COMMANDS.get(words[0], DebugAction.NONE)
        if len(words) == 2:
            command, self._arg = words
            return _ARGUMENT_COMMANDS.get(command, DebugAction.NONE)
        return DebugAction.NONE

    def set_breakpoint(self, value: int, breakpoint_type: BreakpointType) -> None:
        self._breakpoints[breakpoint_type].append(value & 0xFFFF)

    def check_breakpoints(self, value: int, breakpoint_type: BreakpointType) -> bool:
        return value in self._breakpoints[breakpoint_type]

    def print_reg(self, reg_str: str) -> None:
        """Log the value of the register named ``reg_str``."""
        reg = parse_register(reg_str)
        log_debug("%s = 0x%X", reg_str, self._cpu.read_register(reg))

    def help(self) -> None:
        log_debug("Debugger Commands:")
        log_debug(_HELP_TEXT)