"""CPU register file with 8-bit registers and their 16-bit pairs."""

from __future__ import annotations

from enum import Enum


class Register(Enum):
    """Addressable CPU registers, single and paired."""

    A = "A"
    F = "F"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    H = "H"
    L = "L"
    AF = "AF"
    BC = "BC"
    DE = "DE"
    HL = "HL"
    PC = "PC"
    SP = "SP"


_SINGLE = frozenset(
    {Register.A, Register.F, Register.B, Register.C,
     Register.D, Register.E, Register.H, Register.L}
)

_PAIRS = {
    Register.AF: (Register.A, Register.F),
    Register.BC: (Register.B, Register.C),
    Register.DE: (Register.D, Register.E),
    Register.HL: (Register.H, Register.L),
}

# The low nibble of the flag register is always zero.
_FLAG_MASK = 0xF0


def _check(reg: object) -> Register:
    if not isinstance(reg, Register):
        raise ValueError(f"register does not exist: {reg!r}")
    return reg


def register_name(reg: Register) -> str:
    """Return the mnemonic of a register, e.g. ``"HL"``."""
    return _check(reg).value


class CPURegisters:
    """Register state, initialised to the values left by the boot ROM."""

    def __init__(self) -> None:
        self._bytes: dict[Register, int] = {
            Register.A: 0x01,
            Register.F: 0xB0,
            Register.B: 0x00,
            Register.C: 0x13,
            Register.D: 0x00,
            Register.E: 0xD8,
            Register.H: 0x01,
            Register.L: 0x4D,
        }
        self._pc = 0x0100
        self._sp = 0xFFFE

    def _set_byte(self, reg: Register, value: int) -> None:
        value &= 0xFF
        if reg is Register.F:
            value &= _FLAG_MASK
        self._bytes[reg] = value

    def write_register(self, reg: Register, data: int) -> None:
        """Store ``data`` in ``reg``, truncated to the register's width."""
        reg = _check(reg)
        data &= 0xFFFF
        if reg in _SINGLE:
            self._set_byte(reg, data)
        elif reg in _PAIRS:
            high, low = _PAIRS[reg]
            self._set_byte(high, data >> 8)
            self._set_byte(low, data)
        elif reg is Register.PC:
            self._pc = data
        else:
            self._sp = data

    def read_register(self, reg: Register) -> int:
        """Return the current value of ``reg``."""
        reg = _check(reg)
        if reg in _SINGLE:
            return self._bytes[reg]
        if reg in _PAIRS:
            high, low = _PAIRS[reg]
            return (self._bytes[high] << 8) | self._bytes[low]
        if reg is Register.PC:
            return self._pc
        return self._sp