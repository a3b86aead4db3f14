"""CPU core state: registers, flags, memory access, loads, jumps and interrupts."""

from __future__ import annotations

from enum import Enum
from typing import Protocol

from gbcore.logger import log_cpu, log_interrupts
from gbcore.registers import CPURegisters, Register, register_name

# Interrupt Enable and Interrupt Flag registers.
IE_ADDRESS = 0xFFFF
IF_ADDRESS = 0xFF0F


class Memory(Protocol):
    """Byte-addressable memory seen by the CPU."""

    def read(self, address: int) -> int: ...

    def write(self, address: int, value: int) -> None: ...


class _FlatMemory:
    """Plain 64 KiB of RAM, used when no memory map is supplied."""

    def __init__(self) -> None:
        self._data = bytearray(0x10000)

    def read(self, address: int) -> int:
        return self._data[address & 0xFFFF]

    def write(self, address: int, value: int) -> None:
        self._data[address & 0xFFFF] = value & 0xFF


class Flag(Enum):
    """Bits of the flag register."""

    ZERO = 0x80
    SUBTRACT = 0x40
    HALF_CARRY = 0x20
    CARRY = 0x10


class Interrupt(Enum):
    """Interrupt sources in priority order, with their bit and service vector."""

    VBLANK = (0, 0x40)
    LCD_STAT = (1, 0x48)
    TIMER = (2, 0x50)
    SERIAL = (3, 0x58)
    JOYPAD = (4, 0x60)

    def __init__(self, bit: int, vector: int) -> None:
        self.bit = bit
        self.vector = vector

    @property
    def mask(self) -> int:
        return 1 << self.bit


def _signed8(value: int) -> int:
    value &= 0xFF
    return value - 0x100 if value & 0x80 else value


class CPUBase:
    """Register file and the load, stack, jump and interrupt instructions."""

    def __init__(self, memory: Memory | None = None) -> None:
        self.memory: Memory = memory if memory is not None else _FlatMemory()
        self.registers = CPURegisters()
        self.interrupts_enabled = False
        self.halted = False
        self.stopped = False

    # Registers and flags

    def read_register(self, reg: Register) -> int:
        return self.registers.read_register(reg)

    def write_register(self, reg: Register, data: int) -> None:
        self.registers.write_register(reg, data)

    def read_flag_register(self, flag: Flag) -> bool:
        return bool(self.read_register(Register.F) & flag.value)

    def set_flag_register(self, flag: Flag, value: bool) -> None:
        f = self.read_register(Register.F)
        f = f | flag.value if value else f & ~flag.value
        self.write_register(Register.F, f)

    def reset_flag_register(self) -> None:
        self.write_register(Register.F, 0)

    # Memory

    def read_memory(self, reg: Register = Register.HL) -> int:
        """Read the byte at the address held in ``reg``."""
        return self.memory.read(self.read_register(reg)) & 0xFF

    def write_memory(self, value: int, reg: Register = Register.HL) -> None:
        """Write a byte to the address held in ``reg``."""
        self.memory.write(self.read_register(reg), value & 0xFF)

    # Loads

    def load(self, r1: Register, r2: Register) -> None:
        log_cpu("LD %s, %s", register_name(r1), register_name(r2))
        self.write_register(r1, self.read_register(r2))

    def load_value(self, r1: Register, n: int) -> None:
        self.write_register(r1, n)
        log_cpu("LD %s, %X", register_name(r1), n)

    def load_from_mem(self, r1: Register, r2: Register) -> None:
        log_cpu("LD %s, (%s)", register_name(r1), register_name(r2))
        self.write_register(r1, self.read_memory(r2))

    def load_from_address(self, r1: Register, nn: int) -> None:
        value = self.memory.read(nn & 0xFFFF) & 0xFF
        log_cpu("LD %s, (%X)", register_name(r1), nn)
        self.write_register(r1, value)

    def load_to_mem(self, r1: Register, r2: Register) -> None:
        value = self.read_register(r2) & 0xFF
        log_cpu("LD (%s), %s", register_name(r1), register_name(r2))
        self.write_memory(value, r1)

    def load_value_to_mem(self, r1: Register, n: int) -> None:
        self.write_memory(n, r1)
        log_cpu("LD (%s), %X", register_name(r1), n)

    def load_to_address(self, nn: int, r2: Register) -> None:
        value = self.read_register(r2) & 0xFF
        log_cpu("LD (%X), %s", nn, register_name(r2))
        self.memory.write(nn & 0xFFFF, value)

    def load_to_address_16bit(self, nn: int, r2: Register) -> None:
        """Store a 16-bit register little-endian at ``nn``."""
        value = self.read_register(r2)
        log_cpu("LD (%X), %s", nn, register_name(r2))
        self.memory.write(nn & 0xFFFF, value & 0xFF)
        self.memory.write((nn + 1) & 0xFFFF, value >> 8)

    def load_hl(self, n: int) -> None:
        """LDHL SP, n: HL = SP + signed n, with carries from the low byte."""
        n = _signed8(n)
        sp = self.read_register(Register.SP)
        result = (sp + n) & 0xFFFF
        log_cpu("LDHL %X", n)
        self.reset_flag_register()
        self.set_flag_register(Flag.CARRY, ((sp ^ n ^ result) & 0x100) == 0x100)
        self.set_flag_register(Flag.HALF_CARRY, ((sp ^ n ^ result) & 0x10) == 0x10)
        self.load_value(Register.HL, result)

    # Stack

    def push_stack(self, reg: Register) -> None:
        value = self.read_register(reg)
        sp = self.read_register(Register.SP)
        self.write_register(Register.SP, sp - 1)
        self.write_memory(value >> 8, Register.SP)
        self.write_register(Register.SP, sp - 2)
        self.write_memory(value & 0xFF, Register.SP)

    def pop_stack(self, reg: Register) -> None:
        sp = self.read_register(Register.SP)
        low = self.read_memory(Register.SP)
        self.write_register(Register.SP, sp + 1)
        high = self.read_memory(Register.SP)
        self.write_register(Register.SP, sp + 2)
        self.write_register(reg, (high << 8) | low)

    # Jumps, calls and returns

    def jump(self, value: int) -> None:
        self.write_register(Register.PC, value)

    def jump_conditional(self, value: int, flag: Flag, is_set: bool) -> None:
        if self.read_flag_register(flag) == is_set:
            self.write_register(Register.PC, value)

    def jump_hl(self) -> None:
        log_cpu("JP (HL)")
        self.write_register(Register.PC, self.read_register(Register.HL))

    def jump_add(self, value: int) -> None:
        """Relative jump by a signed byte."""
        pc = self.read_register(Register.PC)
        self.write_register(Register.PC, pc + _signed8(value))

    def jump_add_conditional(self, value: int, flag: Flag, is_set: bool) -> None:
        if self.read_flag_register(flag) == is_set:
            self.jump_add(value)

    def restart(self, n: int) -> None:
        self.push_stack(Register.PC)
        self.jump(n)

    def call(self, nn: int) -> None:
        self.push_stack(Register.PC)
        self.jump(nn)

    def call_conditional(self, nn: int, flag: Flag, is_set: bool) -> None:
        if self.read_flag_register(flag) == is_set:
            self.call(nn)

    def ret(self) -> None:
        self.pop_stack(Register.PC)

    def ret_conditional(self, flag: Flag, is_set: bool) -> None:
        if self.read_flag_register(flag) == is_set:
            self.pop_stack(Register.PC)

    def ret_enable_interrupts(self) -> None:
        self.pop_stack(Register.PC)
        self.enable_interrupts()

    # Interrupts

    def enable_interrupts(self) -> None:
        log_cpu("EI")
        self.interrupts_enabled = True

    def disable_interrupts(self) -> None:
        log_cpu("DI")
        self.interrupts_enabled = False

    def handle_interrupts(self) -> None:
        """Service the highest-priority pending interrupt, if any."""
        if not self.interrupts_enabled:
            return
        fired = self.memory.read(IE_ADDRESS) & self.memory.read(IF_ADDRESS) & 0xFF
        if not fired:
            return

        log_interrupts("Interrupt fired: %X", fired)
        self.halted = False
        self.push_stack(Register.PC)

        for interrupt in Interrupt:
            if self.handle_interrupt(interrupt, interrupt.vector):
                if interrupt is Interrupt.JOYPAD:
                    self.stopped = False
                return

    def handle_interrupt(self, flag: Interrupt, vector: int) -> bool:
        if not (self.get_interrupt_flag_bit(flag) and self.get_interrupt_enable_bit(flag)):
            return False
        log_interrupts("Handling interrupt: %s", flag.name)
        self.set_interrupt_flag_bit(flag, False)
        self.jump(vector)
        self.interrupts_enabled = False
        return True

    def _get_bit(self, address: int, flag: Interrupt) -> bool:
        return bool(self.memory.read(address) & flag.mask)

    def _set_bit(self, address: int, flag: Interrupt, value: bool) -> None:
        current = self.memory.read(address)
        current = current | flag.mask if value else current & ~flag.mask
        self.memory.write(address, current & 0xFF)

    def get_interrupt_enable_bit(self, flag: Interrupt) -> bool:
        return self._get_bit(IE_ADDRESS, flag)

    def get_interrupt_flag_bit(self, flag: Interrupt) -> bool:
        return self._get_bit(IF_ADDRESS, flag)

    def set_interrupt_enable_bit(self, flag: Interrupt, value: bool) -> None:
        self._set_bit(IE_ADDRESS, flag, value)

    def set_interrupt_flag_bit(self, flag: Interrupt, value: bool) -> None:
        self._set_bit(IF_ADDRESS, flag, value)