"""8-bit and 16-bit arithmetic and logic instructions."""

from __future__ import annotations

from gbcore.cpu_base import Flag
from gbcore.logger import log_cpu
from gbcore.registers import Register, register_name


def _signed8(value: int) -> int:
    value &= 0xFF
    return value - 0x100 if value & 0x80 else value


class ArithmeticMixin:
    """ALU instructions for a CPU built on :class:`gbcore.cpu_base.CPUBase`.

    An operand is either a register (``Register.HL`` meaning the byte at
    the address in HL) or an immediate byte.
    """

    def _operand(self, operand: Register | int) -> int:
        if isinstance(operand, Register):
            if operand is Register.HL:
                return self.read_memory()
            return self.read_register(operand)
        return operand & 0xFF

    @staticmethod
    def _describe(operand: Register | int) -> str:
        if isinstance(operand, Register):
            return register_name(operand)
        return f"{operand & 0xFF:X}"

    def alu_add(self, operand: Register | int, carry: bool = False) -> None:
        """ADD A, n or, with ``carry``, ADC A, n."""
        a = self.read_register(Register.A)
        n = self._operand(operand)
        carry_bit = int(carry and self.read_flag_register(Flag.CARRY))
        full = a + n + carry_bit
        result = full & 0xFF

        self.reset_flag_register()
        self.set_flag_register(Flag.ZERO, result == 0)
        self.set_flag_register(Flag.CARRY, full > 0xFF)
        self.set_flag_register(Flag.HALF_CARRY, (a & 0xF) + (n & 0xF) + carry_bit > 0x0F)

        log_cpu("%s A, %s", "ADC" if carry else "ADD", self._describe(operand))
        self.write_register(Register.A, result)

    def alu_sub(self, operand: Register | int, carry: bool = False) -> None:
        """SUB n or, with ``carry``, SBC A, n."""
        a = self.read_register(Register.A)
        n = self._operand(operand) & 0xFF
        carry_bit = int(carry and self.read_flag_register(Flag.CARRY))
        full = a - n - carry_bit
        result = full & 0xFF

        if carry:
            log_cpu("SBC A, %s", self._describe(operand))
        else:
            log_cpu("SUB A(%X), %s", a, self._describe(operand))

        self.write_register(Register.A, result)
        self.reset_flag_register()
        self.set_flag_register(Flag.SUBTRACT, True)
        self.set_flag_register(Flag.ZERO, result == 0)
        self.set_flag_register(Flag.HALF_CARRY, (a & 0xF) - (n & 0xF) - carry_bit < 0)
        self.set_flag_register(Flag.CARRY, full < 0)

    def alu_and(self, operand: Register | int) -> None:
        self.reset_flag_register()
        self.set_flag_register(Flag.HALF_CARRY, True)
        result = self.read_register(Register.A) & self._operand(operand) & 0xFF
        self.set_flag_register(Flag.ZERO, result == 0)
        log_cpu("AND A, %s", self._describe(operand))
        self.write_register(Register.A, result)

    def alu_or(self, operand: Register | int) -> None:
        self.reset_flag_register()
        a = self.read_register(Register.A)
        n = self._operand(operand)
        result = (a | n) & 0xFF
        self.set_flag_register(Flag.ZERO, result == 0)
        log_cpu("OR A(%X), %s(%X)", a, self._describe(operand), n)
        self.write_register(Register.A, result)

    def alu_xor(self, operand: Register | int) -> None:
        self.reset_flag_register()
        result = (self.read_register(Register.A) ^ self._operand(operand)) & 0xFF
        self.set_flag_register(Flag.ZERO, result == 0)
        log_cpu("XOR A, %s", self._describe(operand))
        self.write_register(Register.A, result)

    def alu_cp(self, operand: Register | int) -> None:
        """Compare A with n: flags as for SUB, A unchanged."""
        a = self.read_register(Register.A)
        n = self._operand(operand)
        result = (a - n) & 0xFF

        self.reset_flag_register()
        self.set_flag_register(Flag.SUBTRACT, True)
        self.set_flag_register(Flag.ZERO, result == 0)
        self.set_flag_register(Flag.HALF_CARRY, (a & 0xF) - (n & 0xF) < 0)
        self.set_flag_register(Flag.CARRY, a < n)

        log_cpu("CP A(%X), %s(%X)", a, self._describe(operand), n)

    def _read_target(self, reg: Register) -> int:
        return self.read_memory() if reg is Register.HL else self.read_register(reg)

    def _write_target(self, reg: Register, value: int) -> None:
        if reg is Register.HL:
            self.write_memory(value)
        else:
            self.write_register(reg, value)

    def alu_inc(self, reg: Register) -> None:
        """INC r or INC (HL); the carry flag is left alone."""
        n = self._read_target(reg)
        result = (n + 1) & 0xFF
        self.set_flag_register(Flag.SUBTRACT, False)
        self.set_flag_register(Flag.ZERO, result == 0)
        self.set_flag_register(Flag.HALF_CARRY, (n & 0xF) + 1 > 0x0F)
        log_cpu("INC %s", register_name(reg))
        self._write_target(reg, result)

    def alu_dec(self, reg: Register) -> None:
        """DEC r or DEC (HL); the carry flag is left alone."""
        n = self._read_target(reg)
        result = (n - 1) & 0xFF
        log_cpu("DEC %s", register_name(reg))
        self.set_flag_register(Flag.SUBTRACT, True)
        self.set_flag_register(Flag.ZERO, result == 0)
        self.set_flag_register(Flag.HALF_CARRY, (result & 0x0F) == 0x0F)
        self._write_target(reg, result)

    def alu_add_hl(self, reg: Register) -> None:
        """ADD HL, rr; the zero flag is left alone."""
        hl = self.read_register(Register.HL)
        nn = self.read_register(reg)
        full = hl + nn
        self.set_flag_register(Flag.SUBTRACT, False)
        self.set_flag_register(Flag.CARRY, (full & 0x10000) != 0)
        self.set_flag_register(Flag.HALF_CARRY, (hl & 0xFFF) + (nn & 0xFFF) > 0xFFF)
        log_cpu("ADD HL, %s", register_name(reg))
        self.write_register(Register.HL, full & 0xFFFF)

    def alu_add_sp(self, n: int) -> None:
        """ADD SP, e with a signed byte."""
        n = _signed8(n)
        sp = self.read_register(Register.SP)
        result = (sp + n) & 0xFFFF
        self.reset_flag_register()
        self.set_flag_register(Flag.CARRY, ((sp ^ n ^ result) & 0x100) == 0x100)
        self.set_flag_register(Flag.HALF_CARRY, ((sp ^ n ^ result) & 0x10) == 0x10)
        log_cpu("ADD SP, %X", n)
        self.write_register(Register.SP, result)

    def alu_inc_16bit(self, reg: Register) -> None:
        result = (self.read_register(reg) + 1) & 0xFFFF
        log_cpu("INC %s(%X)", register_name(reg), result)
        self.write_register(reg, result)

    def alu_dec_16bit(self, reg: Register) -> None:
        result = (self.read_register(reg) - 1) & 0xFFFF
        log_cpu("DEC %s", register_name(reg))
        self.write_register(reg, result)