"""The complete CPU: bit operations, rotates, shifts and miscellaneous instructions."""

from __future__ import annotations

from gbcore.alu import ArithmeticMixin
from gbcore.cpu_base import CPUBase, Flag
from gbcore.logger import log_cpu
from gbcore.registers import Register, register_name


class CPU(ArithmeticMixin, CPUBase):
    """CPU with the full instruction set built on :class:`CPUBase`.

    Where an instruction takes a register, ``Register.HL`` stands for the
    byte at the address held in HL.
    """

    @property
    def is_running(self) -> bool:
        """True unless the CPU is halted or stopped."""
        return not (self.halted or self.stopped)

    # Bit operations

    def test_bit(self, n: int, reg: Register) -> None:
        """BIT n, r: set the zero flag if bit ``n`` is clear."""
        value = self._read_target(reg)
        log_cpu("BIT %X, %s", n, register_name(reg))
        self.set_flag_register(Flag.ZERO, not (value >> n) & 0x01)
        self.set_flag_register(Flag.SUBTRACT, False)
        self.set_flag_register(Flag.HALF_CARRY, True)

    def set_bit(self, n: int, reg: Register) -> None:
        """SET n, r."""
        value = self._read_target(reg)
        log_cpu("SET %X, %s", n, register_name(reg))
        self._write_target(reg, (value | (1 << n)) & 0xFF)

    def reset_bit(self, n: int, reg: Register) -> None:
        """RES n, r."""
        value = self._read_target(reg)
        log_cpu("RES %X, %s", n, register_name(reg))
        self._write_target(reg, value & ~(1 << n) & 0xFF)

    # Miscellaneous

    def swap(self, reg: Register) -> None:
        """SWAP r: exchange the upper and lower nibbles."""
        value = self._read_target(reg)
        result = ((value & 0x0F) << 4) | ((value & 0xF0) >> 4)
        self.reset_flag_register()
        log_cpu("SWAP %s", register_name(reg))
        self.set_flag_register(Flag.ZERO, result == 0)
        self._write_target(reg, result)

    def complement(self) -> None:
        """CPL: invert every bit of A."""
        log_cpu("CPL")
        self.set_flag_register(Flag.SUBTRACT, True)
        self.set_flag_register(Flag.HALF_CARRY, True)
        self.write_register(Register.A, ~self.read_register(Register.A) & 0xFF)

    def complement_carry(self) -> None:
        """CCF: invert the carry flag."""
        carry = self.read_flag_register(Flag.CARRY)
        log_cpu("CCF")
        self.set_flag_register(Flag.SUBTRACT, False)
        self.set_flag_register(Flag.HALF_CARRY, False)
        self.set_flag_register(Flag.CARRY, not carry)

    def set_carry(self) -> None:
        """SCF: set the carry flag."""
        log_cpu("SCF")
        self.set_flag_register(Flag.CARRY, True)
        self.set_flag_register(Flag.SUBTRACT, False)
        self.set_flag_register(Flag.HALF_CARRY, False)

    def halt(self) -> None:
        """HALT: suspend until an interrupt arrives."""
        log_cpu("HALT")
        self.halted = True

    def stop(self) -> None:
        """STOP: suspend until a joypad interrupt arrives."""
        log_cpu("STOP")
        self.stopped = True

    def daa(self) -> None:
        """DAA: adjust A to binary-coded decimal after an add or subtract."""
        log_cpu("DAA")
        subtract = self.read_flag_register(Flag.SUBTRACT)
        carry = self.read_flag_register(Flag.CARRY)
        half_carry = self.read_flag_register(Flag.HALF_CARRY)
        a = self.read_register(Register.A)

        if subtract:
            if carry:
                a = (a - 0x60) & 0xFF
            if half_carry:
                a = (a - 0x06) & 0xFF
        else:
            if carry or a > 0x99:
                carry = True
                a = (a + 0x60) & 0xFF
            if half_carry or (a & 0x0F) > 0x09:
                a = (a + 0x06) & 0xFF

        self.write_register(Register.A, a)
        self.set_flag_register(Flag.HALF_CARRY, False)
        self.set_flag_register(Flag.CARRY, carry)
        self.set_flag_register(Flag.ZERO, a == 0)

    # Rotates and shifts

    def _finish_rotate(self, reg: Register, result: int, set_zero: bool, carry_out: bool) -> None:
        self._write_target(reg, result)
        self.set_flag_register(Flag.ZERO, set_zero and result == 0)
        self.set_flag_register(Flag.CARRY, carry_out)

    @staticmethod
    def _rotate_mnemonic(base: str, reg: Register, set_zero: bool) -> str:
        if reg is Register.A and not set_zero:
            return f"{base}A"
        if reg is Register.HL:
            return f"{base} (HL)"
        return f"{base} {register_name(reg)}"

    def rotate_left_a(self, use_carry: bool) -> None:
        """RLCA or, with ``use_carry``, RLA; the zero flag is always cleared."""
        self.rotate_left(Register.A, use_carry, False)

    def rotate_left(self, reg: Register, use_carry: bool, set_zero: bool = True) -> None:
        """RLC r or, with ``use_carry``, RL r through the carry flag."""
        value = self._read_target(reg)
        bit_7 = bool(value & 0x80)
        result = (value << 1) & 0xFF

        self.set_flag_register(Flag.SUBTRACT, False)
        self.set_flag_register(Flag.HALF_CARRY, False)

        if use_carry:
            log_cpu(self._rotate_mnemonic("RL", reg, set_zero))
            if self.read_flag_register(Flag.CARRY):
                result |= 0x01
        else:
            log_cpu(self._rotate_mnemonic("RLC", reg, set_zero))
            if bit_7:
                result |= 0x01

        self._finish_rotate(reg, result, set_zero, bit_7)

    def rotate_right_a(self, use_carry: bool) -> None:
        """RRCA or, with ``use_carry``, RRA; the zero flag is always cleared."""
        self.rotate_right(Register.A, use_carry, False)

    def rotate_right(self, reg: Register, use_carry: bool, set_zero: bool = True) -> None:
        """RRC r or, with ``use_carry``, RR r through the carry flag."""
        value = self._read_target(reg)
        bit_0 = bool(value & 0x01)
        result = value >> 1

        self.set_flag_register(Flag.SUBTRACT, False)
        self.set_flag_register(Flag.HALF_CARRY, False)

        if use_carry:
            if self.read_flag_register(Flag.CARRY):
                result |= 0x80
            log_cpu(self._rotate_mnemonic("RR", reg, set_zero))
        else:
            if bit_0:
                result |= 0x80
            log_cpu(self._rotate_mnemonic("RRC", reg, set_zero))

        self._finish_rotate(reg, result, set_zero, bit_0)

    def shift_left(self, reg: Register) -> None:
        """SLA r: shift left into the carry, bit 0 cleared."""
        value = self._read_target(reg)
        result = (value << 1) & 0xFF
        log_cpu("SLA %s", register_name(reg))
        self.set_flag_register(Flag.ZERO, result == 0)
        self.set_flag_register(Flag.SUBTRACT, False)
        self.set_flag_register(Flag.HALF_CARRY, False)
        self._write_target(reg, result)
        self.set_flag_register(Flag.CARRY, bool(value & 0x80))

    def shift_right(self, reg: Register, keep_msb: bool) -> None:
        """SRA r when ``keep_msb`` is true, otherwise SRL r."""
        value = self._read_target(reg)
        result = value >> 1
        if keep_msb:
            result |= value & 0x80
            log_cpu("SRA %s", register_name(reg))
        else:
            log_cpu("SRL %s", register_name(reg))

        self.set_flag_register(Flag.ZERO, result == 0)
        self.set_flag_register(Flag.SUBTRACT, False)
        self.set_flag_register(Flag.HALF_CARRY, False)
        self._write_target(reg, result)
        self.set_flag_register(Flag.CARRY, bool(value & 0x01))