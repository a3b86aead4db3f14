import pytest

from gbcore.cpu import CPU
from gbcore.cpu_base import Flag, Interrupt
from gbcore.registers import Register

HL_ADDRESS = 0xFFF0


@pytest.fixture
def cpu():
    return CPU()


@pytest.fixture
def hl_cpu():
    cpu = CPU()
    cpu.write_register(Register.HL, HL_ADDRESS)
    return cpu


def flags(cpu):
    return (
        cpu.read_flag_register(Flag.ZERO),
        cpu.read_flag_register(Flag.SUBTRACT),
        cpu.read_flag_register(Flag.HALF_CARRY),
        cpu.read_flag_register(Flag.CARRY),
    )


# Bit operations

def test_bit_register(cpu):
    cpu.write_register(Register.B, 0xAB)
    cpu.test_bit(2, Register.B)
    assert cpu.read_flag_register(Flag.ZERO) is True
    assert cpu.read_flag_register(Flag.SUBTRACT) is False
    assert cpu.read_flag_register(Flag.HALF_CARRY) is True


def test_bit_hl(hl_cpu):
    hl_cpu.write_memory(0xAB)
    assert hl_cpu.read_memory() == 0xAB
    hl_cpu.test_bit(1, Register.HL)
    assert hl_cpu.read_flag_register(Flag.ZERO) is False
    assert hl_cpu.read_flag_register(Flag.SUBTRACT) is False
    assert hl_cpu.read_flag_register(Flag.HALF_CARRY) is True


def test_set_bit_register(cpu):
    cpu.write_register(Register.B, 0xAB)
    cpu.set_bit(2, Register.B)
    assert cpu.read_register(Register.B) == 0xAF


def test_set_bit_hl(hl_cpu):
    hl_cpu.write_memory(0xA9)
    hl_cpu.set_bit(1, Register.HL)
    assert hl_cpu.read_memory() == 0xAB


def test_reset_bit_register(cpu):
    cpu.write_register(Register.B, 0xAB)
    cpu.reset_bit(1, Register.B)
    assert cpu.read_register(Register.B) == 0xA9


def test_reset_bit_hl(hl_cpu):
    hl_cpu.write_memory(0xAF)
    hl_cpu.reset_bit(2, Register.HL)
    assert hl_cpu.read_memory() == 0xAB


# Miscellaneous

def test_swap_register(cpu):
    cpu.write_register(Register.A, 0xAB)
    cpu.swap(Register.A)
    assert cpu.read_register(Register.A) == 0xBA
    assert flags(cpu) == (False, False, False, False)


def test_swap_hl(hl_cpu):
    hl_cpu.write_memory(0xAB)
    hl_cpu.swap(Register.HL)
    assert hl_cpu.read_memory() == 0xBA
    assert flags(hl_cpu) == (False, False, False, False)


def test_swap_zero_sets_zero_flag(cpu):
    cpu.write_register(Register.C, 0x00)
    cpu.swap(Register.C)
    assert cpu.read_register(Register.C) == 0x00
    assert cpu.read_flag_register(Flag.ZERO) is True


def test_complement(cpu):
    cpu.write_register(Register.A, 0xAB)
    cpu.complement()
    assert cpu.read_register(Register.A) == 0x54
    assert cpu.read_flag_register(Flag.SUBTRACT) is True
    assert cpu.read_flag_register(Flag.HALF_CARRY) is True


def test_complement_carry(cpu):
    cpu.set_flag_register(Flag.CARRY, True)
    cpu.complement_carry()
    assert cpu.read_flag_register(Flag.SUBTRACT) is False
    assert cpu.read_flag_register(Flag.HALF_CARRY) is False
    assert cpu.read_flag_register(Flag.CARRY) is False


def test_set_carry(cpu):
    cpu.reset_flag_register()
    cpu.set_flag_register(Flag.CARRY, False)
    cpu.set_carry()
    assert cpu.read_flag_register(Flag.SUBTRACT) is False
    assert cpu.read_flag_register(Flag.HALF_CARRY) is False
    assert cpu.read_flag_register(Flag.CARRY) is True


def test_halt_resumes_on_interrupt(cpu):
    cpu.halt()
    assert cpu.is_running is False
    cpu.enable_interrupts()
    cpu.set_interrupt_enable_bit(Interrupt.VBLANK, True)
    cpu.set_interrupt_flag_bit(Interrupt.VBLANK, True)
    assert cpu.get_interrupt_enable_bit(Interrupt.VBLANK)
    assert cpu.get_interrupt_flag_bit(Interrupt.VBLANK)
    cpu.handle_interrupts()
    assert cpu.is_running is True
    assert cpu.read_register(Register.PC) == Interrupt.VBLANK.vector


def test_stop_resumes_on_joypad_interrupt(cpu):
    cpu.stop()
    assert cpu.is_running is False
    cpu.enable_interrupts()
    cpu.set_interrupt_enable_bit(Interrupt.JOYPAD, True)
    cpu.set_interrupt_flag_bit(Interrupt.JOYPAD, True)
    cpu.handle_interrupts()
    assert cpu.is_running is True
    assert cpu.read_register(Register.PC) == Interrupt.JOYPAD.vector


def test_enable_interrupts(cpu):
    cpu.enable_interrupts()
    assert cpu.interrupts_enabled is True


def test_disable_interrupts(cpu):
    cpu.enable_interrupts()
    cpu.disable_interrupts()
    assert cpu.interrupts_enabled is False


def test_daa_after_add(cpu):
    cpu.write_register(Register.A, 0x05)
    cpu.write_register(Register.B, 0x75)
    cpu.alu_add(Register.B)
    assert cpu.read_register(Register.A) == 0x7A
    cpu.daa()
    assert cpu.read_register(Register.A) == 0x80


def test_daa_after_add_boundary(cpu):
    cpu.write_register(Register.A, 0x90)
    cpu.write_register(Register.B, 0x10)
    cpu.alu_add(Register.B)
    assert cpu.read_register(Register.A) == 0xA0
    cpu.daa()
    assert cpu.read_register(Register.A) == 0x00
    assert cpu.read_flag_register(Flag.CARRY) is True
    assert cpu.read_flag_register(Flag.ZERO) is True


def test_daa_after_sub(cpu):
    cpu.write_register(Register.A, 0x80)
    cpu.write_register(Register.B, 0x75)
    cpu.alu_sub(Register.B)
    assert cpu.read_register(Register.A) == 0x0B
    cpu.daa()
    assert cpu.read_register(Register.A) == 0x05


# Rotates on A

def test_rlca(cpu):
    cpu.write_register(Register.A, 0xC6)
    cpu.rotate_left_a(False)
    assert cpu.read_register(Register.A) == 0x8D
    assert flags(cpu) == (False, False, False, True)


@pytest.mark.parametrize("carry, result", [(False, 0x8C), (True, 0x8D)])
def test_rla(cpu, carry, result):
    cpu.write_register(Register.A, 0xC6)
    cpu.set_flag_register(Flag.CARRY, carry)
    cpu.rotate_left_a(True)
    assert cpu.read_register(Register.A) == result
    assert flags(cpu) == (False, False, False, True)


def test_rrca(cpu):
    cpu.write_register(Register.A, 0xC5)
    cpu.rotate_right_a(False)
    assert cpu.read_register(Register.A) == 0xE2
    assert flags(cpu) == (False, False, False, True)


@pytest.mark.parametrize("carry, result", [(False, 0x62), (True, 0xE2)])
def test_rra(cpu, carry, result):
    cpu.write_register(Register.A, 0xC5)
    cpu.set_flag_register(Flag.CARRY, carry)
    cpu.rotate_right_a(True)
    assert cpu.read_register(Register.A) == result
    assert flags(cpu) == (False, False, False, True)


def test_rla_never_sets_zero(cpu):
    cpu.write_register(Register.A, 0x80)
    cpu.set_flag_register(Flag.CARRY, False)
    cpu.rotate_left_a(True)
    assert cpu.read_register(Register.A) == 0x00
    assert cpu.read_flag_register(Flag.ZERO) is False


# CB-prefixed rotates and shifts

def test_rlc_register(cpu):
    cpu.write_register(Register.B, 0xC6)
    cpu.rotate_left(Register.B, False, True)
    assert cpu.read_register(Register.B) == 0x8D
    assert flags(cpu) == (False, False, False, True)


def test_rlc_hl(hl_cpu):
    hl_cpu.write_memory(0xC6)
    hl_cpu.rotate_left(Register.HL, False, True)
    assert hl_cpu.read_memory() == 0x8D
    assert flags(hl_cpu) == (False, False, False, True)


@pytest.mark.parametrize("carry, result", [(False, 0x8C), (True, 0x8D)])
def test_rl_register(cpu, carry, result):
    cpu.write_register(Register.B, 0xC6)
    cpu.set_flag_register(Flag.CARRY, carry)
    cpu.rotate_left(Register.B, True, True)
    assert cpu.read_register(Register.B) == result
    assert flags(cpu) == (False, False, False, True)


def test_rrc_register(cpu):
    cpu.write_register(Register.B, 0xC5)
    cpu.rotate_right(Register.B, False, True)
    assert cpu.read_register(Register.B) == 0xE2
    assert flags(cpu) == (False, False, False, True)


def test_rrc_hl(hl_cpu):
    hl_cpu.write_memory(0xC5)
    hl_cpu.rotate_right(Register.HL, False, True)
    assert hl_cpu.read_memory() == 0xE2
    assert flags(hl_cpu) == (False, False, False, True)


@pytest.mark.parametrize("carry, result", [(False, 0x62), (True, 0xE2)])
def test_rr_register(cpu, carry, result):
    cpu.write_register(Register.B, 0xC5)
    cpu.set_flag_register(Flag.CARRY, carry)
    cpu.rotate_right(Register.B, True, True)
    assert cpu.read_register(Register.B) == result
    assert flags(cpu) == (False, False, False, True)


def test_rl_sets_zero_when_requested(cpu):
    cpu.write_register(Register.B, 0x80)
    cpu.set_flag_register(Flag.CARRY, False)
    cpu.rotate_left(Register.B, True, True)
    assert cpu.read_register(Register.B) == 0x00
    assert cpu.read_flag_register(Flag.ZERO) is True


def test_sla(cpu):
    cpu.write_register(Register.B, 0xC5)
    cpu.shift_left(Register.B)
    assert cpu.read_register(Register.B) == 0x8A
    assert flags(cpu) == (False, False, False, True)


def test_sra(cpu):
    cpu.write_register(Register.B, 0xC5)
    cpu.shift_right(Register.B, True)
    assert cpu.read_register(Register.B) == 0xE2
    assert flags(cpu) == (False, False, False, True)


def test_srl(cpu):
    cpu.write_register(Register.B, 0xC5)
    cpu.shift_right(Register.B, False)
    assert cpu.read_register(Register.B) == 0x62
    assert flags(cpu) == (False, False, False, True)


def test_shift_right_hl(hl_cpu):
    hl_cpu.write_memory(0xC5)
    hl_cpu.shift_right(Register.HL, False)
    assert hl_cpu.read_memory() == 0x62