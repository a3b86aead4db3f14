import pytest

from gbcore.registers import CPURegisters, Register, register_name


def test_initial_values():
    regs = CPURegisters()
    assert regs.read_register(Register.A) == 0x01
    assert regs.read_register(Register.F) == 0xB0
    assert regs.read_register(Register.AF) == 0x01B0
    assert regs.read_register(Register.B) == 0x0
    assert regs.read_register(Register.C) == 0x13
    assert regs.read_register(Register.BC) == 0x0013
    assert regs.read_register(Register.D) == 0x0
    assert regs.read_register(Register.E) == 0xD8
    assert regs.read_register(Register.DE) == 0x00D8
    assert regs.read_register(Register.H) == 0x01
    assert regs.read_register(Register.L) == 0x4D
    assert regs.read_register(Register.HL) == 0x014D
    assert regs.read_register(Register.SP) == 0xFFFE
    assert regs.read_register(Register.PC) == 0x100


def test_write_valid_8bit_register():
    regs = CPURegisters()
    regs.write_register(Register.A, 0xAB)
    assert regs.read_register(Register.A) == 0xAB


def test_write_valid_16bit_register():
    regs = CPURegisters()
    regs.write_register(Register.BC, 0xABCD)
    assert regs.read_register(Register.BC) == 0xABCD
    assert regs.read_register(Register.B) == 0xAB
    assert regs.read_register(Register.C) == 0xCD


def test_write_8bit_register_invalid_data():
    regs = CPURegisters()
    data = 0xABCD
    regs.write_register(Register.A, data)
    assert regs.read_register(Register.A) != data
    assert regs.read_register(Register.A) == data & 0xFF


def test_write_to_flag_register():
    regs = CPURegisters()
    assert regs.read_register(Register.F) == 0xB0
    regs.write_register(Register.F, 0xA0)
    assert regs.read_register(Register.F) == 0xA0
    regs.write_register(Register.F, 0xAF)
    assert regs.read_register(Register.F) == 0xA0


def test_af_pair_masks_flags():
    regs = CPURegisters()
    regs.write_register(Register.AF, 0x12FF)
    assert regs.read_register(Register.A) == 0x12
    assert regs.read_register(Register.F) == 0xF0


def test_pc_and_sp_hold_16_bits():
    regs = CPURegisters()
    regs.write_register(Register.PC, 0x1FFFF)
    regs.write_register(Register.SP, 0xBEEF)
    assert regs.read_register(Register.PC) == 0xFFFF
    assert regs.read_register(Register.SP) == 0xBEEF


@pytest.mark.parametrize(
    "reg, name",
    [
        (Register.A, "A"), (Register.F, "F"), (Register.B, "B"),
        (Register.C, "C"), (Register.D, "D"), (Register.E, "E"),
        (Register.H, "H"), (Register.L, "L"), (Register.AF, "AF"),
        (Register.BC, "BC"), (Register.DE, "DE"), (Register.HL, "HL"),
        (Register.PC, "PC"), (Register.SP, "SP"),
    ],
)
def test_register_to_string(reg, name):
    assert register_name(reg) == name


def test_unknown_register_raises():
    regs = CPURegisters()
    with pytest.raises(ValueError):
        regs.read_register("Z")
    with pytest.raises(ValueError):
        regs.write_register(42, 0)
    with pytest.raises(ValueError):
        register_name("Q")