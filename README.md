# gbcore

Building blocks of a Game Boy emulator in pure Python, with no third-party
dependencies:

- `gbcore.registers` – the CPU register file (`CPURegisters`, `Register`,
  `register_name`), started in the post-boot state (`AF=0x01B0`,
  `BC=0x0013`, `DE=0x00D8`, `HL=0x014D`, `SP=0xFFFE`, `PC=0x0100`).
- `gbcore.cpu_base` – `CPUBase`: flags (`Flag`), memory access, loads, stack
  operations, jumps, calls, returns and interrupt servicing (`Interrupt`).
- `gbcore.alu` – `ArithmeticMixin`: 8- and 16-bit arithmetic and logic.
- `gbcore.cpu` – `CPU`: everything above plus bit operations, rotates,
  shifts, `SWAP`, `CPL`, `CCF`, `SCF`, `DAA`, `HALT` and `STOP`.
- `gbcore.cartridge` – cartridges with `ROMOnly` and `MBC1` bank controllers.
- `gbcore.file_parser` – `FileParser`: reads a ROM image, decodes its header
  and builds the matching cartridge.
- `gbcore.debugger` – `Debugger`: a step debugger with line and opcode
  breakpoints.
- `gbcore.logger` and `gbcore.timing` – per-category trace logging and
  timing capture (`TimingAnalyzer`).

## Installation

```
pip install .
```

For running the test suite:

```
pip install .[test]
pytest
```

## Registers

```python
from gbcore.registers import CPURegisters, Register, register_name

regs = CPURegisters()
regs.read_register(Register.AF)       # 0x01B0

regs.write_register(Register.BC, 0xABCD)
regs.read_register(Register.B)        # 0xAB

# The low nibble of the flag register always reads as zero.
regs.write_register(Register.F, 0xAF)
regs.read_register(Register.F)        # 0xA0

register_name(Register.HL)            # "HL"
```

Passing anything that is not a `Register` raises `ValueError`.

## CPU

`CPU(memory=None)` takes any object with `read(address)` and
`write(address, value)` methods; without one it uses a plain 64 KiB block of
RAM. Each instruction is a method. Where an instruction takes a register,
`Register.HL` means the byte at the address held in HL.

```python
from gbcore.cpu import CPU
from gbcore.cpu_base import Flag
from gbcore.registers import Register

cpu = CPU()
cpu.write_register(Register.A, 0x05)
cpu.write_register(Register.B, 0x75)

cpu.alu_add(Register.B)               # A = 0x7A
cpu.daa()                             # A = 0x80 (BCD)

cpu.alu_sub(0x80)                     # immediate operand
cpu.read_flag_register(Flag.ZERO)     # True

cpu.write_register(Register.SP, 0xFFF0)
cpu.call(0x1234)                      # pushes PC, jumps
cpu.ret()                             # pops PC
```

Interrupts are serviced by `handle_interrupts()` when `interrupts_enabled` is
true, using the Interrupt Enable (`0xFFFF`) and Interrupt Flag (`0xFF0F`)
bytes of memory. Sources are checked in the order `VBLANK`, `LCD_STAT`,
`TIMER`, `SERIAL`, `JOYPAD`. Servicing any interrupt clears `halted`; only a
joypad interrupt clears `stopped`. `CPU.is_running` is false while either is
set.

## Reading a ROM

```python
from gbcore.file_parser import FileParser

parser = FileParser()
cartridge = parser.load_rom("game.gb")   # or parser.parse(rom_bytes)

print(parser.rom_name())
print(parser.cartridge_type_name())   # e.g. "ROM_ONLY" or "ROM_MBC1"
print(parser.rom_size_banks(), "ROM banks")
print(parser.ram_size_banks(), "RAM banks")
print("Super Game Boy:", parser.is_sgb())
print("Game Boy Color:", parser.is_gb_color())

first_byte = cartridge.read(0x0000)
```

Only `ROM_ONLY` and `ROM_MBC1` cartridges are built; any other cartridge
type, an unknown type code or an unknown size code raises `CartridgeError`,
as does reading outside the cartridge's address range. `get_byte` raises
`IndexError` for an offset past the end of the image.

Writing to a `ROMOnly` cartridge is ignored with a message on standard
error. On an `MBC1` cartridge, writes configure the controller rather than
the ROM: `0x0000–0x1FFF` enables RAM (low nibble `0xA`, see `ram_enabled`),
`0x2000–0x3FFF` selects the ROM bank shown at `0x4000–0x7FFF` (see
`rom_bank_number`), `0x4000–0x5FFF` sets the upper bank bits in ROM mode and
`0x6000–0x7FFF` switches `mode` between `ModeSelect.ROM_MODE` and
`ModeSelect.RAM_MODE`.

## Debugger

`Debugger(cpu, read_line=input)` is driven by calling `tick(pc, opcode)`
before each instruction. While stopped it reads one command per call; its
`step` property says whether the instruction may run and `quit` whether the
user asked to stop.

| command       | action                              |
|---------------|-------------------------------------|
| `s`           | execute one instruction             |
| `c`           | run until the next breakpoint       |
| `bl <hex>`    | break when PC reaches this address  |
| `bo <hex>`    | break before this opcode executes   |
| `p <reg>`     | print a register, e.g. `p HL`       |
| `h`           | show the command list               |
| `q`           | quit                                |

The debugger writes through the `DEBUG` log category, so enable it to see
its output.

## Logging

Output is grouped by `LogType` (`WARN`, `DEBUG`, `CPU`, `INTERRUPTS`, `IO`,
`VIDEO`, `MEMORY`), all switched off by default, and written to standard
output:

```python
from gbcore.logger import LogType, enable_logging

enable_logging(LogType.CPU, True)     # trace every executed instruction
enable_logging(LogType.WARN, True)    # MBC1 bank switching
enable_logging(LogType.DEBUG, True)   # debugger and cartridge set-up
```

## Timing

`TimingAnalyzer(file_name)` collects durations with `log_cycle_time(opcode,
dt)` (the first time per opcode is kept) and `log_time(dt)`, and writes them
with `save_cycle_times()` as `opcode,time` lines or `save_times()` as one
time per line.

## What this package does not do

It is a set of components, not a runnable emulator. There is no opcode
decoder or fetch–execute loop (instructions are called as methods), no
Game Boy memory map beyond the flat RAM the CPU falls back to, no video,
timer, sound or joypad emulation, no display window and no command-line
program.