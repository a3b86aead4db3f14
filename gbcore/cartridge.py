"""Game cartridges: ROM banks and the memory bank controllers that map them."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from enum import Enum, IntEnum

from gbcore.logger import log_debug, log_warn

ROM_BANK_SIZE = 16 * 1024

# Highest address the cartridge ROM area accepts.
_MAX_ADDRESS = 2 * ROM_BANK_SIZE


class CartridgeType(IntEnum):
    """Cartridge hardware codes stored in the ROM header."""

    ROM_ONLY = 0x0
    ROM_MBC1 = 0x1
    ROM_MBC1_RAM = 0x2
    ROM_MBC1_RAM_BATT = 0x3
    ROM_MBC2 = 0x5
    ROM_MBC2_BATT = 0x6
    ROM_RAM = 0x8
    ROM_RAM_BATT = 0x9
    ROM_MMM01 = 0xB
    ROM_MMM01_SRAM = 0xC
    ROM_MMM01_SRAM_BATT = 0xD
    ROM_MBC3_TIMER_BATT = 0xF
    ROM_MBC3_TIMER_RAM_BATT = 0x10
    ROM_MBC3 = 0x11
    ROM_MBC3_RAM = 0x12
    ROM_MBC3_RAM_BATT = 0x13
    ROM_MBC5 = 0x19
    ROM_MBC5_RAM = 0x1A
    ROM_MBC5_RAM_BATT = 0x1B
    ROM_MBC5_RUMBLE = 0x1C
    ROM_MBC5_RUMBLE_SRAM = 0x1D
    ROM_MBC5_RUMBLE_SRAM_BATT = 0x1E
    POCKET_CAMERA = 0x1F
    BANDAI_TAMA5 = 0xFD
    HUDSON_HUC_3 = 0xFE
    HUDSON_HUC_1 = 0xFF


class ModeSelect(Enum):
    """MBC1 banking mode."""

    ROM_MODE = 0
    RAM_MODE = 1


class CartridgeError(Exception):
    """Raised for invalid cartridge contents or accesses."""


class Cartridge(ABC):
    """A cartridge whose ROM is split into fixed-size banks."""

    def __init__(self, data: bytes, num_rom_banks: int) -> None:
        if num_rom_banks < 0:
            raise CartridgeError("Cartridge initialization failed!")
        self.cartridge_type = CartridgeType.ROM_ONLY
        self.num_rom_banks = num_rom_banks
        contents = bytes(data)
        self._rom_banks = [self._make_bank(contents, i) for i in range(num_rom_banks)]
        log_debug("initialized %d ROM banks", len(self._rom_banks))

    @staticmethod
    def _make_bank(contents: bytes, index: int) -> bytes:
        chunk = contents[index * ROM_BANK_SIZE:(index + 1) * ROM_BANK_SIZE]
        bank = bytearray(ROM_BANK_SIZE)
        bank[: len(chunk)] = chunk
        return bytes(bank)

    def _read_bank(self, index: int, offset: int) -> int:
        if index >= len(self._rom_banks):
            raise CartridgeError(f"ROM bank {index} does not exist")
        return self._rom_banks[index][offset]

    @staticmethod
    def _check_address(address: int, kind: str) -> None:
        if not 0 <= address <= _MAX_ADDRESS:
            raise CartridgeError(f"{kind}: Address out of range: {address:#x}")

    @abstractmethod
    def read(self, address: int) -> int:
        """Return the byte the cartridge maps at ``address``."""

    @abstractmethod
    def write(self, address: int, data: int) -> int:
        """Handle a write of ``data`` to ``address``."""


class ROMOnly(Cartridge):
    """A cartridge of two fixed ROM banks and no controller."""

    def __init__(self, data: bytes, num_rom_banks: int) -> None:
        super().__init__(data, num_rom_banks)
        self.cartridge_type = CartridgeType.ROM_ONLY

    def read(self, address: int) -> int:
        self._check_address(address, "ROMOnly read")
        index, offset = divmod(address, ROM_BANK_SIZE)
        return self._read_bank(index, offset)

    def write(self, address: int, data: int) -> int:
        """ROM cannot be written; the write is reported and ignored."""
        print("ROMOnly: Cannot write to ROM", file=sys.stderr)
        return 0


class MBC1(Cartridge):
    """A cartridge with the MBC1 bank controller."""

    def __init__(self, data: bytes, num_rom_banks: int) -> None:
        super().__init__(data, num_rom_banks)
        self.cartridge_type = CartridgeType.ROM_MBC1
        self._ram_enabled = False
        self._rom_bank_bits = 0x0
        self._rom_bank_number = 1
        self._mode = ModeSelect.ROM_MODE

    @property
    def ram_enabled(self) -> bool:
        return self._ram_enabled

    @property
    def rom_bank_number(self) -> int:
        return self._rom_bank_number

    @property
    def mode(self) -> ModeSelect:
        return self._mode

    def read(self, address: int) -> int:
        self._check_address(address, "MBC1 read")
        if address <= 0x3FFF:
            log_warn("MBC1 Read from Bank: 0, Address: %X", address)
            return self._read_bank(0, address)
        if address <= 0x7FFF:
            offset = address - 0x4000
            log_warn("MBC1 Read from Bank: %d, Address: %X", self._rom_bank_number, offset)
            if self._rom_bank_number >= len(self._rom_banks):
                raise CartridgeError("ROM Bank number greater than expected size")
            return self._read_bank(self._rom_bank_number, offset)
        return 0x0

    def write(self, address: int, data: int) -> int:
        data &= 0xFF
        log_warn("Writing %X to MBC1 address: %X", data, address)
        self._check_address(address, "MBC1 write")

        if address <= 0x1FFF:
            self._ram_enabled = (data & 0xF) == 0x0A
            log_warn("MBC1 RAM Enable: %d", self._ram_enabled)
        elif address <= 0x3FFF:
            if self.num_rom_banks == 0:
                raise CartridgeError("MBC1 has no ROM banks to select")
            self._rom_bank_bits = data & 0x1F
            self._rom_bank_number = (self._rom_bank_bits % self.num_rom_banks) or 1
            log_warn("MBC1 ROM Bank Number (lower bits): %d", self._rom_bank_number)
        elif address <= 0x5FFF:
            data &= 0x3
            if self._mode is ModeSelect.ROM_MODE:
                self._rom_bank_bits = (self._rom_bank_bits | (data << 5)) & 0xFF
                self._rom_bank_number = self._rom_bank_bits or 1
                log_warn("MBC1 ROM Bank Number (with upper bits): %d", self._rom_bank_number)
            else:
                log_warn("MBC1 RAM Bank Number: %X", data)
        elif address <= 0x7FFF:
            if data == 0x00:
                self._mode = ModeSelect.ROM_MODE
            elif data == 0x01:
                self._mode = ModeSelect.RAM_MODE
            log_warn("MBC1 Banking Mode Select: %s", self._mode.name)

        return address