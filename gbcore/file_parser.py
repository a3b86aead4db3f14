"""ROM file loading and cartridge header decoding."""

from __future__ import annotations

from pathlib import Path

from gbcore.cartridge import MBC1, Cartridge, CartridgeError, CartridgeType, ROMOnly

_TITLE = slice(0x134, 0x143)
_CGB_FLAG = 0x143
_SGB_FLAG = 0x146
_CARTRIDGE_TYPE = 0x147
_ROM_SIZE = 0x148
_RAM_SIZE = 0x149

_ROM_BANKS = {
    0x0: 2,
    0x1: 4,
    0x2: 8,
    0x3: 16,
    0x4: 32,
    0x5: 64,
    0x6: 128,
    0x52: 72,
    0x53: 80,
    0x54: 96,
}

_RAM_BANKS = {0x0: 0, 0x1: 1, 0x2: 1, 0x3: 4, 0x4: 16}

_CARTRIDGE_CLASSES: dict[CartridgeType, type[Cartridge]] = {
    CartridgeType.ROM_ONLY: ROMOnly,
    CartridgeType.ROM_MBC1: MBC1,
}


class FileParser:
    """Reads a ROM image and answers questions about its header."""

    def __init__(self) -> None:
        self._buffer = b""

    @property
    def data(self) -> bytes:
        """The whole ROM image last loaded."""
        return self._buffer

    def __len__(self) -> int:
        return len(self._buffer)

    def load_rom(self, file_name: str | Path) -> Cartridge:
        """Read a ROM file and build the cartridge it describes."""
        return self.parse(Path(file_name).read_bytes())

    def parse(self, data: bytes) -> Cartridge:
        """Build the cartridge described by an in-memory ROM image."""
        self._buffer = bytes(data)
        cartridge_type = self.cartridge_type()
        cartridge_class = _CARTRIDGE_CLASSES.get(cartridge_type)
        if cartridge_class is None:
            raise CartridgeError(f"Cartridge type {cartridge_type.name} not supported")
        return cartridge_class(self._buffer, self.rom_size_banks())

    def get_byte(self, index: int) -> int:
        if not 0 <= index < len(self._buffer):
            raise IndexError(f"ROM offset out of range: {index:#x}")
        return self._buffer[index]

    def rom_name(self) -> str:
        """The title field of the header, up to its first NUL byte."""
        self.get_byte(_TITLE.stop - 1)
        title = self._buffer[_TITLE].split(b"\0", 1)[0]
        return title.decode("latin-1")

    def cartridge_type(self) -> CartridgeType:
        code = self.get_byte(_CARTRIDGE_TYPE)
        try:
            return CartridgeType(code)
        except ValueError:
            raise CartridgeError(f"unknown cartridge type {code:#x}") from None

    def cartridge_type_name(self) -> str:
        return self.cartridge_type().name

    def rom_size_banks(self) -> int:
        code = self.get_byte(_ROM_SIZE)
        try:
            return _ROM_BANKS[code]
        except KeyError:
            raise CartridgeError(f"unknown ROM size code {code:#x}") from None

    def ram_size_banks(self) -> int:
        code = self.get_byte(_RAM_SIZE)
        try:
            return _RAM_BANKS[code]
        except KeyError:
            raise CartridgeError(f"unknown RAM size code {code:#x}") from None

    def is_gb_color(self) -> bool:
        return self.get_byte(_CGB_FLAG) == 0x80

    def is_sgb(self) -> bool:
        return self.get_byte(_SGB_FLAG) == 0x03