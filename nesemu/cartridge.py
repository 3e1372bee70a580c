"""Game cartridge holding program and graphics ROM."""

from dataclasses import dataclass
from enum import Enum


class Mirroring(Enum):
    """Nametable mirroring wired on the cartridge."""

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


@dataclass
class Cartridge:
    """PRG-ROM, CHR-ROM and the mirroring mode of a loaded game."""

    prg_rom: bytes
    chr_rom: bytes
    mirroring: Mirroring

    def read_prg(self, addr):
        """Read a PRG-ROM byte at CPU address ``addr`` ($8000 and up), mirroring small ROMs."""
        if addr < 0x8000:
            raise ValueError(f"address {addr:#06x} is below cartridge space")
        if not self.prg_rom:
            raise ValueError("cartridge has no PRG-ROM")
        return self.prg_rom[(addr - 0x8000) % len(self.prg_rom)]