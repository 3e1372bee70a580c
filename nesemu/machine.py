"""The whole console: iNES loading, start-up and the main run loop."""

import argparse
import logging
import sys

from nesemu.bus import Bus
from nesemu.cartridge import Cartridge, Mirroring
from nesemu.cpu import Cpu
from nesemu.region import Region

_log = logging.getLogger(__name__)

DEFAULT_ROM = "Donkey Kong (JU) [T-Span].nes"

_MAGIC = b"NES\x1a"
_HEADER_SIZE = 16
_PRG_BANK_SIZE = 16 * 1024
_CHR_BANK_SIZE = 8 * 1024
_FLAG_VERTICAL = 0b0000_0001
_FLAG_TRAINER = 0b0000_0100
_FLAG_PAL = 0b0000_0001


class InvalidRomError(ValueError):
    """Raised when a file is not a complete iNES image."""


def _read_exact(stream, size, what):
    data = stream.read(size)
    if len(data) != size:
        raise InvalidRomError(f"could not read {what}: expected {size} bytes, got {len(data)}")
    return data


class MochaNES:
    """CPU and bus wired together, with the region of the loaded game."""

    def __init__(self):
        self.cpu = Cpu()
        self.bus = Bus()
        self.region = Region.NTSC

    def init(self, path=DEFAULT_ROM):
        """Load the ROM at ``path``, reset the CPU and apply the game's region timing."""
        self.load_rom(path)
        self.cpu.reset(self.bus)
        self.cpu.set_max_cycle(self.region)
        self.bus.set_ppu_region(self.region)

    def run(self, steps=None):
        """Execute ``steps`` instructions, or forever when ``steps`` is None.

        After every instruction the CPU and PPU state are printed and the PPU is
        advanced by the instruction's cycle count. Returns the total cycles run.
        """
        total = 0
        executed = 0
        while steps is None or executed < steps:
            cycles = self.cpu.step(self.bus)
            print(repr(self.cpu))
            self.bus.ppu_tick(cycles)
            self.bus.view_ppu_status()
            total += cycles
            executed += 1
        return total

    def load_rom(self, path):
        """Read an iNES file and insert its cartridge into the bus."""
        with open(path, "rb") as stream:
            header = _read_exact(stream, _HEADER_SIZE, "header")
            if header[:4] != _MAGIC:
                raise InvalidRomError(f"{path} is not an NES game")

            if header[6] & _FLAG_TRAINER:
                _log.info("ROM has a trainer")

            mirroring = Mirroring.VERTICAL if header[6] & _FLAG_VERTICAL else Mirroring.HORIZONTAL

            prg_banks = header[4]
            prg_size = prg_banks * _PRG_BANK_SIZE
            _log.info("prg_size: %d, prg_banks: %d", prg_size, prg_banks)
            chr_size = header[5] * _CHR_BANK_SIZE

            self.region = Region.PAL if header[7] & _FLAG_PAL else Region.NTSC

            prg_rom = _read_exact(stream, prg_size, "PRG-ROM")
            chr_rom = _read_exact(stream, chr_size, "CHR-ROM")

        self.bus.set_cartridge(Cartridge(prg_rom, chr_rom, mirroring))


def main(argv=None):
    """Start the emulator on a ROM file."""
    parser = argparse.ArgumentParser(prog="nesemu", description="Run an NES ROM.")
    parser.add_argument("rom", nargs="?", default=DEFAULT_ROM, help="path of the .nes file")
    parser.add_argument(
        "--steps", type=int, default=None, help="number of instructions to run (default: forever)"
    )
    args = parser.parse_args(argv)

    machine = MochaNES()
    try:
        machine.init(args.rom)
        machine.run(args.steps)
    except (OSError, ValueError, RuntimeError) as error:
        print(f"nesemu: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())