"""CPU address bus connecting RAM, the PPU and the cartridge."""

from nesemu.ppu import Ppu


class NoCartridgeError(RuntimeError):
    """Raised when the bus needs a cartridge and none is inserted."""


class Bus:
    """Routes CPU reads and writes to the right device."""

    def __init__(self):
        self.ram = bytearray(2048)
        self.ppu = Ppu()
        self.cartridge = None

    @staticmethod
    def _check(addr):
        if not 0 <= addr <= 0xFFFF:
            raise ValueError(f"address {addr:#x} is outside the 16-bit address space")

    def _require_cartridge(self):
        if self.cartridge is None:
            raise NoCartridgeError("insert a cartridge first")
        return self.cartridge

    def read(self, addr):
        """Read one byte from ``addr``."""
        self._check(addr)
        if addr <= 0x1FFF:
            return self.ram[addr & 0x07FF]
        if addr <= 0x3FFF:
            return self.ppu.handle_read(addr)
        if addr <= 0x7FFF:
            # APU, I/O, expansion ROM and save RAM are not modelled.
            return 0
        return self._require_cartridge().read_prg(addr)

    def write(self, addr, val):
        """Write one byte to ``addr``; a cartridge must be inserted."""
        self._check(addr)
        cartridge = self._require_cartridge()
        val &= 0xFF
        if addr <= 0x1FFF:
            self.ram[addr & 0x07FF] = val
        elif addr <= 0x3FFF:
            self.ppu.handle_write(addr, val, cartridge)

    def set_cartridge(self, cartridge):
        """Insert a cartridge."""
        self.cartridge = cartridge

    def view_ppu_status(self):
        """Print the PPU state."""
        print(repr(self.ppu))

    def set_ppu_region(self, region):
        """Set the PPU's region timing."""
        self.ppu.set_region(region)

    def ppu_tick(self, cpu_cycles):
        """Advance the PPU one dot per CPU cycle given."""
        for _ in range(cpu_cycles):
            self.ppu.tick()