"""Picture processing unit: registers, timing and nametable memory."""

from dataclasses import dataclass, field

from nesemu.cartridge import Mirroring
from nesemu.region import Region
from nesemu.registers import PpuCtrl, PpuMask, PpuStatus


def _describe(value):
    value = int(value)
    return f"{value:08b} [{value}] [${value:x}]"


@dataclass(repr=False)
class Ppu:
    """PPU state; timing limits are set by :meth:`set_region`."""

    ctrl: PpuCtrl = PpuCtrl(0)
    mask: PpuMask = PpuMask(0)
    status: PpuStatus = PpuStatus(0)
    v: int = 0
    t: int = 0
    x: int = 0
    w: bool = False
    vram: bytearray = field(default_factory=lambda: bytearray(2048))
    scanlines: int = 0
    cycles: int = 0
    frame_rendered: int = 0
    region: Region = Region.NTSC
    v_blank_limit: int = 0
    pre_render_scanline: int = 0
    scanlines_limit: int = 0
    cycles_limit: int = 0

    def __repr__(self):
        parts = [
            f"ctrl={_describe(self.ctrl)!r}",
            f"mask={_describe(self.mask)!r}",
            f"status={_describe(self.status)!r}",
            f"v={_describe(self.v)!r}",
            f"t={_describe(self.t)!r}",
            f"x={_describe(self.x)!r}",
            f"w={str(self.w).lower()!r}",
            f"scanlines={_describe(self.scanlines)!r}",
            f"cycles={_describe(self.cycles)!r}",
        ]
        return f"Ppu({', '.join(parts)})"

    def tick(self):
        """Advance the PPU by one dot."""
        if self.cycles >= self.cycles_limit:
            self.cycles = 0
            self.scanlines += 1
        if self.scanlines >= self.scanlines_limit:
            self.scanlines = 0

        if self.scanlines == 240:
            self.cycles += 1
            return
        if 241 <= self.scanlines <= self.v_blank_limit and self.cycles == 0:
            self.status |= PpuStatus.V_BLANK
        elif self.scanlines == self.pre_render_scanline and self.cycles == 0:
            self.status &= ~PpuStatus.V_BLANK

        self.cycles += 1

    def handle_write(self, addr, val, cartridge):
        """Handle a CPU write to a PPU register."""
        val &= 0xFF
        if addr == 0x2000:
            self.ctrl = PpuCtrl.from_bits_truncate(val)
        elif addr == 0x2001:
            self.mask = PpuMask.from_bits_truncate(val)
        elif addr == 0x2005:
            if not self.w:
                self.t = (self.t & 0xFFE0) | (val >> 3)
                self.x = val & 0b111
                self.w = True
            else:
                self.t = (self.t & 0x8C1F) | ((val & 0x07) << 12) | ((val & 0xF8) << 2)
                self.w = False
        elif addr == 0x2006:
            if not self.w:
                self.t = (self.t & 0x00FF) | (val << 8)
                self.w = True
            else:
                self.t = (self.t & 0xFF00) | val
                self.v = self.t
                self.w = False
        elif addr == 0x2007:
            self.ppu_write(self.v, val, cartridge)
            step = 32 if PpuCtrl.INCREMENT_MODE in self.ctrl else 1
            self.v = (self.v + step) & 0xFFFF

    def handle_read(self, addr):
        """Handle a CPU read from a PPU register; only PPUSTATUS is readable."""
        if addr == 0x2002:
            return int(self.status)
        print(f"PPU address {addr} is not readable")
        return 0

    def ppu_write(self, addr, val, cartridge):
        """Write ``val`` into PPU address space at ``addr``."""
        if 0x0000 <= addr < 0x1FFF:
            # Pattern tables live in CHR-ROM, which cannot be written.
            return
        if 0x2000 <= addr < 0x2FFF:
            self._write_nametable(addr - 0x2000, val, cartridge.mirroring)
        elif 0x3000 <= addr < 0x3EFF:
            self._write_nametable(addr - 0x3000, val, cartridge.mirroring)
        elif 0x3F00 <= addr < 0x3FFF:
            # Palette RAM is not modelled.
            return
        else:
            raise ValueError(f"unsupported PPU write address {addr:#06x}")

    def _write_nametable(self, offset, val, mirroring):
        table = offset // 0x400
        first_tables = (0, 2) if mirroring is Mirroring.VERTICAL else (0, 1)
        base = 0 if table in first_tables else 1024
        self.vram[offset % 0x400 + base] = val & 0xFF

    def set_region(self, region):
        """Set the region and the frame timing that comes with it."""
        self.region = region
        ntsc = region == Region.NTSC
        self.scanlines_limit = 262 if ntsc else 312
        self.cycles_limit = 341
        self.v_blank_limit = 260 if ntsc else 310
        self.pre_render_scanline = 261 if ntsc else 311