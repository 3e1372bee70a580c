"""Bit flag types for the PPU control, mask and status registers."""

import enum
import functools
import operator


class _Bits(enum.IntFlag):
    """Flag set that can be built from a raw byte, dropping unknown bits."""

    @classmethod
    def from_bits_truncate(cls, value):
        """Build a flag set from ``value``, keeping only the defined bits."""
        known = functools.reduce(operator.or_, (member.value for member in cls), 0)
        return cls(value & known)


class PpuCtrl(_Bits):
    """PPUCTRL ($2000): how the CPU configures the PPU."""

    NAMETABLE1 = 0b0000_0001
    NAMETABLE2 = 0b0000_0010
    INCREMENT_MODE = 0b0000_0100
    SPRITE_TABLE = 0b0000_1000
    BG_TABLE = 0b0001_0000
    SPRITE_SIZE = 0b0010_0000
    MASTER_SLAVE = 0b0100_0000
    NMI_ENABLE = 0b1000_0000


class PpuMask(_Bits):
    """PPUMASK ($2001): rendering settings."""

    GRAYSCALE = 0b0000_0001
    BG_LEFT = 0b0000_0010
    SPRITE_LEFT = 0b0000_0100
    BACKGROUND = 0b0000_1000
    SPRITES = 0b0001_0000
    RED = 0b0010_0000
    GREEN = 0b0100_0000
    BLUE = 0b1000_0000


class PpuStatus(_Bits):
    """PPUSTATUS ($2002): state reported by the PPU."""

    SPRITE_OVERFLOW = 0b0010_0000
    SPRITE_0_HIT = 0b0100_0000
    V_BLANK = 0b1000_0000