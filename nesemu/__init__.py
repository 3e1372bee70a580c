"""A small NES emulator core: 6502 CPU subset, PPU timing, bus and iNES loading."""

__version__ = "0.1.0"