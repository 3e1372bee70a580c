"""Load, store, register transfer and stack instructions.

Each function runs one instruction whose opcode has already been fetched,
reads its operands from ``cpu.pc`` onwards and returns the cycles it took.
"""

import logging

_log = logging.getLogger(__name__)

_STACK_BASE = 0x0100


def _fetch(cpu, bus):
    """Read the byte at the program counter and advance past it."""
    value = bus.read(cpu.pc)
    cpu.pc = (cpu.pc + 1) & 0xFFFF
    return value


def _fetch_word(cpu, bus):
    """Read a little-endian 16-bit operand and advance past it."""
    lo = _fetch(cpu, bus)
    hi = _fetch(cpu, bus)
    return (hi << 8) | lo


def _load(cpu, register, value, cycles):
    setattr(cpu, register, value)
    cpu.update_zero_and_negative_flags(value)
    cpu.cycle += cycles
    return cycles


def lda_immediate(cpu, bus):
    """LDA #imm: load the next byte into A (2 cycles)."""
    value = _fetch(cpu, bus)
    _log.debug("LDA #$%x", value)
    return _load(cpu, "a", value, 2)


def lda_zeropage(cpu, bus):
    """LDA zp: load A from a zero-page address (3 cycles)."""
    addr = _fetch(cpu, bus)
    value = bus.read(addr)
    _log.debug("LDA $%x", addr)
    return _load(cpu, "a", value, 3)


def lda_absolute(cpu, bus):
    """LDA abs: load A from a 16-bit address (4 cycles)."""
    addr = _fetch_word(cpu, bus)
    _log.debug("LDA $%x", addr)
    return _load(cpu, "a", bus.read(addr), 4)


def lda_indirect_y(cpu, bus):
    """LDA (zp),Y: load A through a zero-page pointer plus Y (5, or 6 on a page cross)."""
    pointer = _fetch(cpu, bus)
    lo = bus.read(pointer)
    hi = bus.read((pointer + 1) & 0xFF)
    base = (hi << 8) | lo
    addr = (base + cpu.y) & 0xFFFF
    cpu.a = bus.read(addr)
    cycles = 5 if (base & 0xFF00) == (addr & 0xFF00) else 6
    _log.debug("LDA ($%x), Y", pointer)
    cpu.update_zero_and_negative_flags(cpu.a)
    return cycles


def ldx_immediate(cpu, bus):
    """LDX #imm: load the next byte into X (2 cycles)."""
    value = _fetch(cpu, bus)
    _log.debug("LDX #$%x", value)
    return _load(cpu, "x", value, 2)


def ldx_zeropage(cpu, bus):
    """LDX zp: load X from a zero-page address (3 cycles)."""
    addr = _fetch(cpu, bus)
    _log.debug("LDX $%x", addr)
    return _load(cpu, "x", bus.read(addr), 3)


def ldy_immediate(cpu, bus):
    """LDY #imm: load the next byte into Y (2 cycles)."""
    value = _fetch(cpu, bus)
    _log.debug("LDY #$%x", value)
    return _load(cpu, "y", value, 2)


def ldy_zeropage(cpu, bus):
    """LDY zp: load Y from a zero-page address (3 cycles)."""
    addr = _fetch(cpu, bus)
    _log.debug("LDY $%x", addr)
    return _load(cpu, "y", bus.read(addr), 3)


def ldy_absolute(cpu, bus):
    """LDY abs: load Y from a 16-bit address (4 cycles)."""
    addr = _fetch_word(cpu, bus)
    _log.debug("LDY $%x", addr)
    return _load(cpu, "y", bus.read(addr), 4)


def sta_zeropage(cpu, bus):
    """STA zp: store A at a zero-page address (3 cycles)."""
    addr = _fetch(cpu, bus)
    _log.debug("STA $%x", addr)
    bus.write(addr, cpu.a)
    cpu.cycle += 3
    return 3


def sta_absolute(cpu, bus):
    """STA abs: store A at a 16-bit address (4 cycles)."""
    addr = _fetch_word(cpu, bus)
    _log.debug("STA $%x", addr)
    bus.write(addr, cpu.a)
    cpu.cycle += 4
    return 4


def sta_indirect_y(cpu, bus):
    """STA (zp),Y: store A through a zero-page pointer plus Y (6 cycles)."""
    pointer = _fetch(cpu, bus)
    lo = bus.read(pointer)
    hi = bus.read(pointer + 1)
    addr = (((hi << 8) | lo) + cpu.y) & 0xFFFF
    _log.debug("STA ($%x), Y", pointer)
    bus.write(addr, cpu.a)
    cpu.cycle += 6
    return 6


def stx_absolute(cpu, bus):
    """STX abs: store X at a 16-bit address (4 cycles)."""
    addr = _fetch_word(cpu, bus)
    _log.debug("STX $%x", addr)
    bus.write(addr, cpu.x)
    return 4


def sty_zeropage(cpu, bus):
    """STY zp: store Y at a zero-page address (3 cycles)."""
    addr = _fetch(cpu, bus)
    bus.write(addr, cpu.y)
    _log.debug("STY $%x", addr)
    cpu.cycle += 3
    return 3


def tax(cpu):
    """TAX: copy A into X (2 cycles)."""
    return _load(cpu, "x", cpu.a, 2)


def tay(cpu):
    """TAY: copy A into Y (2 cycles)."""
    return _load(cpu, "y", cpu.a, 2)


def txa(cpu):
    """TXA: copy X into A (2 cycles)."""
    _log.debug("TXA")
    return _load(cpu, "a", cpu.x, 2)


def tya(cpu):
    """TYA: copy Y into A (2 cycles)."""
    _log.debug("TYA")
    return _load(cpu, "a", cpu.y, 2)


def txs(cpu):
    """TXS: copy X into the stack pointer without touching flags (2 cycles)."""
    _log.debug("TXS")
    cpu.sp = cpu.x
    cpu.cycle += 2
    return 2


def pha(cpu, bus):
    """PHA: push A onto the stack (3 cycles)."""
    _log.debug("PHA")
    bus.write(_STACK_BASE + cpu.sp, cpu.a)
    cpu.sp = (cpu.sp - 1) & 0xFF
    cpu.cycle += 3
    return 3


def pla(cpu, bus):
    """PLA: pull A from the stack (4 cycles)."""
    cpu.sp = (cpu.sp + 1) & 0xFF
    cpu.a = bus.read(_STACK_BASE + cpu.sp)
    cpu.update_zero_and_negative_flags(cpu.a)
    return 4