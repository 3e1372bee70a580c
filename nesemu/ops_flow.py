"""Branch, jump, subroutine and interrupt instructions.

Each function runs one instruction whose opcode has already been fetched,
reads its operands from ``cpu.pc`` onwards and returns the cycles it took.
"""

import logging

from nesemu.ops_load import _fetch

_log = logging.getLogger(__name__)

_STACK_BASE = 0x0100
_ZERO = 0b0000_0010
_INTERRUPT = 0b0000_0100
_BREAK = 0b0001_0000
_NEGATIVE = 0b1000_0000
_IRQ_VECTOR = 0xFFFE


def _push(cpu, bus, value):
    bus.write(_STACK_BASE + cpu.sp, value & 0xFF)
    cpu.sp = (cpu.sp - 1) & 0xFF


def _pull(cpu, bus):
    cpu.sp = (cpu.sp + 1) & 0xFF
    return bus.read(_STACK_BASE + cpu.sp)


def _read_word(bus, addr):
    lo = bus.read(addr)
    hi = bus.read((addr + 1) & 0xFFFF)
    return (hi << 8) | lo


def _branch(cpu, bus, taken, name):
    """Relative branch: 2 cycles, 3 when taken, 4 when taken across a page."""
    offset = _fetch(cpu, bus)
    _log.debug("%s $%x", name, offset)
    cycles = 2
    if taken:
        cycles += 1
        signed = offset - 0x100 if offset & 0x80 else offset
        target = (cpu.pc + signed) & 0xFFFF
        if (cpu.pc & 0xFF00) != (target & 0xFF00):
            cycles += 1
        cpu.pc = target
    cpu.cycle += cycles
    return cycles


def beq(cpu, bus):
    """BEQ: branch when the zero flag is set."""
    return _branch(cpu, bus, bool(cpu.status & _ZERO), "BEQ")


def bne(cpu, bus):
    """BNE: branch when the zero flag is clear."""
    return _branch(cpu, bus, not cpu.status & _ZERO, "BNE")


def bpl(cpu, bus):
    """BPL: branch when the negative flag is clear."""
    return _branch(cpu, bus, not cpu.status & _NEGATIVE, "BPL")


def brk(cpu, bus):
    """BRK: push PC+2 and status (with B set), set I and jump through $FFFE (7 cycles)."""
    _log.debug("BRK")
    cpu.pc = (cpu.pc + 2) & 0xFFFF
    _push(cpu, bus, cpu.pc >> 8)
    _push(cpu, bus, cpu.pc & 0xFF)
    _push(cpu, bus, cpu.status | _BREAK)
    cpu.status |= _INTERRUPT
    cpu.pc = _read_word(bus, _IRQ_VECTOR)
    return 7


def jmp_absolute(cpu, bus):
    """JMP abs: continue at a 16-bit address (3 cycles)."""
    addr = _read_word(bus, cpu.pc)
    _log.debug("JMP $%x", addr)
    cpu.pc = addr
    cpu.cycle += 3
    return 3


def jsr(cpu, bus):
    """JSR abs: push the return address minus one and jump (6 cycles)."""
    lo = _fetch(cpu, bus)
    hi = _fetch(cpu, bus)
    addr = (hi << 8) | lo
    _log.debug("JSR $%x", addr)
    ret = (cpu.pc - 1) & 0xFFFF
    _push(cpu, bus, ret >> 8)
    _push(cpu, bus, ret & 0xFF)
    cpu.pc = addr
    cpu.cycle += 6
    return 6


def rts(cpu, bus):
    """RTS: pull the address pushed by JSR and continue just after it (6 cycles)."""
    lo = _pull(cpu, bus)
    hi = _pull(cpu, bus)
    addr = (hi << 8) | lo
    _log.debug("return address from stack: %x", addr)
    cpu.pc = (addr + 1) & 0xFFFF
    cpu.cycle += 6
    return 6