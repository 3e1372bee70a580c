"""Arithmetic, logic, shift, increment/decrement and flag instructions.

Each function runs one instruction whose opcode has already been fetched,
reads its operands from ``cpu.pc`` onwards and returns the cycles it took.
"""

import logging

from nesemu.ops_load import _fetch, _fetch_word

_log = logging.getLogger(__name__)

_CARRY = 0b0000_0001
_ZERO = 0b0000_0010
_INTERRUPT = 0b0000_0100
_DECIMAL = 0b0000_1000
_OVERFLOW = 0b0100_0000
_NEGATIVE = 0b1000_0000


def _set_flag(cpu, mask, on):
    if on:
        cpu.status |= mask
    else:
        cpu.status &= ~mask & 0xFF


def _finish(cpu, cycles):
    cpu.cycle += cycles
    return cycles


def _add_with_carry(cpu, value):
    total = cpu.a + value + (cpu.status & _CARRY)
    result = total & 0xFF
    _set_flag(cpu, _CARRY, total > 0xFF)
    same_sign_inputs = (cpu.a & _NEGATIVE) == (value & _NEGATIVE)
    sign_changed = (cpu.a & _NEGATIVE) != (result & _NEGATIVE)
    _set_flag(cpu, _OVERFLOW, same_sign_inputs and sign_changed)
    cpu.a = result
    cpu.update_zero_and_negative_flags(cpu.a)
    return _finish(cpu, 3)


def adc_immediate(cpu, bus):
    """ADC #imm: add the next byte and carry to A (3 cycles)."""
    value = _fetch(cpu, bus)
    _log.debug("ADC #$%x", value)
    return _add_with_carry(cpu, value)


def adc_zeropage(cpu, bus):
    """ADC zp: add a zero-page byte and carry to A (3 cycles)."""
    addr = _fetch(cpu, bus)
    _log.debug("ADC $%x", addr)
    return _add_with_carry(cpu, bus.read(addr))


def _logic(cpu, value, cycles):
    cpu.a = value
    cpu.update_zero_and_negative_flags(cpu.a)
    return _finish(cpu, cycles)


def and_immediate(cpu, bus):
    """AND #imm: A &= next byte (2 cycles)."""
    value = _fetch(cpu, bus)
    _log.debug("AND #$%x", value)
    return _logic(cpu, cpu.a & value, 2)


def and_zeropage(cpu, bus):
    """AND zp: A &= zero-page byte (3 cycles)."""
    addr = _fetch(cpu, bus)
    _log.debug("AND $%x", addr)
    return _logic(cpu, cpu.a & bus.read(addr), 3)


def eor_immediate(cpu, bus):
    """EOR #imm: A ^= next byte (2 cycles)."""
    value = _fetch(cpu, bus)
    _log.debug("EOR #$%x", value)
    return _logic(cpu, cpu.a ^ value, 2)


def eor_zeropage(cpu, bus):
    """EOR zp: A ^= zero-page byte (3 cycles)."""
    addr = _fetch(cpu, bus)
    _log.debug("EOR $%x", addr)
    return _logic(cpu, cpu.a ^ bus.read(addr), 3)


def cmp_immediate(cpu, bus):
    """CMP #imm: compare A with the next byte, setting Z, C and N (2 cycles)."""
    value = _fetch(cpu, bus)
    _log.debug("CMP #$%x", value)
    difference = cpu.a - value
    result = difference & 0xFF
    _set_flag(cpu, _ZERO, result == 0)
    _set_flag(cpu, _CARRY, difference >= 0)
    _set_flag(cpu, _NEGATIVE, bool(result & _NEGATIVE))
    return _finish(cpu, 2)


def dec_zeropage(cpu, bus):
    """DEC zp: decrement a zero-page byte (5 cycles)."""
    addr = _fetch(cpu, bus)
    _log.debug("DEC $%x", addr)
    result = (bus.read(addr) - 1) & 0xFF
    bus.write(addr, result)
    cpu.update_zero_and_negative_flags(result)
    return _finish(cpu, 5)


def dec_absolute(cpu, bus):
    """DEC abs: decrement the byte at a 16-bit address (6 cycles, not added to the counter)."""
    addr = _fetch_word(cpu, bus)
    _log.debug("DEC $%x", addr)
    result = (bus.read(addr) - 1) & 0xFF
    bus.write(addr, result)
    cpu.update_zero_and_negative_flags(result)
    return 6


def dex(cpu):
    """DEX: decrement X (2 cycles)."""
    _log.debug("DEX")
    cpu.x = (cpu.x - 1) & 0xFF
    cpu.update_zero_and_negative_flags(cpu.x)
    return _finish(cpu, 2)


def dey(cpu):
    """DEY: decrement Y (2 cycles)."""
    _log.debug("DEY")
    cpu.y = (cpu.y - 1) & 0xFF
    cpu.update_zero_and_negative_flags(cpu.y)
    return _finish(cpu, 2)


def iny(cpu):
    """INY: increment Y (2 cycles)."""
    cpu.y = (cpu.y + 1) & 0xFF
    cpu.update_zero_and_negative_flags(cpu.y)
    return _finish(cpu, 2)


def lsr_accumulator(cpu, bus):
    """LSR A: shift A right, bit 0 going into carry (2 cycles)."""
    _set_flag(cpu, _CARRY, bool(cpu.a & 0b0000_0001))
    cpu.a >>= 1
    cpu.update_zero_and_negative_flags(cpu.a)
    return _finish(cpu, 2)


def ror_zeropage(cpu, bus):
    """ROR zp: rotate a zero-page byte right through carry (5 cycles)."""
    addr = _fetch(cpu, bus)
    _log.debug("ROR $%x", addr)
    data = bus.read(addr)
    old_carry = cpu.status & _CARRY
    result = (data >> 1) | (old_carry << 7)
    bus.write(addr, result)
    _set_flag(cpu, _CARRY, bool(data & 0b0000_0001))
    cpu.update_zero_and_negative_flags(result)
    return _finish(cpu, 5)


def clc(cpu):
    """CLC: clear the carry flag (2 cycles)."""
    _set_flag(cpu, _CARRY, False)
    return _finish(cpu, 2)


def cld(cpu):
    """CLD: in this core it sets the decimal bit (0x08) of status (2 cycles)."""
    _log.debug("CLD")
    cpu.status |= _DECIMAL
    return _finish(cpu, 2)


def sei(cpu):
    """SEI: set the interrupt-disable flag (2 cycles)."""
    _log.debug("SEI")
    cpu.status |= _INTERRUPT
    return _finish(cpu, 2)