"""6502 core: registers, reset and the fetch/decode/execute step."""

import logging
from dataclasses import dataclass

from nesemu import ops_alu, ops_flow, ops_load
from nesemu.region import Region

_log = logging.getLogger(__name__)

_ZERO = 0b0000_0010
_NEGATIVE = 0b1000_0000
_RESET_VECTOR = 0xFFFC


class UnknownOpcodeError(RuntimeError):
    """Raised when the CPU fetches an opcode it does not implement."""

    def __init__(self, opcode):
        super().__init__(f"opcode {opcode:02x} is not implemented")
        self.opcode = opcode


def _without_bus(op):
    return lambda cpu, bus: op(cpu)


_OPCODES = {
    0x00: ops_flow.brk,
    0x10: ops_flow.bpl,
    0x18: _without_bus(ops_alu.clc),
    0x20: ops_flow.jsr,
    0x25: ops_alu.and_zeropage,
    0x29: ops_alu.and_immediate,
    0x45: ops_alu.eor_zeropage,
    0x48: ops_load.pha,
    0x49: ops_alu.eor_immediate,
    0x4A: ops_alu.lsr_accumulator,
    0x4C: ops_flow.jmp_absolute,
    0x60: ops_flow.rts,
    0x65: ops_alu.adc_zeropage,
    0x66: ops_alu.ror_zeropage,
    0x68: ops_load.pla,
    0x69: ops_alu.adc_immediate,
    0x78: _without_bus(ops_alu.sei),
    0x84: ops_load.sty_zeropage,
    0x85: ops_load.sta_zeropage,
    0x88: _without_bus(ops_alu.dey),
    0x8A: _without_bus(ops_load.txa),
    0x8D: ops_load.sta_absolute,
    0x8E: ops_load.stx_absolute,
    0x91: ops_load.sta_indirect_y,
    0x98: _without_bus(ops_load.tya),
    0x9A: _without_bus(ops_load.txs),
    0xA0: ops_load.ldy_immediate,
    0xA2: ops_load.ldx_immediate,
    0xA4: ops_load.ldy_zeropage,
    0xA5: ops_load.lda_zeropage,
    0xA6: ops_load.ldx_zeropage,
    0xA8: _without_bus(ops_load.tay),
    0xA9: ops_load.lda_immediate,
    0xAA: _without_bus(ops_load.tax),
    0xAC: ops_load.ldy_absolute,
    0xAD: ops_load.lda_absolute,
    0xB1: ops_load.lda_indirect_y,
    0xC6: ops_alu.dec_zeropage,
    0xC8: _without_bus(ops_alu.iny),
    0xC9: ops_alu.cmp_immediate,
    0xCA: _without_bus(ops_alu.dex),
    0xCE: ops_alu.dec_absolute,
    0xD0: ops_flow.bne,
    0xD8: _without_bus(ops_alu.cld),
    0xF0: ops_flow.beq,
}


def _describe(value, width=8):
    return f"{value:0{width}b} [{value}] [${value:x}]"


@dataclass(repr=False)
class Cpu:
    """Registers and cycle counter of the 6502."""

    a: int = 0
    x: int = 0
    y: int = 0
    sp: int = 0xFD
    pc: int = 0
    status: int = 0x24
    cycle: int = 0
    max_cycle: int = 0

    def __repr__(self):
        return (
            "Cpu { "
            f"a: {_describe(self.a)}, "
            f"x: {_describe(self.x)}, "
            f"y: {_describe(self.y)}, "
            f"sp: {_describe(self.sp)}, "
            f"pc: {_describe(self.pc, 16)}, "
            f"status: {_describe(self.status)} }}"
        )

    def reset(self, bus):
        """Load the program counter from the reset vector at $FFFC."""
        lo = bus.read(_RESET_VECTOR)
        hi = bus.read(_RESET_VECTOR + 1)
        self.pc = (hi << 8) | lo
        _log.debug("reset: pc=%s", f"{self.pc:b}")

    def set_max_cycle(self, region):
        """Set the number of CPU cycles in one frame for ``region``."""
        self.max_cycle = 29780 if region == Region.NTSC else 35464

    def step(self, bus):
        """Fetch, decode and execute one instruction; return its cycle count."""
        opcode = bus.read(self.pc)
        _log.debug("opcode %x at %d", opcode, self.pc)
        self.pc = (self.pc + 1) & 0xFFFF

        if self.cycle > self.max_cycle:
            self.cycle = 0

        op = _OPCODES.get(opcode)
        if op is None:
            raise UnknownOpcodeError(opcode)
        return op(self, bus)

    def update_zero_and_negative_flags(self, result):
        """Set Z when ``result`` is zero and N from its bit 7."""
        if result == 0:
            self.status |= _ZERO
        else:
            self.status &= ~_ZERO & 0xFF
        if result & _NEGATIVE:
            self.status |= _NEGATIVE
        else:
            self.status &= ~_NEGATIVE & 0xFF