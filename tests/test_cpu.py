import pytest

from nesemu.bus import Bus
from nesemu.cartridge import Cartridge, Mirroring
from nesemu.cpu import Cpu, UnknownOpcodeError
from nesemu.region import Region

ZERO = 0b0000_0010
NEGATIVE = 0b1000_0000


def make_bus(code=b"", reset_to=0x8000):
    prg = bytearray(0x8000)
    prg[: len(code)] = code
    prg[0xFFFC - 0x8000] = reset_to & 0xFF
    prg[0xFFFD - 0x8000] = reset_to >> 8
    bus = Bus()
    bus.set_cartridge(Cartridge(bytes(prg), b"", Mirroring.VERTICAL))
    return bus


def load(bus, addr, data):
    for i, byte in enumerate(data):
        bus.write(addr + i, byte)


def test_power_on_registers():
    cpu = Cpu()
    assert (cpu.a, cpu.x, cpu.y, cpu.pc) == (0, 0, 0, 0)
    assert cpu.sp == 0xFD
    assert cpu.status == 0x24


def test_reset_reads_vector():
    bus = make_bus(reset_to=0xC123)
    cpu = Cpu()
    cpu.reset(bus)
    assert cpu.pc == 0xC123


@pytest.mark.parametrize("region, cycles", [(Region.NTSC, 29780), (Region.PAL, 35464)])
def test_set_max_cycle(region, cycles):
    cpu = Cpu()
    cpu.set_max_cycle(region)
    assert cpu.max_cycle == cycles


@pytest.mark.parametrize(
    "value, zero, negative",
    [(0x00, True, False), (0x80, False, True), (0x01, False, False), (0xFF, False, True)],
)
def test_update_zero_and_negative_flags(value, zero, negative):
    cpu = Cpu()
    cpu.status = ZERO | NEGATIVE if not (zero or negative) else 0
    cpu.update_zero_and_negative_flags(value)
    assert bool(cpu.status & ZERO) is zero
    assert bool(cpu.status & NEGATIVE) is negative


def test_update_flags_keeps_other_bits():
    cpu = Cpu()
    cpu.update_zero_and_negative_flags(0)
    assert cpu.status & ~(ZERO | NEGATIVE) == 0x24


def test_step_executes_lda_immediate():
    bus = make_bus(bytes([0xA9, 0x42]))
    cpu = Cpu()
    cpu.reset(bus)
    assert cpu.step(bus) == 2
    assert cpu.a == 0x42
    assert cpu.pc == 0x8000 + 2


def test_step_unknown_opcode_raises():
    bus = make_bus(bytes([0x02]))
    cpu = Cpu()
    cpu.reset(bus)
    with pytest.raises(UnknownOpcodeError) as info:
        cpu.step(bus)
    assert info.value.opcode == 0x02


def test_step_resets_cycle_counter_past_frame():
    bus = make_bus(bytes([0xA9, 0x01]))
    cpu = Cpu()
    cpu.reset(bus)
    cpu.cycle = cpu.max_cycle + 5
    cpu.step(bus)
    assert cpu.cycle == 2


def test_countdown_loop_runs_to_zero():
    bus = make_bus()
    start = 0x0200
    # LDX #$03 ; DEX ; BNE back to DEX
    program = [0xA2, 0x03, 0xCA, 0xD0, 0xFD]
    load(bus, start, program)
    cpu = Cpu()
    cpu.pc = start
    for _ in range(20):
        if cpu.pc == start + len(program):
            break
        cpu.step(bus)
    assert cpu.pc == start + len(program)
    assert cpu.x == 0
    assert cpu.status & ZERO


def test_jsr_and_rts_through_step():
    bus = make_bus()
    load(bus, 0x0300, [0x20, 0x00, 0x04])
    load(bus, 0x0400, [0x60])
    cpu = Cpu()
    cpu.pc = 0x0300
    sp = cpu.sp
    cpu.step(bus)
    assert cpu.pc == 0x0400
    cpu.step(bus)
    assert cpu.pc == 0x0303
    assert cpu.sp == sp


def test_store_and_load_round_trip_through_step():
    bus = make_bus()
    # LDA #$7E ; STA $10 ; LDA #$00 ; LDX $10
    load(bus, 0x0300, [0xA9, 0x7E, 0x85, 0x10, 0xA9, 0x00, 0xA6, 0x10])
    cpu = Cpu()
    cpu.pc = 0x0300
    for _ in range(4):
        cpu.step(bus)
    assert cpu.x == 0x7E
    assert cpu.a == 0


def test_repr_shows_binary_decimal_and_hex():
    cpu = Cpu()
    cpu.a = 5
    text = repr(cpu)
    assert "a: 00000101 [5] [$5]" in text
    assert "sp: 11111101 [253] [$fd]" in text