# nesemu

A small NES emulator core. It loads iNES (`.nes`) ROM images and runs a
subset of the 6502 instruction set, together with the picture unit's
scanline timing, its control, mask and status registers, and nametable
writes that follow the cartridge's mirroring.

## Install

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
nesemu path/to/game.nes
nesemu path/to/game.nes --steps 1000
```

The command loads the ROM, resets the CPU from the reset vector at `$FFFC`,
and then steps the CPU and the picture unit, printing the CPU and PPU state
after every instruction. Without `--steps` it runs until it stops on an
error; with `--steps N` it runs `N` instructions. If no ROM path is given it
looks for `Donkey Kong (JU) [T-Span].nes` in the current directory.

A missing file, a file that is not a complete iNES image, or an opcode that
is not supported ends the run with a message on standard error and exit
status 1.

## Library use

```python
from nesemu.machine import MochaNES

nes = MochaNES()
nes.init("game.nes")   # load the ROM, reset the CPU, set up the region
cycles = nes.run(100)  # execute 100 instructions, returns the cycles taken
```

The pieces can also be used on their own:

```python
from nesemu.bus import Bus
from nesemu.cartridge import Cartridge, Mirroring
from nesemu.cpu import Cpu
from nesemu.region import Region

bus = Bus()
bus.set_cartridge(Cartridge(bytes(0x4000), bytes(0x2000), Mirroring.HORIZONTAL))
bus.set_ppu_region(Region.NTSC)

cpu = Cpu()
cpu.reset(bus)
cpu.set_max_cycle(Region.NTSC)
cycles = cpu.step(bus)
bus.ppu_tick(cycles)
```

Modules:

- `nesemu.machine` – `MochaNES` (`init`, `run`, `load_rom`), `main`, and
  `InvalidRomError` for bad iNES files.
- `nesemu.cpu` – `Cpu` (`reset`, `set_max_cycle`, `step`,
  `update_zero_and_negative_flags`) and `UnknownOpcodeError`.
- `nesemu.ops_load`, `nesemu.ops_alu`, `nesemu.ops_flow` – one function per
  instruction and addressing mode; each returns its cycle count.
- `nesemu.bus` – `Bus` and `NoCartridgeError`.
- `nesemu.ppu` – `Ppu`.
- `nesemu.registers` – `PpuCtrl`, `PpuMask`, `PpuStatus` flag types.
- `nesemu.cartridge` – `Cartridge` and `Mirroring`.
- `nesemu.region` – `Region`.

Per-instruction trace messages go to the `logging` module at debug level.

### Supported instructions

ADC (immediate, zero page), AND (immediate, zero page), BEQ, BNE, BPL, BRK,
CLC, CLD, CMP (immediate), DEC (zero page, absolute), DEX, DEY, EOR
(immediate, zero page), INY, JMP (absolute), JSR, LDA (immediate, zero page,
absolute, (indirect),Y), LDX (immediate, zero page), LDY (immediate, zero
page, absolute), LSR A, PHA, PLA, ROR (zero page), RTS, SEI, STA (zero page,
absolute, (indirect),Y), STX (absolute), STY (zero page), TAX, TAY, TXA, TXS,
TYA. Any other opcode raises `UnknownOpcodeError`.

Note that CLD here sets bit `0x08` of the status register.

### Memory map

| Range           | Device                                                     |
|-----------------|------------------------------------------------------------|
| `$0000-$1FFF`   | 2 KiB internal RAM, mirrored                               |
| `$2000-$3FFF`   | PPU registers                                              |
| `$4000-$7FFF`   | APU, I/O, expansion, save RAM (read as 0, writes ignored)  |
| `$8000-$FFFF`   | Cartridge PRG-ROM (writes ignored)                         |

Of the PPU registers, only PPUSTATUS (`$2002`) can be read; other reads
return 0. Writes are handled at `$2000` (PPUCTRL), `$2001` (PPUMASK),
`$2005` (scroll), `$2006` (address) and `$2007` (data). Only these exact
addresses are decoded; their mirrors up to `$3FFF` are not.

Reading cartridge space with no cartridge inserted raises
`NoCartridgeError`, as does writing anywhere on the bus before a cartridge
is set.

### Regions

`Region.NTSC` (the default) and `Region.PAL` select the frame length: 262 or
312 scanlines of 341 dots, and 29,780 or 35,464 CPU cycles per frame. The
region of a ROM comes from bit 0 of byte 7 of its iNES header; mirroring
comes from bit 0 of byte 6.

## What it does not do

- It draws nothing: there is no window or screen output, no background or
  sprite rendering, and palette and pattern-table writes are ignored.
- There is no sound, no controller input and no interrupt on vertical blank.
- Only the opcodes listed above run, so most games stop early.
- Only mapper-less cartridges are read, and a ROM's 512-byte trainer is not
  skipped when loading.