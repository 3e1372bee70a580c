import pytest

from nesemu.cartridge import Cartridge, Mirroring
from nesemu.ppu import Ppu
from nesemu.region import Region
from nesemu.registers import PpuCtrl, PpuStatus


def _cart(mirroring=Mirroring.HORIZONTAL):
    return Cartridge(b"\x00", b"", mirroring)


def _ntsc():
    ppu = Ppu()
    ppu.set_region(Region.NTSC)
    return ppu


def _landing_index(addr, mirroring):
    ppu = Ppu()
    ppu.ppu_write(addr, 0xAB, _cart(mirroring))
    hits = [i for i, byte in enumerate(ppu.vram) if byte]
    assert len(hits) == 1
    return hits[0]


def test_set_region_ntsc():
    ppu = _ntsc()
    assert (ppu.scanlines_limit, ppu.cycles_limit) == (262, 341)
    assert (ppu.v_blank_limit, ppu.pre_render_scanline) == (260, 261)


def test_set_region_pal():
    ppu = Ppu()
    ppu.set_region(Region.PAL)
    assert ppu.region is Region.PAL
    assert (ppu.scanlines_limit, ppu.v_blank_limit, ppu.pre_render_scanline) == (312, 310, 311)


def test_vblank_set_at_scanline_241():
    ppu = _ntsc()
    ppu.scanlines, ppu.cycles = 241, 0
    ppu.tick()
    assert PpuStatus.V_BLANK in ppu.status
    assert ppu.cycles == 1


def test_vblank_cleared_on_pre_render_line():
    ppu = _ntsc()
    ppu.status = PpuStatus.V_BLANK
    ppu.scanlines, ppu.cycles = 261, 0
    ppu.tick()
    assert PpuStatus.V_BLANK not in ppu.status


def test_post_render_line_does_not_set_vblank():
    ppu = _ntsc()
    ppu.scanlines, ppu.cycles = 240, 0
    ppu.tick()
    assert PpuStatus.V_BLANK not in ppu.status
    assert ppu.scanlines == 240


def test_cycle_wrap_advances_scanline():
    ppu = _ntsc()
    ppu.scanlines, ppu.cycles = 5, ppu.cycles_limit
    ppu.tick()
    assert ppu.scanlines == 6
    assert ppu.cycles == 1


def test_scanline_wrap_to_zero():
    ppu = _ntsc()
    ppu.scanlines, ppu.cycles = ppu.scanlines_limit - 1, ppu.cycles_limit
    ppu.tick()
    assert ppu.scanlines == 0


def test_ppuaddr_two_writes_set_v():
    ppu = _ntsc()
    ppu.handle_write(0x2006, 0x20, _cart())
    assert ppu.w is True
    ppu.handle_write(0x2006, 0x00, _cart())
    assert ppu.v == 0x2000
    assert ppu.w is False


def test_ppudata_increment_by_32():
    ppu = _ntsc()
    cart = _cart()
    ppu.handle_write(0x2000, int(PpuCtrl.INCREMENT_MODE), cart)
    ppu.handle_write(0x2006, 0x20, cart)
    ppu.handle_write(0x2006, 0x00, cart)
    ppu.handle_write(0x2007, 0x55, cart)
    assert ppu.v == 0x2000 + 32
    assert ppu.vram[0] == 0x55


def test_ppudata_increment_by_one_without_flag():
    ppu = _ntsc()
    cart = _cart()
    ppu.handle_write(0x2006, 0x20, cart)
    ppu.handle_write(0x2006, 0x00, cart)
    start = ppu.v
    ppu.handle_write(0x2007, 0x11, cart)
    ppu.handle_write(0x2007, 0x22, cart)
    assert ppu.v - start == 2


def test_scroll_first_write_sets_fine_x():
    ppu = _ntsc()
    ppu.handle_write(0x2005, 0b10101_011, _cart())
    assert ppu.x == 0b011
    assert ppu.w is True
    ppu.handle_write(0x2005, 0, _cart())
    assert ppu.w is False


def test_handle_read_status():
    ppu = _ntsc()
    ppu.status = PpuStatus.V_BLANK
    assert ppu.handle_read(0x2002) == int(PpuStatus.V_BLANK)


def test_handle_read_other_register_is_zero():
    assert _ntsc().handle_read(0x2007) == 0


def test_vertical_mirroring_pairs():
    v = Mirroring.VERTICAL
    assert _landing_index(0x2005, v) == _landing_index(0x2805, v)
    assert _landing_index(0x2405, v) == _landing_index(0x2C05, v)
    assert _landing_index(0x2005, v) != _landing_index(0x2405, v)


def test_horizontal_mirroring_pairs():
    h = Mirroring.HORIZONTAL
    assert _landing_index(0x2005, h) == _landing_index(0x2405, h)
    assert _landing_index(0x2805, h) == _landing_index(0x2C05, h)
    assert _landing_index(0x2005, h) != _landing_index(0x2805, h)


def test_upper_nametable_mirror_matches_base():
    for mirroring in Mirroring:
        assert _landing_index(0x3123, mirroring) == _landing_index(0x2123, mirroring)


def test_pattern_table_write_is_ignored():
    ppu = Ppu()
    ppu.ppu_write(0x1000, 0xFF, _cart())
    assert list(ppu.vram) == [0] * 2048


def test_unsupported_address_raises():
    with pytest.raises(ValueError):
        Ppu().ppu_write(0x1FFF, 1, _cart())
    with pytest.raises(ValueError):
        Ppu().ppu_write(0x4000, 1, _cart())


def test_repr_names_fields():
    text = repr(_ntsc())
    assert text.startswith("Ppu(")
    assert "scanlines=" in text