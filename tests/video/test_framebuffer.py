"""Tests for sprite drawing on the framebuffer."""

from __future__ import annotations

import pytest

from chipette.video import FrameBuffer


def test_defaults_to_64_by_32() -> None:
    fb = FrameBuffer()

    assert (fb.width, fb.height) == (64, 32)
    assert fb.lit_count() == 0
    assert not fb.dirty


def test_draw_sets_bits_msb_first() -> None:
    fb = FrameBuffer()
    collision = fb.draw_sprite(0, 0, [0b10000001])

    assert not collision
    assert fb.get_pixel(0, 0)
    assert not fb.get_pixel(1, 0)
    assert fb.get_pixel(7, 0)
    assert fb.dirty


def test_origin_wraps() -> None:
    fb = FrameBuffer()
    fb.draw_sprite(64 + 2, 32 + 1, [0x80])

    assert fb.get_pixel(2, 1)


def test_sprite_clips_at_right_and_bottom_edges() -> None:
    fb = FrameBuffer()
    fb.draw_sprite(60, 30, [0xFF, 0xFF, 0xFF])

    assert fb.lit_count() == 4 * 2
    assert not fb.get_pixel(0, 30)
    assert not fb.get_pixel(60, 0)


def test_collision_only_when_lit_pixel_turned_off() -> None:
    fb = FrameBuffer()
    fb.draw_sprite(0, 0, [0xF0])

    assert not fb.draw_sprite(4, 0, [0xF0])
    assert fb.draw_sprite(3, 0, [0x80])
    assert not fb.get_pixel(3, 0)


def test_clear_resets_pixels_and_marks_dirty() -> None:
    fb = FrameBuffer()
    fb.draw_sprite(0, 0, [0xFF])
    fb.dirty = False
    fb.clear()

    assert fb.lit_count() == 0
    assert fb.dirty


def test_rows_shape() -> None:
    fb = FrameBuffer(8, 4)
    fb.set_pixel(7, 3, True)
    rows = fb.rows()

    assert len(rows) == 4
    assert all(len(row) == 8 for row in rows)
    assert rows[3][7]


def test_get_pixel_out_of_range() -> None:
    with pytest.raises(IndexError):
        FrameBuffer().get_pixel(64, 0)
