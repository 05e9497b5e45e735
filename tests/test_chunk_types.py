import struct

import pytest

from apng_disassembler.chunk_types import (AnimationControl, BlendOp, ChunkType, DisposeOp,
                                           FrameControl, ImageHeader, is_ancillary)
from apng_disassembler.exceptions import BadApngError


def fctl_body(seq=0, w=10, h=10, x=0, y=0, num=1, den=10, dispose=0, blend=0):
    return struct.pack('>IIIIIHHBB', seq, w, h, x, y, num, den, dispose, blend)


class TestChunkType:

    def test_known_types(self):
        for code in (b'IHDR', b'PLTE', b'tRNS', b'acTL', b'fcTL', b'IDAT', b'fdAT', b'IEND'):
            assert ChunkType.of(code).value == code

    def test_unknown_type_is_other(self):
        assert ChunkType.of(b'tEXt') is ChunkType.OTHER
        assert ChunkType.of(b'idat') is ChunkType.OTHER

    def test_ancillary_bit(self):
        assert is_ancillary(b'tEXt')
        assert is_ancillary(b'fcTL')
        assert not is_ancillary(b'IDAT')


class TestImageHeader:

    def test_parse(self):
        header = ImageHeader.parse(struct.pack('>IIBBBBB', 640, 480, 8, 6, 0, 0, 1))
        assert (header.width, header.height) == (640, 480)
        assert header.interlace == 1

    def test_resized_keeps_pixel_format(self):
        header = ImageHeader.parse(struct.pack('>IIBBBBB', 640, 480, 4, 3, 0, 0, 1))
        assert header.resized(16, 8) == struct.pack('>IIBBBBB', 16, 8, 4, 3, 0, 0, 1)

    def test_zero_size(self):
        with pytest.raises(BadApngError):
            ImageHeader.parse(struct.pack('>IIBBBBB', 0, 480, 8, 6, 0, 0, 0))

    def test_wrong_length(self):
        with pytest.raises(BadApngError):
            ImageHeader.parse(b'\x00' * 12)


class TestFrameControl:

    def test_parse(self):
        fc = FrameControl.parse(fctl_body(seq=3, w=5, h=6, x=1, y=2, num=3, den=100, dispose=2, blend=1))
        assert fc.sequence_number == 3
        assert (fc.width, fc.height, fc.x_offset, fc.y_offset) == (5, 6, 1, 2)
        assert fc.dispose_op is DisposeOp.PREVIOUS
        assert fc.blend_op is BlendOp.OVER
        assert fc.delay == pytest.approx(0.03)

    def test_zero_denominator_means_hundredths(self):
        fc = FrameControl.parse(fctl_body(num=25, den=0))
        assert fc.delay == pytest.approx(0.25)

    def test_invalid_operator(self):
        with pytest.raises(BadApngError):
            FrameControl.parse(fctl_body(dispose=3))
        with pytest.raises(BadApngError):
            FrameControl.parse(fctl_body(blend=2))

    def test_zero_size(self):
        with pytest.raises(BadApngError):
            FrameControl.parse(fctl_body(w=0))

    def test_bounds(self):
        canvas = ImageHeader(10, 10, 8, 6, 0, 0, 0)
        FrameControl.parse(fctl_body(w=5, h=5, x=5, y=5)).check_bounds(canvas)
        with pytest.raises(BadApngError):
            FrameControl.parse(fctl_body(w=5, h=5, x=6, y=0)).check_bounds(canvas)
        with pytest.raises(BadApngError):
            FrameControl.parse(fctl_body(w=5, h=5, x=0, y=6)).check_bounds(canvas)


class TestAnimationControl:

    def test_parse(self):
        ac = AnimationControl.parse(struct.pack('>II', 12, 0))
        assert (ac.num_frames, ac.num_plays) == (12, 0)

    def test_wrong_length(self):
        with pytest.raises(BadApngError):
            AnimationControl.parse(b'\x00' * 4)
