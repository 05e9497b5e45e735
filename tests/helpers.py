"""Builders for hand-made PNG / APNG byte streams used across the tests."""

import struct
import zlib

SIGNATURE = b'\x89PNG\r\n\x1a\n'

RED = (255, 0, 0, 255)
GREEN = (0, 255, 0, 255)
BLUE = (0, 0, 255, 255)


def chunk(chunk_type, data=b''):
    return (struct.pack('>I', len(data)) + chunk_type + data
            + struct.pack('>I', zlib.crc32(chunk_type + data)))


def ihdr(width, height, bit_depth=8, color_type=6):
    return chunk(b'IHDR', struct.pack('>IIBBBBB', width, height, bit_depth, color_type, 0, 0, 0))


def rgba_data(width, height, color=RED):
    raw = b''.join(b'\x00' + bytes(color) * width for _ in range(height))
    return zlib.compress(raw)


def index_data(width, height, index=0):
    raw = b''.join(b'\x00' + bytes([index]) * width for _ in range(height))
    return zlib.compress(raw)


def idat(data):
    return chunk(b'IDAT', data)


def actl(num_frames, num_plays=0):
    return chunk(b'acTL', struct.pack('>II', num_frames, num_plays))


def fctl(seq, width, height, x=0, y=0, num=1, den=10, dispose=0, blend=0):
    return chunk(b'fcTL', struct.pack('>IIIIIHHBB', seq, width, height, x, y, num, den, dispose, blend))


def fdat(seq, data):
    return chunk(b'fdAT', struct.pack('>I', seq) + data)


def iend():
    return chunk(b'IEND')


def png(*chunks):
    return SIGNATURE + b''.join(chunks)


def plain_png(width=4, height=4, color=RED):
    return png(ihdr(width, height), idat(rgba_data(width, height, color)), iend())


def two_frame_apng():
    """10x10 canvas, frame 0 from IDAT, frame 1 from fdAT, no separate default image."""
    return png(
        ihdr(10, 10),
        actl(2),
        fctl(0, 10, 10),
        idat(rgba_data(10, 10, RED)),
        fctl(1, 10, 10),
        fdat(2, rgba_data(10, 10, GREEN)),
        iend(),
    )


def split_chunks(data):
    """(type, data, crc) triples of a finished PNG, read without the package under test."""
    assert data[:8] == SIGNATURE
    out = []
    i = 8
    while i < len(data):
        length, chunk_type = struct.unpack('>I4s', data[i:i + 8])
        body = data[i + 8:i + 8 + length]
        crc, = struct.unpack('>I', data[i + 8 + length:i + 12 + length])
        out.append((chunk_type, body, crc))
        i += 12 + length
    return out


class TrickleStream:
    """Binary stream that hands out at most ``step`` bytes per read()."""

    def __init__(self, data, step=3):
        self.data = data
        self.pos = 0
        self.step = step

    def read(self, size=-1):
        if size < 0:
            size = len(self.data) - self.pos
        size = min(size, self.step)
        part = self.data[self.pos:self.pos + size]
        self.pos += len(part)
        return part
