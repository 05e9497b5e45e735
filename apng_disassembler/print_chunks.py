import struct

from .chunk_types import AnimationControl, FrameControl, ImageHeader
from .read_chunks import Chunk


def printChunk(chunk: Chunk, offset: int = None):
    typ = chunk.type.decode('latin-1')
    d = chunk.data
    length = chunk.length
    if offset is None:
        print(f"{typ} length: {length}")
    else:
        print(f"{typ} length: {length}, offset: {offset}")

    if typ in ('IDAT', 'IEND'):
        pass
    elif typ == 'IHDR':
        h = ImageHeader.parse(d)
        print(f"  width={h.width}, height={h.height}, bit_depth={h.bit_depth}, color_type={h.color_type}, "
              f"compression={h.compression}, filter={h.filter_method}, interlace={h.interlace}")
    elif typ == 'PLTE':
        print(f"  palette entries={length // 3}")
    elif typ == 'tRNS':
        print(f"  transparency entries={length}")
    elif typ == 'acTL':
        ac = AnimationControl.parse(d)
        plays = 'infinite' if ac.num_plays == 0 else ac.num_plays
        print(f"  num_frames={ac.num_frames}, num_plays={plays}")
    elif typ == 'fcTL':
        fc = FrameControl.parse(d)
        print(f"  sequence={fc.sequence_number}, size={fc.width}x{fc.height}, offset=({fc.x_offset}, {fc.y_offset})")
        print(f"  delay={fc.delay_num}/{fc.delay_den} ({fc.delay:.3f}s), dispose={fc.dispose_op.name}, blend={fc.blend_op.name}")
    elif typ == 'fdAT':
        seq, = struct.unpack('>I', d[:4])
        print(f"  sequence={seq}, frame data={length - 4}")
    elif typ == 'gAMA':
        gamma, = struct.unpack('>I', d)
        print(f"  gamma={gamma/100000.0}")
    elif typ == 'tIME':
        y, mo, day, h, mi, s = struct.unpack('>HBBBBB', d)
        print(f"  {y:04}-{mo:02}-{day:02} {h:02}:{mi:02}:{s:02}")
    elif typ == 'tEXt':
        key, sep, val = d.partition(b'\x00')
        if sep:
            print(f"  key='{key.decode('latin-1')}', text='{val.decode('latin-1')}'")
        else:
            print("  tEXt raw data")
    else:
        print(f"  unknown chunk type {typ}, raw data length {length}")


def printChunks(chunks):
    #offsets start right after the 8 byte signature
    offset = 8
    for chunk in chunks:
        printChunk(chunk, offset)
        offset += 4 + 4 + chunk.length + 4
