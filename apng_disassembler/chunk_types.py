import enum
import struct
from dataclasses import dataclass

from .exceptions import BadApngError

#1 chunk type codes that drive disassembly, anything else is OTHER
class ChunkType(enum.Enum):
    IHDR = b'IHDR'
    PLTE = b'PLTE'
    tRNS = b'tRNS'
    acTL = b'acTL'
    fcTL = b'fcTL'
    IDAT = b'IDAT'
    fdAT = b'fdAT'
    IEND = b'IEND'
    OTHER = None

    @classmethod
    def of(cls, code: bytes) -> "ChunkType":
        try:
            return cls(bytes(code))
        except ValueError:
            return cls.OTHER


def is_ancillary(code: bytes) -> bool:
    #bit 5 of the first byte (lowercase letter) marks an ancillary chunk
    return bool(code[0] & 0x20)


class DisposeOp(enum.IntEnum):
    NONE = 0
    BACKGROUND = 1
    PREVIOUS = 2


class BlendOp(enum.IntEnum):
    SOURCE = 0
    OVER = 1


def _check_length(name, data, expected):
    if len(data) != expected:
        raise BadApngError(f"{name} chunk must be {expected} bytes", f"got {len(data)}")


#2 IHDR: width, height, bit depth, color type, compression, filter, interlace
@dataclass(frozen=True)
class ImageHeader:
    width: int
    height: int
    bit_depth: int
    color_type: int
    compression: int
    filter_method: int
    interlace: int

    FORMAT = '>IIBBBBB'

    @classmethod
    def parse(cls, data: bytes) -> "ImageHeader":
        _check_length('IHDR', data, 13)
        header = cls(*struct.unpack(cls.FORMAT, data))
        if header.width == 0 or header.height == 0:
            raise BadApngError("IHDR width and height must be > 0",
                               f"{header.width}x{header.height}")
        return header

    def resized(self, width: int, height: int) -> bytes:
        """IHDR body for a ``width`` x ``height`` image with this header's pixel format."""
        return struct.pack(self.FORMAT, width, height, self.bit_depth, self.color_type,
                           self.compression, self.filter_method, self.interlace)


#3 acTL: number of frames, number of plays (0 = loop forever)
@dataclass(frozen=True)
class AnimationControl:
    num_frames: int
    num_plays: int

    @classmethod
    def parse(cls, data: bytes) -> "AnimationControl":
        _check_length('acTL', data, 8)
        return cls(*struct.unpack('>II', data))


#4 fcTL: sequence, width, height, x, y, delay num/den, dispose, blend
@dataclass(frozen=True)
class FrameControl:
    sequence_number: int
    width: int
    height: int
    x_offset: int
    y_offset: int
    delay_num: int
    delay_den: int
    dispose_op: DisposeOp
    blend_op: BlendOp

    @classmethod
    def parse(cls, data: bytes) -> "FrameControl":
        _check_length('fcTL', data, 26)
        seq, w, h, x, y, num, den, dispose, blend = struct.unpack('>IIIIIHHBB', data)
        try:
            dispose, blend = DisposeOp(dispose), BlendOp(blend)
        except ValueError as e:
            raise BadApngError("Invalid fcTL operator", str(e)) from e
        if w == 0 or h == 0:
            raise BadApngError("fcTL width and height must be > 0", f"frame {seq}: {w}x{h}")
        return cls(seq, w, h, x, y, num, den, dispose, blend)

    @property
    def delay(self) -> float:
        """Frame duration in seconds; a zero denominator means 1/100 s units."""
        return self.delay_num / (self.delay_den or 100)

    def check_bounds(self, canvas: ImageHeader) -> None:
        if self.x_offset + self.width > canvas.width:
            raise BadApngError("`x_offset` + `width` must be <= `IHDR` width",
                               f"frame {self.sequence_number}: {self.x_offset} + {self.width} > {canvas.width}")
        if self.y_offset + self.height > canvas.height:
            raise BadApngError("`y_offset` + `height` must be <= `IHDR` height",
                               f"frame {self.sequence_number}: {self.y_offset} + {self.height} > {canvas.height}")
