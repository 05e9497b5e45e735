import io
import logging
import struct
import zlib
from typing import BinaryIO, Iterator, NamedTuple, Optional, Union

from .chunk_types import ChunkType
from .exceptions import BadCrcError, NotPngError, TruncatedChunkError

logger = logging.getLogger(__name__)

#1 PNG format constants
PngSignature: bytes = b'\x89PNG\r\n\x1a\n'   #8 byte header of every PNG

Source = Union[bytes, bytearray, memoryview, BinaryIO]


def crc32(chunk_type: bytes, data: bytes) -> int:
    #CRC covers type + data, never the length field
    return zlib.crc32(data, zlib.crc32(chunk_type))


def make_chunk(chunk_type: bytes, data: bytes = b'') -> bytes:
    """Serialize one chunk: [4B length][4B type][data][4B CRC]."""
    return (struct.pack('>I', len(data)) + chunk_type + data
            + struct.pack('>I', crc32(chunk_type, data)))


class Chunk(NamedTuple):
    type: bytes
    data: bytes
    length: int
    crc: int

    @property
    def kind(self) -> ChunkType:
        return ChunkType.of(self.type)

    def to_bytes(self) -> bytes:
        return struct.pack('>I4s', self.length, self.type) + self.data + struct.pack('>I', self.crc)


def verify_crc(chunk: Chunk) -> Chunk:
    calc_crc = crc32(chunk.type, chunk.data)
    if chunk.crc != calc_crc:
        raise BadCrcError(details=f"{chunk.type.decode('latin-1')}: stored {chunk.crc:#010x}, computed {calc_crc:#010x}")
    return chunk


class ChunkReader:
    """Lazy chunk tokenizer over an in-memory buffer or a binary stream.

    The signature is checked on construction; each ``next_chunk()`` call
    reads exactly one chunk, verifies its CRC and returns it, or returns
    ``None`` once the input is exhausted on a chunk boundary.
    """

    def __init__(self, source: Source):
        if isinstance(source, (bytes, bytearray, memoryview)):
            source = io.BytesIO(bytes(source))
        self.stream = source
        self.offset = 0
        if self._read(len(PngSignature)) != PngSignature:
            raise NotPngError()

    def _read(self, size: int) -> bytes:
        #streams may return short reads, keep going until size bytes or EOF
        parts = []
        remaining = size
        while remaining > 0:
            part = self.stream.read(remaining)
            if not part:
                break
            parts.append(part)
            remaining -= len(part)
        data = b''.join(parts)
        self.offset += len(data)
        return data

    def next_chunk(self) -> Optional[Chunk]:
        start = self.offset
        head = self._read(8)
        if not head:
            return None
        if len(head) < 8:
            raise TruncatedChunkError(details=f"partial chunk header at offset {start}")

        #chunk = [4B length][4B type][payload][4B CRC]
        chunk_length, chunk_type = struct.unpack('>I4s', head)
        chunk_data = self._read(chunk_length)
        crc_bytes = self._read(4)
        if len(chunk_data) < chunk_length or len(crc_bytes) < 4:
            raise TruncatedChunkError(
                details=f"{chunk_type.decode('latin-1')} at offset {start} declares {chunk_length} bytes")
        chunk_crc, = struct.unpack('>I', crc_bytes)

        logger.debug("offset=%d type=%s length=%d", start, chunk_type.decode('latin-1'), chunk_length)
        return verify_crc(Chunk(chunk_type, chunk_data, chunk_length, chunk_crc))

    def __iter__(self) -> Iterator[Chunk]:
        while True:
            chunk = self.next_chunk()
            if chunk is None:
                return
            yield chunk
            if chunk.type == b'IEND':
                return  #anything after IEND is not PNG data


def read_chunks(source: Source) -> Iterator[Chunk]:
    return iter(ChunkReader(source))
