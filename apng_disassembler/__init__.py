from .chunk_types import BlendOp, ChunkType, DisposeOp, FrameControl, ImageHeader
from .config import Config
from .decode_raster import decode_raster
from .disassemble import disassemble, disassemble_file
from .exceptions import (ApngError, BadApngError, BadCrcError, NotPngError,
                         RasterDecodeError, TruncatedChunkError)
from .models import Apng, Frame
from .read_chunks import Chunk, ChunkReader, PngSignature, make_chunk, read_chunks

__version__ = "0.1.0"
