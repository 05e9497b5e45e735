"""Split a PNG / APNG stream into a cover image and standalone per-frame PNGs.

The decoder makes a single pass over the chunks. IDAT data seen before the
first fcTL belongs to the default (cover) image; every fcTL starts a new
frame whose PNG is rebuilt from scratch: signature, an IHDR sized to the
frame, the stream's PLTE/tRNS, the frame's IDAT (or fdAT converted to
IDAT) chunks and a fresh IEND.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .chunk_types import AnimationControl, ChunkType, FrameControl, ImageHeader, is_ancillary
from .config import Config
from .decode_raster import decode_raster
from .exceptions import BadApngError, RasterDecodeError, TruncatedChunkError
from .models import Apng, Frame
from .read_chunks import Chunk, ChunkReader, PngSignature, Source, make_chunk

logger = logging.getLogger(__name__)


@dataclass
class _State:
    canvas: Optional[ImageHeader] = None
    animation: Optional[AnimationControl] = None
    plte: Optional[bytes] = None
    trns: Optional[bytes] = None
    frame_buffer: Optional[bytearray] = None
    frame_control: Optional[FrameControl] = None
    frame_has_data: bool = False
    cover_buffer: Optional[bytearray] = None
    idat_chunks: bytearray = field(default_factory=bytearray)
    cover_png: Optional[bytes] = None
    frames: List[Frame] = field(default_factory=list)
    ended: bool = False

    @property
    def is_animated(self) -> bool:
        return self.animation is not None


def _require_canvas(state: _State, chunk: Chunk) -> ImageHeader:
    if state.canvas is None:
        raise BadApngError("IHDR must be the first chunk", f"found {chunk.type.decode('latin-1')} first")
    return state.canvas


def _open_png(state: _State, width: int, height: int) -> bytearray:
    buffer = bytearray(PngSignature)
    buffer += make_chunk(b'IHDR', state.canvas.resized(width, height))
    if state.plte is not None:
        buffer += state.plte
    if state.trns is not None:
        buffer += state.trns
    return buffer


def _close_png(buffer: bytearray) -> bytes:
    buffer += make_chunk(b'IEND')
    return bytes(buffer)


def _finish_frame(state: _State) -> None:
    fc = state.frame_control
    if not state.frame_has_data:
        raise BadApngError("frame has no image data",
                           f"fcTL {fc.sequence_number} is not followed by IDAT or fdAT")
    state.frames.append(Frame(
        png=_close_png(state.frame_buffer),
        delay=fc.delay,
        x_offset=fc.x_offset,
        y_offset=fc.y_offset,
        blend_op=fc.blend_op,
        dispose_op=fc.dispose_op,
        canvas_width=state.canvas.width,
        canvas_height=state.canvas.height,
        width=fc.width,
        height=fc.height,
        sequence_number=fc.sequence_number,
        delay_num=fc.delay_num,
        delay_den=fc.delay_den,
    ))
    logger.debug("frame %d finished (%d bytes)", len(state.frames) - 1, len(state.frames[-1].png))
    state.frame_buffer = None
    state.frame_control = None


def _finish_cover(state: _State) -> None:
    state.cover_png = _close_png(state.cover_buffer)
    state.cover_buffer = None
    logger.debug("cover finished (%d bytes)", len(state.cover_png))


def _on_fctl(state: _State, chunk: Chunk) -> None:
    canvas = _require_canvas(state, chunk)
    #fcTL closes whatever was being collected before it
    if state.frame_buffer is not None:
        _finish_frame(state)
    elif state.cover_buffer is not None:
        _finish_cover(state)

    fc = FrameControl.parse(chunk.data)
    fc.check_bounds(canvas)
    state.frame_control = fc
    state.frame_has_data = False
    state.frame_buffer = _open_png(state, fc.width, fc.height)
    logger.debug("frame %d opened: %dx%d at (%d, %d), delay %d/%d",
                 len(state.frames), fc.width, fc.height, fc.x_offset, fc.y_offset,
                 fc.delay_num, fc.delay_den)


def _on_idat(state: _State, chunk: Chunk) -> None:
    canvas = _require_canvas(state, chunk)
    #kept aside in case no acTL ever shows up and the stream is a plain PNG
    state.idat_chunks += chunk.to_bytes()
    if state.frame_buffer is None:
        if state.cover_buffer is None:
            state.cover_buffer = _open_png(state, canvas.width, canvas.height)
        state.cover_buffer += chunk.to_bytes()
        return

    #only the first frame may be carried by IDAT, and only if it is the default image
    if state.frames or state.cover_png is not None:
        raise BadApngError("IDAT is only allowed in the default image",
                           f"found in frame {len(state.frames)}")
    state.frame_buffer += chunk.to_bytes()
    state.frame_has_data = True


def _on_fdat(state: _State, chunk: Chunk) -> None:
    if state.frame_buffer is None:
        raise BadApngError("fdAT outside of a frame", "no fcTL precedes it")
    if chunk.length < 4:
        raise BadApngError("fdAT chunk must be at least 4 bytes", f"got {chunk.length}")
    #drop the 4 byte sequence number, the rest is plain IDAT data
    state.frame_buffer += make_chunk(b'IDAT', chunk.data[4:])
    state.frame_has_data = True


def _on_iend(state: _State, chunk: Chunk) -> None:
    _require_canvas(state, chunk)
    if state.frame_buffer is not None:
        _finish_frame(state)
    if state.cover_buffer is not None:
        _finish_cover(state)
    state.ended = True


def _on_other(state: _State, chunk: Chunk, keep_ancillary: bool) -> None:
    buffer = state.frame_buffer if state.frame_buffer is not None else state.cover_buffer
    if keep_ancillary and buffer is not None and is_ancillary(chunk.type):
        buffer += chunk.to_bytes()
        return
    logger.debug("skipping %s chunk", chunk.type.decode('latin-1'))


def _feed(state: _State, chunk: Chunk, config) -> None:
    match chunk.kind:
        case ChunkType.IHDR:
            if state.canvas is not None:
                raise BadApngError("Duplicate IHDR chunk")
            state.canvas = ImageHeader.parse(chunk.data)
        case ChunkType.acTL:
            state.animation = AnimationControl.parse(chunk.data)
            logger.debug("acTL: %d frames, %d plays",
                         state.animation.num_frames, state.animation.num_plays)
        case ChunkType.PLTE:
            state.plte = chunk.to_bytes()
        case ChunkType.tRNS:
            state.trns = chunk.to_bytes()
        case ChunkType.fcTL:
            _on_fctl(state, chunk)
        case ChunkType.IDAT:
            _on_idat(state, chunk)
        case ChunkType.fdAT:
            _on_fdat(state, chunk)
        case ChunkType.IEND:
            _on_iend(state, chunk)
        case ChunkType.OTHER:
            _on_other(state, chunk, config.KEEP_ANCILLARY)


def disassemble(source: Source, config=Config) -> Apng:
    """Decode a PNG or APNG held in memory or readable from a binary stream.

    Whether the result is animated is decided by the chunks themselves
    (an acTL anywhere in the stream), never by a pre-check. Any malformed
    input raises an :class:`~apng_disassembler.exceptions.ApngError`
    subclass and no partial result is returned. A cover that cannot be
    decoded into pixels is not fatal: ``cover`` stays ``None`` and
    ``cover_error`` holds the reason.
    """
    state = _State()
    for chunk in ChunkReader(source):
        _feed(state, chunk, config)

    if not state.ended:
        raise TruncatedChunkError(details="stream ended before IEND")

    frames = tuple(state.frames)
    cover_png = state.cover_png
    if state.is_animated:
        if state.animation.num_frames != len(frames):
            logger.warning("acTL declares %d frames, found %d",
                           state.animation.num_frames, len(frames))
    elif frames:
        #no acTL anywhere: fcTL/fdAT are meaningless and every IDAT is the one image
        logger.warning("fcTL without acTL, treating stream as a plain PNG")
        frames = ()
        if cover_png is None and state.idat_chunks:
            cover_png = _close_png(_open_png(state, state.canvas.width, state.canvas.height)
                                   + state.idat_chunks)

    cover = None
    cover_error = None
    if cover_png is not None and config.DECODE_COVER:
        try:
            cover = decode_raster(cover_png)
        except RasterDecodeError as e:
            logger.warning("cover image could not be decoded: %s", e)
            cover_error = e

    return Apng(
        is_animated=state.is_animated,
        width=state.canvas.width,
        height=state.canvas.height,
        frames=frames,
        cover=cover,
        cover_png=cover_png,
        cover_error=cover_error,
        num_frames=state.animation.num_frames if state.is_animated else 0,
        num_plays=state.animation.num_plays if state.is_animated else 0,
    )


def disassemble_file(file_path, config=Config) -> Apng:
    with open(file_path, 'rb') as f:
        return disassemble(f, config)
