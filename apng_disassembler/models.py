from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np

from .chunk_types import BlendOp, DisposeOp
from .decode_raster import decode_raster
from .exceptions import RasterDecodeError


@dataclass(frozen=True)
class Frame:
    """One animation frame as a standalone PNG plus its placement on the canvas.

    ``png`` is signature + IHDR (frame size) + PLTE/tRNS if present + IDAT... + IEND.
    ``delay`` is in seconds.
    """
    png: bytes
    delay: float
    x_offset: int
    y_offset: int
    blend_op: BlendOp
    dispose_op: DisposeOp
    canvas_width: int
    canvas_height: int
    width: int
    height: int
    sequence_number: int = 0
    delay_num: int = 0
    delay_den: int = 0

    def to_array(self) -> np.ndarray:
        return decode_raster(self.png)


@dataclass(frozen=True)
class Apng:
    is_animated: bool
    width: int
    height: int
    frames: Tuple[Frame, ...] = ()
    cover: Optional[np.ndarray] = field(default=None, repr=False)
    cover_png: Optional[bytes] = field(default=None, repr=False)
    cover_error: Optional[RasterDecodeError] = None
    num_frames: int = 0
    num_plays: int = 0
