import io

import numpy as np
from PIL import Image

from .exceptions import RasterDecodeError


def decode_raster(png: bytes) -> np.ndarray:
    """Decode finished PNG bytes to a (height, width, 4) uint8 RGBA array."""
    try:
        with Image.open(io.BytesIO(png)) as img:
            img.load()
            rgba = img.convert('RGBA')
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
        #Pillow reports broken or oversized PNG data through any of these
        raise RasterDecodeError(details=str(e)) from e

    return np.array(rgba, dtype=np.uint8).reshape((rgba.height, rgba.width, 4))
