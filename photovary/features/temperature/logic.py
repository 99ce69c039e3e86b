import math
import numpy as np
from photovary.domain.types import RED, GREEN, BLUE, MAX_VALUE
from photovary.kernel.image.buffer import PixelBuffer
from photovary.kernel.image.validation import ensure_finite


def temperature_level(n: float) -> int:
    """Per-channel shift applied for a temperature setting of *n*."""
    return int(math.floor(ensure_finite(n, "color_temperature") / 2))


def apply_color_temperature(src: PixelBuffer, n: float) -> PixelBuffer:
    """
    Warm (n > 0) or cool (n < 0) shift: red and green move by floor(n / 2),
    blue moves by the opposite amount.
    """
    level = temperature_level(n)
    if level == 0:
        return src.derive(src.pixels)

    # Shifts beyond one full channel range saturate identically.
    level = max(-MAX_VALUE, min(MAX_VALUE, level))
    res = src.to_array().astype(np.int32)
    res[..., RED] += level
    res[..., GREEN] += level
    res[..., BLUE] -= level
    np.clip(res[..., :3], 0, MAX_VALUE, out=res[..., :3])

    return src.derive(res.astype(np.uint8))
