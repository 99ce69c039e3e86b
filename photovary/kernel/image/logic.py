import numpy as np
from photovary.domain.types import ImageBuffer, ChannelBuffer, LUMA_COEFFS, MAX_VALUE, ALPHA


def color_channels(img: ImageBuffer) -> ChannelBuffer:
    """Float64 copy of the R, G, B planes."""
    return img[..., :3].astype(np.float64)


def round_half_up(values: np.ndarray) -> np.ndarray:
    """
    Rounds .5 away from negative infinity, unlike numpy's banker's rounding.
    """
    return np.floor(values + 0.5)


def truncate_to_uint8(values: np.ndarray) -> ImageBuffer:
    """
    Clamps to [0, 255] then drops the fractional part.
    """
    return np.clip(values, 0, MAX_VALUE).astype(np.uint8)


def round_to_uint8(values: np.ndarray) -> ImageBuffer:
    """
    Clamps to [0, 255] then rounds half up.
    """
    return np.clip(round_half_up(values), 0, MAX_VALUE).astype(np.uint8)


def compose_rgba(rgb: ImageBuffer, src: ImageBuffer) -> ImageBuffer:
    """
    New RGBA array from 8-bit colour planes, alpha copied from *src*.
    """
    res = np.empty(src.shape, dtype=np.uint8)
    res[..., :3] = rgb
    res[..., ALPHA] = src[..., ALPHA]
    return res


def get_luminance(img: ImageBuffer) -> np.ndarray:
    """
    Floating point BT.601 grey level in [0, 255].
    """
    return color_channels(img) @ LUMA_COEFFS
