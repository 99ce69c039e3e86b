import cv2
import numpy as np
from photovary.kernel.image.buffer import PixelBuffer
from photovary.kernel.image.logic import compose_rgba
from photovary.kernel.image.validation import ensure_finite


def sharpen_kernel(percent: float) -> np.ndarray:
    """3x3 Laplacian-style kernel whose centre weight is 9 + percent."""
    kernel = -np.ones((3, 3), dtype=np.float32)
    kernel[1, 1] = 9.0 + percent
    return kernel


def apply_sharpen(src: PixelBuffer, percent: float) -> PixelBuffer:
    """
    Convolves the colour channels with :func:`sharpen_kernel`; alpha is kept.
    """
    percent = ensure_finite(percent, "sharpen")
    if src.is_empty():
        return src.derive(src.pixels)

    img = src.pixels
    rgb = src.rgb()
    res = cv2.filter2D(rgb, -1, sharpen_kernel(percent), borderType=cv2.BORDER_REFLECT_101)
    return src.derive(compose_rgba(res, img))
