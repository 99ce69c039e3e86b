import numpy as np
from photovary.kernel.image.buffer import PixelBuffer
from photovary.kernel.image.logic import color_channels, compose_rgba, round_to_uint8
from photovary.kernel.image.validation import ensure_percent

CONTRAST_THRESHOLD = 127


def apply_contrast(src: PixelBuffer, percent: float) -> PixelBuffer:
    """
    Stretches (percent > 0) or flattens (percent < 0) channel values around
    the 127 pivot. At exactly 100 % the image is binarised.
    """
    alpha = ensure_percent(percent, "contrast") / 100.0
    img = src.pixels
    rgb = color_channels(img)
    threshold = CONTRAST_THRESHOLD

    if alpha == 1.0:
        res = np.where(rgb > threshold, 255, 0).astype(np.uint8)
        return src.derive(compose_rgba(res, img))

    if alpha >= 0:
        stretched = threshold + (rgb - threshold) / (1.0 - alpha)
    else:
        stretched = threshold + (rgb - threshold) * (1.0 + alpha)

    return src.derive(compose_rgba(round_to_uint8(stretched), img))
