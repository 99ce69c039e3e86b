from photovary.kernel.image.buffer import PixelBuffer
from photovary.kernel.image.logic import color_channels, compose_rgba, truncate_to_uint8
from photovary.kernel.image.validation import ensure_percent


def apply_lightness(src: PixelBuffer, percent: float) -> PixelBuffer:
    """
    Linear blend towards white (percent > 0) or black (percent < 0).
    """
    alpha = ensure_percent(percent, "lightness") / 100.0
    img = src.pixels
    rgb = color_channels(img)

    if alpha >= 0:
        res = rgb * (1.0 - alpha) + 255.0 * alpha
    else:
        res = rgb * (1.0 + alpha)

    # Range can't be exceeded for |percent| <= 100; the clamp only guards storage.
    return src.derive(compose_rgba(truncate_to_uint8(res), img))
