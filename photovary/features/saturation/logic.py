import numpy as np
from numba import njit, prange  # type: ignore
from photovary.kernel.image.buffer import PixelBuffer
from photovary.kernel.image.validation import ensure_percent


@njit(cache=True)
def _to_byte(v: float) -> int:
    if v <= 0.0:
        return 0
    if v >= 255.0:
        return 255
    return int(v)


@njit(parallel=True, cache=True)
def _saturation_jit(img: np.ndarray, increment: float) -> np.ndarray:
    h, w, _ = img.shape
    res = img.copy()

    for y in prange(h):
        for x in range(w):
            r = float(img[y, x, 0])
            g = float(img[y, x, 1])
            b = float(img[y, x, 2])

            c_max = max(r, max(g, b))
            c_min = min(r, min(g, b))
            delta = (c_max - c_min) / 255.0
            # Grey pixels have no hue to scale
            if delta == 0.0:
                continue

            value = (c_max + c_min) / 255.0
            lum = value / 2.0
            if lum < 0.5:
                sat = delta / value
            else:
                sat = delta / (2.0 - value)

            mid = lum * 255.0
            if increment >= 0.0:
                if increment + sat >= 1.0:
                    alpha = sat
                else:
                    alpha = 1.0 - increment
                alpha = 1.0 / alpha - 1.0
                nr = r + (r - mid) * alpha
                ng = g + (g - mid) * alpha
                nb = b + (b - mid) * alpha
            else:
                nr = mid + (r - mid) * (1.0 + increment)
                ng = mid + (g - mid) * (1.0 + increment)
                nb = mid + (b - mid) * (1.0 + increment)

            res[y, x, 0] = _to_byte(nr)
            res[y, x, 1] = _to_byte(ng)
            res[y, x, 2] = _to_byte(nb)

    return res


def apply_saturation(src: PixelBuffer, percent: float) -> PixelBuffer:
    """
    HSL saturation scaling done directly in RGB.

    Each channel is pushed away from (or pulled towards) the pixel's HSL
    lightness ``L * 255``. Positive increments are capped so a pixel never
    exceeds full saturation; negative increments scale the distance by
    ``1 + increment``. Achromatic pixels are copied through untouched.
    """
    increment = ensure_percent(percent, "saturation") / 100.0
    if src.is_empty():
        return src.derive(src.pixels)
    return src.derive(_saturation_jit(src.to_array(), increment))
