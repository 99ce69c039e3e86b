from dataclasses import dataclass
import numpy as np
from photovary.domain.errors import ComputationFailure
from photovary.kernel.image.buffer import PixelBuffer
from photovary.domain.types import ALPHA, MAX_VALUE
from photovary.kernel.image.logic import color_channels, get_luminance, round_to_uint8
from photovary.kernel.image.validation import ensure_finite

# Upper bound of the brightening strength; `bright` is light / 100 / HIGHLIGHT_MAX.
HIGHLIGHT_MAX = 4
MID_WEIGHT = 0.75


@dataclass(frozen=True)
class HighlightRates:
    """
    Per-pixel blend coefficients: out = c * mid_rate + bright_rate.
    """

    mid_rate: np.ndarray
    bright_rate: np.ndarray
    mask: np.ndarray
    mean_threshold: float


def compute_highlight_rates(lum: np.ndarray, light: float) -> HighlightRates:
    """
    Splits the image with an adaptive threshold (mean of squared luminance)
    and builds the two blend-rate fields.

    Inside the highlight region both rates are constant. Outside they scale
    with the squared luminance, so the boost fades smoothly towards black
    instead of stopping at a hard seam on the mask boundary.
    """
    if lum.size == 0:
        raise ComputationFailure("Cannot derive a highlight threshold from an empty image")

    thresh = lum * lum
    mean_thresh = float(thresh.mean())
    if mean_thresh <= 0.0:
        raise ComputationFailure("Adaptive highlight threshold is zero (image is black)")

    bright = light / 100.0 / HIGHLIGHT_MAX
    mid = 1.0 + HIGHLIGHT_MAX * bright * MID_WEIGHT

    mask = thresh > mean_thresh
    mid_rate = np.where(mask, mid, (mid - 1.0) / mean_thresh * thresh + 1.0)
    bright_rate = np.where(mask, bright, bright / mean_thresh * thresh)

    return HighlightRates(
        mid_rate=mid_rate,
        bright_rate=bright_rate,
        mask=mask,
        mean_threshold=mean_thresh,
    )


def apply_highlight(src: PixelBuffer, light: float) -> PixelBuffer:
    """
    Brightens the already bright regions of the image. The result is always
    fully opaque.
    """
    light = ensure_finite(light, "highlight")
    rates = compute_highlight_rates(get_luminance(src.pixels), light)
    return apply_highlight_rates(src, rates)


def apply_highlight_rates(src: PixelBuffer, rates: HighlightRates) -> PixelBuffer:
    img = src.pixels
    rgb = color_channels(img)
    res = rgb * rates.mid_rate[..., None] + rates.bright_rate[..., None]
    res = np.minimum(res, 255.0)

    out = np.empty(img.shape, dtype=np.uint8)
    out[..., :3] = round_to_uint8(res)
    out[..., ALPHA] = MAX_VALUE
    return src.derive(out)
