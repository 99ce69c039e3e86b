from photovary.domain.interfaces import IProcessor, PipelineContext
from photovary.domain.models import FilterKind
from photovary.kernel.image.buffer import PixelBuffer
from photovary.kernel.image.logic import get_luminance
from photovary.kernel.image.validation import ensure_finite
from photovary.features.highlight.logic import apply_highlight_rates, compute_highlight_rates


class HighlightProcessor(IProcessor):
    kind = FilterKind.HIGHLIGHT

    def __init__(self, light: float):
        self.light = light

    def process(self, buffer: PixelBuffer, context: PipelineContext) -> PixelBuffer:
        light = ensure_finite(self.light, "highlight")
        rates = compute_highlight_rates(get_luminance(buffer.pixels), light)

        # Record the adaptive split for callers inspecting the run
        context.metrics["highlight_mean_threshold"] = rates.mean_threshold
        context.metrics["highlight_fraction"] = float(rates.mask.mean())

        return apply_highlight_rates(buffer, rates)
