from photovary.domain.interfaces import IProcessor, PipelineContext
from photovary.domain.models import FilterKind
from photovary.kernel.image.buffer import PixelBuffer
from photovary.features.lightness.logic import apply_lightness


class LightnessProcessor(IProcessor):
    kind = FilterKind.LIGHTNESS

    def __init__(self, percent: float):
        self.percent = percent

    def process(self, buffer: PixelBuffer, context: PipelineContext) -> PixelBuffer:
        return apply_lightness(buffer, self.percent)
