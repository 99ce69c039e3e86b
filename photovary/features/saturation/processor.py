from photovary.domain.interfaces import IProcessor, PipelineContext
from photovary.domain.models import FilterKind
from photovary.kernel.image.buffer import PixelBuffer
from photovary.features.saturation.logic import apply_saturation


class SaturationProcessor(IProcessor):
    kind = FilterKind.SATURATION

    def __init__(self, percent: float):
        self.percent = percent

    def process(self, buffer: PixelBuffer, context: PipelineContext) -> PixelBuffer:
        return apply_saturation(buffer, self.percent)
