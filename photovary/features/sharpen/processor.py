from photovary.domain.interfaces import IProcessor, PipelineContext
from photovary.domain.models import FilterKind
from photovary.kernel.image.buffer import PixelBuffer
from photovary.features.sharpen.logic import apply_sharpen


class SharpenProcessor(IProcessor):
    """
    Not part of the default chain; runs only when an order lists it.
    """

    kind = FilterKind.SHARPEN

    def __init__(self, percent: float):
        self.percent = percent

    def process(self, buffer: PixelBuffer, context: PipelineContext) -> PixelBuffer:
        return apply_sharpen(buffer, self.percent)
