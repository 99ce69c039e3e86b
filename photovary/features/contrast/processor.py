from photovary.domain.interfaces import IProcessor, PipelineContext
from photovary.domain.models import FilterKind
from photovary.kernel.image.buffer import PixelBuffer
from photovary.features.contrast.logic import apply_contrast


class ContrastProcessor(IProcessor):
    kind = FilterKind.CONTRAST

    def __init__(self, percent: float):
        self.percent = percent

    def process(self, buffer: PixelBuffer, context: PipelineContext) -> PixelBuffer:
        return apply_contrast(buffer, self.percent)
