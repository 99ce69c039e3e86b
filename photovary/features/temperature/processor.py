from photovary.domain.interfaces import IProcessor, PipelineContext
from photovary.domain.models import FilterKind
from photovary.kernel.image.buffer import PixelBuffer
from photovary.features.temperature.logic import apply_color_temperature


class ColorTemperatureProcessor(IProcessor):
    kind = FilterKind.COLOR_TEMPERATURE

    def __init__(self, n: float):
        self.n = n

    def process(self, buffer: PixelBuffer, context: PipelineContext) -> PixelBuffer:
        return apply_color_temperature(buffer, self.n)
