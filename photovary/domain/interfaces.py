from typing import Protocol, Any, runtime_checkable
from dataclasses import dataclass, field
from photovary.domain.types import Dimensions
from photovary.kernel.image.buffer import PixelBuffer


@dataclass
class PipelineContext:
    """
    Shared state passed through the pipeline.
    """

    original_size: Dimensions
    # Values gathered by individual steps (e.g. the highlight threshold)
    metrics: dict[str, Any] = field(default_factory=dict)


@runtime_checkable
class IProcessor(Protocol):
    """
    Interface for any image processing step.
    """

    def process(self, buffer: PixelBuffer, context: PipelineContext) -> PixelBuffer: ...


class IImageLoader(Protocol):
    """
    Decodes encoded image bytes into an RGBA buffer.
    """

    def decode(self, data: bytes) -> PixelBuffer: ...

    def load(self, file_path: str) -> PixelBuffer: ...


class IImageEncoder(Protocol):
    """
    Encodes an RGBA buffer into file bytes.
    """

    def encode(self, buffer: PixelBuffer) -> bytes: ...
