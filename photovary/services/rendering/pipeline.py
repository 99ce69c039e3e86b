from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Union
from photovary.domain.interfaces import IProcessor, PipelineContext
from photovary.domain.models import AdjustmentParams, FilterKind, DEFAULT_ORDER
from photovary.kernel.image.buffer import PixelBuffer
from photovary.kernel.system.logging import get_logger
from photovary.kernel.system.performance import time_function
from photovary.features.contrast.processor import ContrastProcessor
from photovary.features.lightness.processor import LightnessProcessor
from photovary.features.temperature.processor import ColorTemperatureProcessor
from photovary.features.sharpen.processor import SharpenProcessor
from photovary.features.saturation.processor import SaturationProcessor
from photovary.features.highlight.processor import HighlightProcessor

logger = get_logger(__name__)

ProcessorFactory = Callable[[float], IProcessor]

PROCESSOR_FACTORIES: Dict[FilterKind, ProcessorFactory] = {
    FilterKind.CONTRAST: ContrastProcessor,
    FilterKind.LIGHTNESS: LightnessProcessor,
    FilterKind.COLOR_TEMPERATURE: ColorTemperatureProcessor,
    FilterKind.SHARPEN: SharpenProcessor,
    FilterKind.SATURATION: SaturationProcessor,
    FilterKind.HIGHLIGHT: HighlightProcessor,
}


@dataclass(frozen=True)
class StepSuccess:
    kind: FilterKind
    buffer: PixelBuffer

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class StepFailure:
    kind: FilterKind
    reason: str

    @property
    def ok(self) -> bool:
        return False


StepResult = Union[StepSuccess, StepFailure]


@dataclass
class PipelineRun:
    """
    Outcome of one pipeline invocation.
    """

    source: PixelBuffer
    output: PixelBuffer
    params: AdjustmentParams
    steps: List[StepResult] = field(default_factory=list)
    metrics: Dict[str, object] = field(default_factory=dict)

    @property
    def failures(self) -> List[StepFailure]:
        return [s for s in self.steps if isinstance(s, StepFailure)]

    @property
    def applied(self) -> List[FilterKind]:
        return [s.kind for s in self.steps if isinstance(s, StepSuccess)]


def run_step(
    processor: IProcessor,
    kind: FilterKind,
    buffer: PixelBuffer,
    context: PipelineContext,
) -> StepResult:
    """
    Runs one filter and turns any error it raises into a StepFailure.
    """
    try:
        result = processor.process(buffer, context)
    except Exception as e:
        return StepFailure(kind, f"{type(e).__name__}: {e}")

    if not isinstance(result, PixelBuffer):
        return StepFailure(kind, f"Expected PixelBuffer, got {type(result).__name__}")
    if result.size != buffer.size:
        return StepFailure(
            kind,
            f"Dimension mismatch: {result.width}x{result.height} "
            f"from {buffer.width}x{buffer.height} input",
        )
    return StepSuccess(kind, result)


class AdjustmentPipeline:
    """
    Applies an ordered chain of filters, each consuming the previous output.

    A failed step is a no-op: the next step receives the buffer as it stood
    before the failure, so a run always yields a buffer.
    """

    def __init__(
        self,
        order: Sequence[FilterKind] = DEFAULT_ORDER,
        factories: Optional[Mapping[FilterKind, ProcessorFactory]] = None,
    ) -> None:
        self.order = tuple(order)
        self.factories: Dict[FilterKind, ProcessorFactory] = dict(PROCESSOR_FACTORIES)
        if factories:
            self.factories.update(factories)

    def _resolve_params(self, params: AdjustmentParams) -> AdjustmentParams:
        out_of_range = params.out_of_range()
        if not out_of_range:
            return params
        clamped = params.clamped()
        for kind, value in out_of_range.items():
            logger.warning(
                f"{kind.value}={value} outside its range, clamped to {clamped.value_for(kind)}"
            )
        return clamped

    def _build(self, kind: FilterKind, params: AdjustmentParams) -> IProcessor:
        factory = self.factories.get(kind)
        if factory is None:
            raise KeyError(f"No processor registered for {kind.value}")
        return factory(params.value_for(kind))

    @time_function
    def run(
        self,
        src: PixelBuffer,
        params: AdjustmentParams,
        order: Optional[Sequence[FilterKind]] = None,
    ) -> PipelineRun:
        try:
            params = self._resolve_params(params)
        except Exception as e:
            logger.warning(f"Unusable parameters ({type(e).__name__}: {e}), using neutral values")
            params = AdjustmentParams()
        # A malformed source still runs; every step then fails on it
        context = PipelineContext(original_size=getattr(src, "size", (0, 0)))
        run = PipelineRun(source=src, output=src, params=params, metrics=context.metrics)

        current = src
        for kind in order if order is not None else self.order:
            try:
                processor = self._build(kind, params)
            except Exception as e:
                step: StepResult = StepFailure(kind, f"{type(e).__name__}: {e}")
            else:
                step = run_step(processor, kind, current, context)

            if isinstance(step, StepSuccess):
                current = step.buffer
            else:
                logger.warning(f"Skipping {kind.value} step: {step.reason}")
            run.steps.append(step)

        run.output = current
        return run

    def apply(
        self,
        src: PixelBuffer,
        params: AdjustmentParams,
        order: Optional[Sequence[FilterKind]] = None,
    ) -> PixelBuffer:
        return self.run(src, params, order).output
