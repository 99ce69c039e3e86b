from dataclasses import dataclass, field, fields, asdict, replace
from typing import Dict, Any, Tuple, Optional
from enum import Enum
import math
from photovary.kernel.image.validation import validate_float, validate_int


class FilterKind(Enum):
    CONTRAST = "contrast"
    LIGHTNESS = "lightness"
    COLOR_TEMPERATURE = "color_temperature"
    SHARPEN = "sharpen"
    SATURATION = "saturation"
    HIGHLIGHT = "highlight"

    @classmethod
    def parse(cls, name: str) -> "FilterKind":
        """
        Accepts 'color_temperature', 'color-temperature' or 'COLOR_TEMPERATURE'.
        """
        key = name.strip().lower().replace("-", "_")
        for kind in cls:
            if kind.value == key:
                return kind
        raise ValueError(f"Unknown filter kind: {name}")


# Sharpen is left out of the default chain.
DEFAULT_ORDER: Tuple[FilterKind, ...] = (
    FilterKind.CONTRAST,
    FilterKind.LIGHTNESS,
    FilterKind.COLOR_TEMPERATURE,
    FilterKind.SATURATION,
    FilterKind.HIGHLIGHT,
)


@dataclass(frozen=True)
class ParamRange:
    low: float
    high: float
    integer: bool = True

    @property
    def span(self) -> float:
        return self.high - self.low

    def contains(self, value: float) -> bool:
        return self.low <= value <= self.high

    def clamp(self, value: float) -> float:
        # NaN compares false both ways and would slip through min/max
        if math.isnan(value):
            value = 0
        res = min(self.high, max(self.low, value))
        return int(res) if self.integer else float(res)


PARAM_RANGES: Dict[FilterKind, ParamRange] = {
    FilterKind.CONTRAST: ParamRange(-50, 50),
    FilterKind.LIGHTNESS: ParamRange(-50, 50),
    FilterKind.COLOR_TEMPERATURE: ParamRange(-100, 100),
    FilterKind.SHARPEN: ParamRange(-0.5, 0.5, integer=False),
    FilterKind.SATURATION: ParamRange(-100, 100),
    FilterKind.HIGHLIGHT: ParamRange(-50, 200),
}


@dataclass(frozen=True)
class AdjustmentParams:
    """
    The six knobs drawn for one output variant.
    """

    contrast: int = 0  # [-50, 50] percent
    lightness: int = 0  # [-50, 50] percent
    color_temperature: int = 0  # [-100, 100]
    sharpen: float = 0.0  # [-0.5, 0.5], kernel centre offset
    saturation: int = 0  # [-100, 100] percent
    highlight: int = 0  # [-50, 200]

    def value_for(self, kind: FilterKind) -> float:
        return getattr(self, kind.value)

    def out_of_range(self) -> Dict[FilterKind, float]:
        """
        Returns the fields lying outside their documented range.
        """
        return {
            kind: self.value_for(kind)
            for kind, rng in PARAM_RANGES.items()
            if not rng.contains(self.value_for(kind))
        }

    def clamped(self) -> "AdjustmentParams":
        return replace(
            self,
            **{
                kind.value: rng.clamp(self.value_for(kind))
                for kind, rng in PARAM_RANGES.items()
            },
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_flat_dict(cls, data: Dict[str, Any]) -> "AdjustmentParams":
        """
        from JSON. Unknown keys are ignored, unparsable values fall back to neutral.
        """
        return cls(
            contrast=validate_int(data.get("contrast")),
            lightness=validate_int(data.get("lightness")),
            color_temperature=validate_int(data.get("color_temperature")),
            sharpen=validate_float(data.get("sharpen")),
            saturation=validate_int(data.get("saturation")),
            highlight=validate_int(data.get("highlight")),
        )


class ExportFormat(str, Enum):
    JPEG = "JPEG"
    PNG = "PNG"
    TIFF = "TIFF"

    @property
    def extension(self) -> str:
        return {"JPEG": "jpg", "PNG": "png", "TIFF": "tiff"}[self.value]


DEFAULT_FILENAME_PATTERN = (
    "{{ original_name }}"
    "_contrast[{{ contrast }}]"
    "_lightness[{{ lightness }}]"
    "_colorTemperature[{{ color_temperature }}]"
    "_sharpen[{{ '%g' % sharpen }}]"
    "_saturation[{{ saturation }}]"
    "_highlight[{{ highlight }}]"
)


@dataclass(frozen=True)
class ExportConfig:
    """
    Export parameters (path, format, naming).
    """

    export_path: str = "output"
    export_fmt: ExportFormat = ExportFormat.JPEG
    jpeg_quality: int = 95
    filename_pattern: str = DEFAULT_FILENAME_PATTERN


@dataclass(frozen=True)
class BatchConfig:
    """
    How many variants to draw per image and how to draw them.
    """

    variants: int = 5
    seed: Optional[int] = None
    order: Tuple[FilterKind, ...] = DEFAULT_ORDER
    # When set, every variant uses these parameters instead of random draws.
    fixed_params: Optional[AdjustmentParams] = None
    max_workers: int = 1
    export: ExportConfig = field(default_factory=ExportConfig)
