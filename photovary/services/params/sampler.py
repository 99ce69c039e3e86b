import math
from typing import List, Optional, Union
import numpy as np
from photovary.domain.models import AdjustmentParams, FilterKind, ParamRange, PARAM_RANGES

SeedLike = Union[int, np.random.SeedSequence, None]


class ParameterSampler:
    """
    Draws AdjustmentParams uniformly within each field's range.

    Integer fields are round(U(0, 1) * span) + low with .5 rounded up, so
    both range ends are reachable. Sharpen is U(0, 1) - 0.5 kept to one
    decimal place.
    """

    def __init__(self, seed: SeedLike = None):
        self.rng = np.random.default_rng(seed)

    def _draw_int(self, rng: ParamRange) -> int:
        u = float(self.rng.random())
        return int(math.floor(u * rng.span + 0.5) + rng.low)

    def _draw_sharpen(self) -> float:
        u = float(self.rng.random())
        # `+ 0.0` turns a -0.0 into 0.0 so labels never show "-0.0"
        return round(u - 0.5, 1) + 0.0

    def draw(self) -> AdjustmentParams:
        return AdjustmentParams(
            contrast=self._draw_int(PARAM_RANGES[FilterKind.CONTRAST]),
            lightness=self._draw_int(PARAM_RANGES[FilterKind.LIGHTNESS]),
            color_temperature=self._draw_int(PARAM_RANGES[FilterKind.COLOR_TEMPERATURE]),
            sharpen=self._draw_sharpen(),
            saturation=self._draw_int(PARAM_RANGES[FilterKind.SATURATION]),
            highlight=self._draw_int(PARAM_RANGES[FilterKind.HIGHLIGHT]),
        )

    def draw_many(self, count: int) -> List[AdjustmentParams]:
        return [self.draw() for _ in range(max(0, count))]


def spawn_seeds(seed: Optional[int], count: int) -> List[np.random.SeedSequence]:
    """
    Independent child seeds, one per input file, stable across scheduling order.
    """
    return np.random.SeedSequence(seed).spawn(count)
