from typing import Any, cast
import math
import numpy as np
from photovary.domain.errors import InvalidBuffer, OutOfRangeParameter
from photovary.domain.types import ImageBuffer, CHANNELS


def ensure_rgba(arr: Any) -> ImageBuffer:
    """
    Ensures the input is an (H, W, 4) uint8 numpy array and returns it as an ImageBuffer.
    Unlike a raw cast this validates at runtime, so a bad buffer fails loudly.
    """
    if not isinstance(arr, np.ndarray):
        raise InvalidBuffer(f"Expected numpy.ndarray, got {type(arr)}")

    if arr.ndim != 3 or arr.shape[2] != CHANNELS:
        raise InvalidBuffer(f"Expected (H, W, {CHANNELS}) RGBA array, got shape {arr.shape}")

    if arr.dtype != np.uint8:
        raise InvalidBuffer(f"Expected uint8 dtype, got {arr.dtype}")

    return cast(ImageBuffer, arr)


def ensure_finite(value: Any, name: str) -> float:
    """Returns *value* as a float, rejecting NaN, infinities and non-numbers."""
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        raise OutOfRangeParameter(f"{name} must be numeric, got {value!r}") from None
    if not math.isfinite(numeric):
        raise OutOfRangeParameter(f"{name} must be finite, got {value!r}")
    return numeric


def ensure_percent(value: Any, name: str, limit: float = 100.0) -> float:
    """Returns *value* if it lies within [-limit, limit]."""
    numeric = ensure_finite(value, name)
    if abs(numeric) > limit:
        raise OutOfRangeParameter(f"{name} must lie within [-{limit:g}, {limit:g}], got {numeric:g}")
    return numeric


def validate_float(val: Any, default: float = 0.0) -> float:
    """Ensures a value is a float, providing a default if None."""
    if val is None:
        return default
    try:
        return float(val)
    except (TypeError, ValueError):
        return default


def validate_int(val: Any, default: int = 0) -> int:
    """Ensures a value is an int, providing a default if None."""
    if val is None:
        return default
    try:
        return int(val)
    except (TypeError, ValueError, OverflowError):
        return default
