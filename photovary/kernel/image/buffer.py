from typing import Any, Tuple
import numpy as np
from photovary.domain.errors import InvalidBuffer
from photovary.domain.types import ImageBuffer, Dimensions, CHANNELS
from photovary.kernel.image.validation import ensure_rgba


class PixelBuffer:
    """
    Immutable 8-bit RGBA raster.

    Pixels live in one contiguous (H, W, 4) array, row-major, with a stride
    of 4 * W bytes. The array is a private read-only copy, so filters can
    never alter a buffer they were handed; they build a new one via
    :meth:`derive`.
    """

    __slots__ = ("_pixels",)

    def __init__(self, pixels: Any):
        arr = np.array(ensure_rgba(pixels), dtype=np.uint8, order="C", copy=True)
        arr.flags.writeable = False
        self._pixels: ImageBuffer = arr

    @classmethod
    def from_array(cls, pixels: Any) -> "PixelBuffer":
        return cls(pixels)

    @classmethod
    def from_bytes(cls, width: int, height: int, data: bytes) -> "PixelBuffer":
        if width < 0 or height < 0:
            raise InvalidBuffer(f"Negative dimensions: {width}x{height}")
        expected = CHANNELS * width * height
        if len(data) != expected:
            raise InvalidBuffer(
                f"Expected {expected} bytes for {width}x{height} RGBA, got {len(data)}"
            )
        arr = np.frombuffer(data, dtype=np.uint8).reshape((height, width, CHANNELS))
        return cls(arr)

    @classmethod
    def blank(cls, width: int, height: int, rgba: Tuple[int, int, int, int] = (0, 0, 0, 255)) -> "PixelBuffer":
        arr = np.empty((height, width, CHANNELS), dtype=np.uint8)
        arr[...] = np.array(rgba, dtype=np.uint8)
        return cls(arr)

    # Geometry

    @property
    def pixels(self) -> ImageBuffer:
        """Read-only view of the backing array."""
        return self._pixels

    @property
    def width(self) -> int:
        return int(self._pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self._pixels.shape[0])

    @property
    def size(self) -> Dimensions:
        return self.height, self.width

    @property
    def stride(self) -> int:
        return CHANNELS * self.width

    @property
    def nbytes(self) -> int:
        return int(self._pixels.nbytes)

    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    # Access

    def index(self, row: int, col: int, channel: int) -> int:
        """Flat offset of a channel value: row * stride + 4 * col + channel."""
        if not 0 <= row < self.height:
            raise IndexError(f"row {row} out of range [0, {self.height})")
        if not 0 <= col < self.width:
            raise IndexError(f"col {col} out of range [0, {self.width})")
        if not 0 <= channel < CHANNELS:
            raise IndexError(f"channel {channel} out of range [0, {CHANNELS})")
        return row * self.stride + CHANNELS * col + channel

    def row(self, i: int) -> ImageBuffer:
        """Read-only flat view of one row (length == stride)."""
        if not 0 <= i < self.height:
            raise IndexError(f"row {i} out of range [0, {self.height})")
        return self._pixels[i].reshape(self.stride)

    def pixel(self, row: int, col: int) -> Tuple[int, int, int, int]:
        self.index(row, col, 0)
        r, g, b, a = (int(v) for v in self._pixels[row, col])
        return r, g, b, a

    # Copies out

    def to_array(self) -> ImageBuffer:
        """Fresh writable copy of the pixels."""
        return self._pixels.copy()

    def to_bytes(self) -> bytes:
        return self._pixels.tobytes()

    def rgb(self) -> np.ndarray:
        """(H, W, 3) copy without the alpha channel, for encoders."""
        return np.ascontiguousarray(self._pixels[..., :3])

    def derive(self, pixels: Any) -> "PixelBuffer":
        """
        New buffer of identical dimensions built from *pixels*.
        """
        arr = ensure_rgba(pixels)
        if arr.shape[:2] != self.size:
            raise InvalidBuffer(
                f"Derived buffer is {arr.shape[1]}x{arr.shape[0]}, "
                f"expected {self.width}x{self.height}"
            )
        return PixelBuffer(arr)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return self.size == other.size and bool(np.array_equal(self._pixels, other._pixels))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"PixelBuffer(width={self.width}, height={self.height})"
