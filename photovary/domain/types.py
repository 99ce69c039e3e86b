from typing import TypeAlias, Tuple
import numpy as np
import numpy.typing as npt


# Image Types
# 8-bit interleaved RGBA raster (Height, Width, 4)
ImageBuffer: TypeAlias = npt.NDArray[np.uint8]
# Floating point working copy of the colour channels (Height, Width, 3)
ChannelBuffer: TypeAlias = npt.NDArray[np.float64]

# (Height, Width)
Dimensions: TypeAlias = Tuple[int, int]

CHANNELS = 4
RED, GREEN, BLUE, ALPHA = 0, 1, 2, 3
MAX_VALUE = 255

# ITU-R BT.601 weights, the RGB -> grey conversion used by OpenCV
LUMA_COEFFS = np.array([0.299, 0.587, 0.114], dtype=np.float64)
