import numpy as np
import imageio.v3 as iio
from photovary.domain.errors import InvalidBuffer
from photovary.domain.interfaces import IImageLoader
from photovary.kernel.image.buffer import PixelBuffer


def to_rgba8(img: np.ndarray) -> np.ndarray:
    """
    Expands grey, grey+alpha and RGB arrays to RGBA and scales deeper
    integer or float samples down to 8 bits.
    """
    if img.ndim == 3 and img.shape[2] == 1:
        img = img[..., 0]

    if img.dtype == np.uint16:
        img = (img.astype(np.float32) / 257.0 + 0.5).astype(np.uint8)
    elif img.dtype == np.bool_:
        img = img.astype(np.uint8) * 255
    elif np.issubdtype(img.dtype, np.floating):
        scale = 1.0 if img.size and float(np.nanmax(img)) <= 1.0 else 1.0 / 255.0
        img = (np.clip(np.nan_to_num(img) * scale, 0.0, 1.0) * 255.0 + 0.5).astype(np.uint8)
    elif img.dtype != np.uint8:
        img = np.clip(img, 0, 255).astype(np.uint8)

    h, w = img.shape[:2]
    if img.ndim == 2:
        rgba = np.empty((h, w, 4), dtype=np.uint8)
        rgba[..., :3] = img[..., None]
        rgba[..., 3] = 255
        return rgba
    if img.ndim == 3 and img.shape[2] == 2:
        rgba = np.empty((h, w, 4), dtype=np.uint8)
        rgba[..., :3] = img[..., :1]
        rgba[..., 3] = img[..., 1]
        return rgba
    if img.ndim == 3 and img.shape[2] == 3:
        rgba = np.empty((h, w, 4), dtype=np.uint8)
        rgba[..., :3] = img
        rgba[..., 3] = 255
        return rgba
    if img.ndim == 3 and img.shape[2] == 4:
        return np.ascontiguousarray(img)

    raise InvalidBuffer(f"Unsupported image layout {img.shape}")


class ImageLoader(IImageLoader):
    """
    Decoder for common 8/16-bit raster formats (JPEG, PNG, TIFF, ...).
    """

    def decode(self, data: bytes) -> PixelBuffer:
        img = iio.imread(data)
        return PixelBuffer.from_array(to_rgba8(np.asarray(img)))

    def load(self, file_path: str) -> PixelBuffer:
        with open(file_path, "rb") as f:
            return self.decode(f.read())
