import io
import tifffile
from PIL import Image
from photovary.domain.interfaces import IImageEncoder
from photovary.domain.models import ExportFormat
from photovary.kernel.image.buffer import PixelBuffer


def encode_export(buffer: PixelBuffer, export_fmt: ExportFormat, quality: int = 95) -> bytes:
    """Encodes an RGBA buffer to JPEG, PNG or TIFF bytes."""
    if buffer.is_empty():
        raise ValueError("Cannot encode an empty image")

    output_buf = io.BytesIO()
    if export_fmt == ExportFormat.TIFF:
        tifffile.imwrite(output_buf, buffer.rgb(), photometric="rgb", compression="lzw")
    elif export_fmt == ExportFormat.PNG:
        Image.fromarray(buffer.to_array()).save(output_buf, format="PNG")
    else:
        # JPEG has no alpha channel
        Image.fromarray(buffer.rgb()).save(output_buf, format="JPEG", quality=quality)
    return output_buf.getvalue()


class ExportEncoder(IImageEncoder):
    """
    Encoder bound to one format and quality setting.
    """

    def __init__(self, export_fmt: ExportFormat = ExportFormat.JPEG, quality: int = 95):
        self.export_fmt = export_fmt
        self.quality = quality

    @property
    def extension(self) -> str:
        return self.export_fmt.extension

    def encode(self, buffer: PixelBuffer) -> bytes:
        return encode_export(buffer, self.export_fmt, self.quality)
