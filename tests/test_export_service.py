import dataclasses
import os
import numpy as np
import pytest
from photovary.domain.models import AdjustmentParams, BatchConfig, ExportConfig, ExportFormat
from photovary.kernel.image.buffer import PixelBuffer
from photovary.services.export.encoding import encode_export
from photovary.services.export.service import VariantExportService


@pytest.fixture
def source_png(tmp_path):
    rng = np.random.default_rng(11)
    arr = rng.integers(1, 256, size=(12, 16, 4), dtype=np.uint8)
    arr[..., 3] = 255
    path = tmp_path / "photo.png"
    path.write_bytes(encode_export(PixelBuffer(arr), ExportFormat.PNG))
    return str(path)


@pytest.fixture
def config(tmp_path):
    return BatchConfig(
        variants=3,
        seed=2024,
        export=ExportConfig(export_path=str(tmp_path / "out"), export_fmt=ExportFormat.PNG),
    )


def test_run_single_writes_labelled_variants(source_png, config):
    written = VariantExportService.run_single(source_png, config)

    assert len(written) == 3
    for path in written:
        assert os.path.isfile(path)
        name = os.path.basename(path)
        assert name.startswith("photo_contrast[")
        assert name.endswith(".png")


def test_seed_makes_run_reproducible(source_png, config, tmp_path):
    first = [os.path.basename(p) for p in VariantExportService.run_single(source_png, config)]
    other = dataclasses.replace(
        config, export=dataclasses.replace(config.export, export_path=str(tmp_path / "again"))
    )
    second = [os.path.basename(p) for p in VariantExportService.run_single(source_png, other)]
    assert first == second


def test_fixed_params_single_output(source_png, config):
    params = AdjustmentParams(contrast=10, lightness=5, color_temperature=-20, saturation=15, highlight=40)
    fixed = dataclasses.replace(config, fixed_params=params)
    written = VariantExportService.run_single(source_png, fixed)

    assert len(written) == 1
    assert os.path.basename(written[0]) == (
        "photo_contrast[10]_lightness[5]_colorTemperature[-20]"
        "_sharpen[0]_saturation[15]_highlight[40].png"
    )


def test_run_single_raises_on_unreadable_file(tmp_path, config):
    bogus = tmp_path / "broken.png"
    bogus.write_bytes(b"not an image")
    with pytest.raises(RuntimeError):
        VariantExportService.run_single(str(bogus), config)


def test_run_batch_reports_per_file(source_png, config, tmp_path):
    bogus = tmp_path / "broken.png"
    bogus.write_bytes(b"not an image")

    report = VariantExportService.run_batch([source_png, str(bogus)], config)

    assert report.succeeded == 1
    assert report.failed == 1
    assert report.variants_written == 3
    assert str(bogus) in report.errors
    assert report.errors[str(bogus)].startswith("ERROR:")
    assert report.elapsed >= 0
