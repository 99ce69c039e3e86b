import os
from dataclasses import dataclass
from typing import Optional
from photovary.domain.models import BatchConfig, ExportConfig, ExportFormat, DEFAULT_ORDER


@dataclass(frozen=True)
class AppConfig:
    max_workers: int
    variants_per_image: int
    jpeg_quality: int
    default_export_dir: str
    config_dir: str
    perf_log_path: Optional[str]

    @property
    def config_file(self) -> str:
        return os.path.join(self.config_dir, "config.json")


# User dir env (defaults to ~/.photovary)
BASE_USER_DIR = os.path.abspath(
    os.getenv("PHOTOVARY_USER_DIR", os.path.expanduser("~/.photovary"))
)

APP_CONFIG = AppConfig(
    max_workers=max(1, (os.cpu_count() or 1) - 1),
    variants_per_image=5,
    jpeg_quality=95,
    default_export_dir=os.getenv("PHOTOVARY_OUTPUT_DIR", "./output"),
    config_dir=BASE_USER_DIR,
    perf_log_path=os.getenv("PHOTOVARY_PERF_LOG") or None,
)

DEFAULT_BATCH_CONFIG = BatchConfig(
    variants=APP_CONFIG.variants_per_image,
    seed=None,
    order=DEFAULT_ORDER,
    fixed_params=None,
    max_workers=1,
    export=ExportConfig(
        export_path=APP_CONFIG.default_export_dir,
        export_fmt=ExportFormat.JPEG,
        jpeg_quality=APP_CONFIG.jpeg_quality,
    ),
)
