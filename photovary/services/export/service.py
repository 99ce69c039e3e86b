import os
import time
import traceback
import multiprocessing
import concurrent.futures
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Union
import numpy as np
from photovary.domain.models import BatchConfig
from photovary.infrastructure.loaders.image_loader import ImageLoader
from photovary.kernel.system.logging import current_level, get_logger, init_worker_logging
from photovary.services.export.encoding import ExportEncoder
from photovary.services.export.templating import FilenameTemplater
from photovary.services.params.sampler import ParameterSampler, spawn_seeds
from photovary.services.rendering.pipeline import AdjustmentPipeline

logger = get_logger(__name__)

WorkerResult = Union[List[str], str]


def _generate_variants_worker(
    file_path: str,
    config: BatchConfig,
    seed: Optional[np.random.SeedSequence],
) -> WorkerResult:
    """
    Worker function for ProcessPoolExecutor.
    Builds its own loader, pipeline, sampler and templater so nothing is shared
    between processes. Returns the written paths, or the traceback text.
    """
    try:
        loader = ImageLoader()
        pipeline = AdjustmentPipeline(order=config.order)
        sampler = ParameterSampler(seed)
        templater = FilenameTemplater()
        export = config.export
        encoder = ExportEncoder(export.export_fmt, export.jpeg_quality)

        source = loader.load(file_path)
        original_name = os.path.splitext(os.path.basename(file_path))[0]

        if config.fixed_params is not None:
            param_sets = [config.fixed_params]
        else:
            param_sets = sampler.draw_many(config.variants)

        written = []
        for index, params in enumerate(param_sets):
            run = pipeline.run(source, params)
            for failure in run.failures:
                logger.warning(f"{original_name} variant {index}: {failure.kind.value} skipped")

            img_bytes = encoder.encode(run.output)
            base_name = templater.render_variant(
                export.filename_pattern, original_name, run.params, variant=index
            )
            out_path = os.path.join(export.export_path, f"{base_name}.{encoder.extension}")

            os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
            with open(out_path, "wb") as out_f:
                out_f.write(img_bytes)
            written.append(out_path)

        return written
    except Exception:
        # Return full traceback so the main process can log it if child fails silently
        return f"ERROR: {traceback.format_exc()}"


def _get_mp_context() -> multiprocessing.context.BaseContext:
    """
    Returns the appropriate multiprocessing context for the current platform.
    Uses "spawn" on macOS for stability with C-libraries, and defaults to
    system standards elsewhere.
    """
    import platform

    start_method = "spawn" if platform.system() == "Darwin" else None
    return multiprocessing.get_context(start_method)


@dataclass
class BatchReport:
    written: Dict[str, List[str]] = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)
    elapsed: float = 0.0

    @property
    def succeeded(self) -> int:
        return len(self.written)

    @property
    def failed(self) -> int:
        return len(self.errors)

    @property
    def variants_written(self) -> int:
        return sum(len(paths) for paths in self.written.values())


class VariantExportService:
    """
    Generates randomized variants for a set of image files.
    """

    @staticmethod
    def run_single(file_path: str, config: BatchConfig, seed: Optional[int] = None) -> List[str]:
        """
        Generates the variants of one file in-process. Raises on failure.
        """
        seeds = spawn_seeds(seed if seed is not None else config.seed, 1)
        result = _generate_variants_worker(file_path, config, seeds[0])
        if isinstance(result, str):
            raise RuntimeError(result)
        return result

    @staticmethod
    def run_batch(files: Sequence[str], config: BatchConfig) -> BatchReport:
        """
        Executes the batch, in parallel across files when max_workers > 1.
        """
        os.makedirs(config.export.export_path, exist_ok=True)
        report = BatchReport()
        start_time = time.perf_counter()
        seeds = spawn_seeds(config.seed, len(files))
        limit = max(1, min(config.max_workers, len(files)))

        if limit == 1:
            results = [
                _generate_variants_worker(path, config, seed) for path, seed in zip(files, seeds)
            ]
        else:
            logger.info(f"Starting batch with {limit} workers...")
            with concurrent.futures.ProcessPoolExecutor(
                max_workers=limit,
                mp_context=_get_mp_context(),
                initializer=init_worker_logging,
                initargs=(current_level(),),
            ) as executor:
                futures = [
                    executor.submit(_generate_variants_worker, path, config, seed)
                    for path, seed in zip(files, seeds)
                ]
                results = []
                for future in futures:
                    try:
                        results.append(future.result())
                    except Exception as e:
                        results.append(f"ERROR: Pool exception: {e}")

        for path, res in zip(files, results):
            if isinstance(res, str):
                logger.error(f"Error processing {os.path.basename(path)}:\n{res}")
                report.errors[path] = res
            else:
                logger.info(f"{os.path.basename(path)}: {len(res)} variant(s) written")
                report.written[path] = res

        report.elapsed = time.perf_counter() - start_time
        return report
