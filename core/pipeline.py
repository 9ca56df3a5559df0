"""
Normalization Pipeline - decode, rotate upright, crop/resize, re-encode.

The pipeline turns a freshly captured still into a canonical image at the
same path. `run()` reports the outcome as a PipelineResult; the
`normalize_capture()` wrapper applies the capture contract of always handing
back a usable path, falling back to the untouched original on any failure.
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Tuple, Union

from core.constants import ErrorMessages, NormalizationConstants
from core.enums import PipelineStage
from core.exceptions import PipelineError
from core.image.decoder import decode_image
from core.image.encoder import encode_image
from core.image.orientation import normalize_orientation
from core.image.processors import crop_and_resize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NormalizationConfig:
    """Output parameters of the pipeline"""

    aspect_ratio: Tuple[int, int] = (
        NormalizationConstants.ASPECT_WIDTH,
        NormalizationConstants.ASPECT_HEIGHT,
    )
    output_size: Tuple[int, int] = (
        NormalizationConstants.OUTPUT_WIDTH,
        NormalizationConstants.OUTPUT_HEIGHT,
    )
    output_format: str = NormalizationConstants.OUTPUT_FORMAT
    quality: int = NormalizationConstants.MAX_QUALITY

    def __post_init__(self):
        if min(self.aspect_ratio) <= 0 or min(self.output_size) <= 0:
            raise ValueError(
                f"Aspect ratio {self.aspect_ratio} and output size {self.output_size} "
                "must be positive"
            )
        if not (NormalizationConstants.MIN_QUALITY <= self.quality <= NormalizationConstants.MAX_QUALITY):
            raise ValueError(f"Quality must be between 1 and 100, got {self.quality}")

    @classmethod
    def from_settings(cls, settings: Any) -> "NormalizationConfig":
        """Build from the `normalization` settings group."""
        return cls(
            aspect_ratio=(settings.aspect_width, settings.aspect_height),
            output_size=(settings.output_width, settings.output_height),
            output_format=settings.output_format,
            quality=settings.quality,
        )


@dataclass(frozen=True)
class PipelineResult:
    """Outcome of one pipeline run"""

    path: Path
    error: Optional[PipelineError] = None
    failed_stage: Optional[PipelineStage] = None
    processing_time_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, path: Path, processing_time_ms: int = 0) -> "PipelineResult":
        return cls(path=path, processing_time_ms=processing_time_ms)

    @classmethod
    def fallback(
        cls,
        path: Path,
        error: PipelineError,
        stage: PipelineStage,
        processing_time_ms: int = 0,
    ) -> "PipelineResult":
        return cls(
            path=path,
            error=error,
            failed_stage=stage,
            processing_time_ms=processing_time_ms,
        )


class NormalizationPipeline:
    """
    Four-stage post-capture normalization.

    Stages run synchronously on the caller's thread. Instances hold only the
    immutable config, so one pipeline can serve concurrent runs on distinct
    paths.
    """

    def __init__(self, config: Optional[NormalizationConfig] = None):
        self.config = config or NormalizationConfig()

    def run(self, path: Union[str, Path]) -> PipelineResult:
        """
        Normalize the image at `path` in place.

        Args:
            path: Captured still image

        Returns:
            PipelineResult; on failure it carries the error and the stage
            that raised it, and the file at `path` is unchanged
        """
        path = Path(path)
        start_time = time.perf_counter()
        stage = PipelineStage.DECODING

        try:
            stage_start = start_time
            buffer, orientation = decode_image(path)
            stage_start = _log_stage(path, stage, stage_start)

            stage = PipelineStage.NORMALIZING
            buffer = normalize_orientation(buffer, orientation)
            stage_start = _log_stage(path, stage, stage_start)

            stage = PipelineStage.CROPPING
            buffer = crop_and_resize(buffer, self.config.aspect_ratio, self.config.output_size)
            stage_start = _log_stage(path, stage, stage_start)

            stage = PipelineStage.ENCODING
            encode_image(buffer, path, self.config.output_format, self.config.quality)
            _log_stage(path, stage, stage_start)

        except PipelineError as e:
            return PipelineResult.fallback(path, e, e.stage or stage, _elapsed_ms(start_time))
        except Exception as e:
            error = PipelineError(
                ErrorMessages.UNEXPECTED_FAILURE.format(stage=stage.value, error=e), stage
            )
            error.__cause__ = e
            return PipelineResult.fallback(path, error, stage, _elapsed_ms(start_time))

        elapsed = _elapsed_ms(start_time)
        logger.info(
            f"Normalized {path.name} from {orientation.name} to "
            f"{buffer.width}x{buffer.height} {self.config.output_format} in {elapsed}ms"
        )
        return PipelineResult.success(path, elapsed)

    def normalize_capture(self, path: Union[str, Path]) -> str:
        """
        Normalize a capture, never failing.

        Post-processing must not block the capture itself: any failure is
        logged and the original file path is returned as-is.

        Args:
            path: Captured still image

        Returns:
            `path` as a string, normalized or untouched
        """
        try:
            result = self.run(path)
        except Exception as e:
            logger.error(f"Normalization of {path} aborted: {e}", exc_info=True)
            return str(path)

        if not result.ok:
            logger.warning(
                f"Normalization of {result.path} failed while {result.failed_stage.value}, "
                f"returning original capture: {result.error}",
                exc_info=result.error,
            )
        return str(result.path)


def normalize_capture(path: Union[str, Path], config: Optional[NormalizationConfig] = None) -> str:
    """Normalize a capture with a one-off pipeline."""
    return NormalizationPipeline(config).normalize_capture(path)


def _elapsed_ms(start_time: float) -> int:
    return int((time.perf_counter() - start_time) * 1000)


def _log_stage(path: Path, stage: PipelineStage, start_time: float) -> float:
    """Log a finished stage and return the start time of the next one."""
    logger.debug(f"{path.name}: {stage.value} took {_elapsed_ms(start_time)}ms")
    return time.perf_counter()
