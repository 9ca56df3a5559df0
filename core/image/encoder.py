"""
Encoder stage: lossy re-encode written atomically over the destination.
"""

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Union

from core.constants import ErrorMessages, NormalizationConstants
from core.exceptions import EncodeError
from core.image.buffer import ImageBuffer
from core.image.converters import ImageConverters

logger = logging.getLogger(__name__)


def encode_image(
    buffer: ImageBuffer,
    path: Union[str, Path],
    image_format: str = NormalizationConstants.OUTPUT_FORMAT,
    quality: int = NormalizationConstants.MAX_QUALITY,
) -> Path:
    """
    Encode a buffer and replace the file at `path` with it.

    The image is written to a temporary file next to the destination,
    flushed to disk and then renamed over `path`, so readers only ever see
    the old file or the complete new one. An existing destination must be
    writable, and its permission bits carry over to the new file.

    Args:
        buffer: Image to encode (BGR layout)
        path: Destination file, overwritten if it exists
        image_format: Pillow format name (WEBP, JPEG)
        quality: Encoder quality, 1-100

    Returns:
        Destination path

    Raises:
        EncodeError: On any I/O or encoder failure; the destination is left
            untouched
    """
    destination = Path(path)
    tmp_path = None
    replaces_existing = destination.exists()

    # A rename only needs a writable directory, so check the file itself
    if replaces_existing and not os.access(destination, os.W_OK):
        raise EncodeError(ErrorMessages.DESTINATION_NOT_WRITABLE.format(path=destination))

    try:
        pil_image = ImageConverters.numpy_to_pil(buffer.pixels)

        fd, tmp_path = tempfile.mkstemp(
            prefix=f".{destination.name}.", suffix=".tmp", dir=destination.parent
        )
        with os.fdopen(fd, "wb") as handle:
            pil_image.save(handle, format=image_format, quality=quality)
            handle.flush()
            os.fsync(handle.fileno())

        if os.path.getsize(tmp_path) == 0:
            raise EncodeError(ErrorMessages.EMPTY_OUTPUT.format(path=destination))

        # mkstemp creates 0600 files
        if replaces_existing:
            shutil.copymode(destination, tmp_path)

        os.replace(tmp_path, destination)
        tmp_path = None

    except EncodeError:
        raise
    except (OSError, ValueError, KeyError) as e:
        raise EncodeError(ErrorMessages.ENCODE_FAILED.format(path=destination, error=e)) from e
    finally:
        if tmp_path is not None:
            _discard(tmp_path)

    logger.debug(f"Encoded {buffer.width}x{buffer.height} {image_format} q={quality} to {destination}")
    return destination


def _discard(tmp_path: str) -> None:
    try:
        os.remove(tmp_path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Failed to remove temporary file {tmp_path}: {e}")
