"""
Constants and configuration values for the Capture Normalizer.
Centralizes all magic numbers and configuration constants.
"""


# Normalization Constants
class NormalizationConstants:
    """Constants for the post-capture normalization pipeline."""

    # Target aspect ratio (width:height)
    ASPECT_WIDTH = 3
    ASPECT_HEIGHT = 4

    # Output resolution
    OUTPUT_WIDTH = 1000
    OUTPUT_HEIGHT = 1334

    # Encoding
    OUTPUT_FORMAT = "WEBP"
    MAX_QUALITY = 100
    MIN_QUALITY = 1

    # EXIF
    EXIF_ORIENTATION_TAG = 274  # 0x0112

    SUPPORTED_OUTPUT_FORMATS = ["WEBP", "JPEG"]


# Capture Constants
class CaptureConstants:
    """Constants related to still capture."""

    TEST_CAMERA_ID = "test"

    # Temporary capture files
    TEMPORARY_FILE_PREFIX = "CAP"
    TEMPORARY_FILE_SUFFIX = ".webp"
    CACHE_DIR_NAME = "capture-normalizer"

    # Format the raw capture is written in before normalization
    CAPTURE_FORMAT = "JPEG"
    CAPTURE_QUALITY = 95

    # Allowed target rotations in degrees
    VALID_ROTATIONS = (0, 90, 180, 270)

    # Worker pool
    DEFAULT_MAX_WORKERS = 2

    # Test image generation
    TEST_IMAGE_WIDTH = 1920
    TEST_IMAGE_HEIGHT = 1080


# System Constants
class SystemConstants:
    """Constants for system operations."""

    LOG_LEVEL_DEFAULT = "INFO"
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    DEFAULT_HOST = "0.0.0.0"
    DEFAULT_PORT = 8000


# Error Messages
class ErrorMessages:
    """Standard error messages."""

    # Pipeline errors
    DECODE_FAILED = "Failed to decode image {path}: {error}"
    INVALID_DIMENSIONS = "Invalid image dimensions {width}x{height}"
    ENCODE_FAILED = "Failed to encode image to {path}: {error}"
    EMPTY_OUTPUT = "Encoder produced an empty file for {path}"
    DESTINATION_NOT_WRITABLE = "Destination {path} is not writable"
    UNEXPECTED_FAILURE = "Unexpected failure while {stage}: {error}"

    # Camera errors
    CAMERA_NOT_FOUND = "Camera {camera_id} not found"
    CAMERA_CONNECTION_FAILED = "Failed to connect to camera {camera_id}"
    CAMERA_CAPTURE_FAILED = "Failed to capture from camera {camera_id}"
    INVALID_ROTATION = "Invalid target rotation {rotation}, expected one of {valid}"

    # Capture errors
    TEMP_FILE_FAILED = "Failed to create capture file in {directory}: {error}"
    CAPTURE_WRITE_FAILED = "Failed to write captured frame to {path}: {error}"
