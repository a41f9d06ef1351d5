"""
Photo upload policy: a file must be present, declare an image media type and
fit within the configured size limit. Accepted photos are stored under a name
derived from the bootcamp id, never the uploaded name.
"""
import os
import shutil
import logging
from pathlib import Path

from src.services.errors import UploadErrorKind, UploadRejected, UpstreamUnavailable

logger = logging.getLogger(__name__)


def validate_upload(media_type, size_bytes, max_size_bytes):
    """Raise UploadRejected for the first failing rule; a missing file has media_type None."""
    if media_type is None:
        raise UploadRejected(UploadErrorKind.MISSING_FILE, "Please upload a file")
    if not media_type.startswith("image"):
        raise UploadRejected(UploadErrorKind.WRONG_TYPE, "Please upload an image file")
    if size_bytes > max_size_bytes:
        raise UploadRejected(
            UploadErrorKind.TOO_LARGE,
            f"Please upload an image less than {max_size_bytes}",
        )


def photo_filename(bootcamp_id, original_name):
    ext = os.path.splitext(os.path.basename(original_name or ""))[1]
    return f"photo_{bootcamp_id}{ext}"


def store_file(stream, upload_path, filename):
    """Copy the binary ``stream`` to ``upload_path/filename``."""
    try:
        directory = Path(upload_path)
        directory.mkdir(parents=True, exist_ok=True)
        with open(directory / filename, "wb") as out:
            shutil.copyfileobj(stream, out)
    except OSError as e:
        logger.error(f"Problem with file upload {filename}: {e}")
        raise UpstreamUnavailable("Problem with file upload") from e
