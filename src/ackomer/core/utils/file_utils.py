"""
File utility functions for uploaded audio.
"""

import logging
import os
import uuid
from datetime import datetime
from pathlib import Path
from typing import Optional

logger = logging.getLogger("ackomer")


def get_file_extension(filename: str) -> str:
    """Get file extension from filename."""
    return Path(filename).suffix.lower()


def create_directory(directory_path: str) -> bool:
    """Create directory if it doesn't exist."""
    try:
        Path(directory_path).mkdir(parents=True, exist_ok=True)
        return True
    except OSError:
        return False


def build_storage_filename(original_filename: Optional[str], prefix: str = "audio") -> str:
    """Unique on-disk name that keeps the original extension."""
    timestamp = datetime.utcnow().strftime("%Y%m%d%H%M%S%f")
    unique_id = uuid.uuid4().hex[:8]
    extension = get_file_extension(original_filename or "")
    return f"{prefix}-{timestamp}-{unique_id}{extension}"


def save_upload_bytes(
    content: bytes,
    storage_directory: str,
    original_filename: Optional[str] = None,
) -> str:
    """
    Write uploaded bytes to the storage directory.

    Args:
        content: Raw file content
        storage_directory: Directory to save the file in
        original_filename: Client-side filename, used for the extension

    Returns:
        Path to the saved file

    Raises:
        OSError: If the directory cannot be created or the file written
    """
    Path(storage_directory).mkdir(parents=True, exist_ok=True)
    path = os.path.join(storage_directory, build_storage_filename(original_filename))
    with open(path, "wb") as fh:
        fh.write(content)
    return path


def delete_file(filepath: Optional[str]) -> bool:
    """Remove a file, returning False when it was already gone."""
    if not filepath:
        return False
    try:
        os.remove(filepath)
        return True
    except FileNotFoundError:
        return False
    except OSError as e:
        logger.warning(f"Failed to delete file {filepath}: {e}")
        return False
