"""File type detection and upload handling."""

from enum import Enum
from pathlib import Path

import magic
from fastapi import UploadFile


class FileType(str, Enum):
    """Detected input types."""

    PDF = "pdf"
    XML = "xml"
    UNKNOWN = "unknown"


# MIME type to FileType mapping
MIME_TO_FILETYPE: dict[str, FileType] = {
    "application/pdf": FileType.PDF,
    "application/xml": FileType.XML,
    "text/xml": FileType.XML,
}

# File extensions as fallback
EXTENSION_TO_FILETYPE: dict[str, FileType] = {
    ".pdf": FileType.PDF,
    ".xml": FileType.XML,
}


def detect_file_type(
    file_content: bytes | None = None,
    filename: str | None = None,
) -> FileType:
    """
    Detect file type from content and/or filename.

    Uses libmagic for content detection, falls back to extension.

    Args:
        file_content: File bytes for magic detection
        filename: Filename for extension-based fallback

    Returns:
        Detected FileType
    """
    detected_type: FileType | None = None

    if file_content:
        mime = magic.from_buffer(file_content, mime=True)
        detected_type = MIME_TO_FILETYPE.get(mime)

        # XML without a declaration is often reported as plain text
        if detected_type is None and mime == "text/plain" and file_content.lstrip().startswith(b"<"):
            detected_type = FileType.XML

    if detected_type is None and filename:
        ext = Path(filename).suffix.lower()
        detected_type = EXTENSION_TO_FILETYPE.get(ext)

    return detected_type or FileType.UNKNOWN


class FileHandler:
    """Read uploaded invoice files."""

    def __init__(self, max_size_bytes: int = 50 * 1024 * 1024):
        self.max_size_bytes = max_size_bytes

    def check_size(self, content: bytes) -> None:
        """
        Raises:
            ValueError: If content exceeds max size
        """
        if len(content) > self.max_size_bytes:
            raise ValueError(
                f"File size {len(content)} bytes exceeds maximum "
                f"{self.max_size_bytes} bytes"
            )

    async def read_upload(self, upload: UploadFile) -> tuple[bytes, FileType]:
        """
        Read uploaded file and detect its type.

        Args:
            upload: FastAPI UploadFile

        Returns:
            Tuple of (file_content, file_type)

        Raises:
            ValueError: If file exceeds max size
        """
        content = await upload.read()
        self.check_size(content)

        file_type = detect_file_type(content, upload.filename)
        return content, file_type
