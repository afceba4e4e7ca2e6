"""
File upload utilities for upload limits, object key generation and public URLs.
Provides common file operations shared by the storage adapter and the upload endpoints.
"""

import uuid
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence
from urllib.parse import urlsplit
from fastapi import UploadFile

from app.utils.exceptions import (
    ValidationError,
    TooManyFilesError,
    FileTooLargeError,
    UnrecognizedReferenceError
)

# Path segment that precedes "<bucket>/<key>" in a public object URL
PUBLIC_OBJECT_PATH = "/storage/v1/object/public"


@dataclass
class UploadedFile:
    """An upload read fully into memory and ready to be stored."""

    content: bytes
    filename: str
    content_type: str

    @property
    def size(self) -> int:
        return len(self.content)


class FileValidator:
    """Utility class for upload limit checks."""

    # Maximum file size (10MB by default)
    MAX_FILE_SIZE = 10 * 1024 * 1024

    @classmethod
    def validate_file_count(cls, count: int, max_files: int) -> int:
        """
        Validate the number of files in one request.

        Raises:
            ValidationError: If no file was sent
            TooManyFilesError: If more than max_files were sent
        """
        if count == 0:
            raise ValidationError("No files uploaded")
        if count > max_files:
            raise TooManyFilesError(max_files)
        return count

    @classmethod
    def validate_file_size(cls, filename: str, file_size: Optional[int], max_size: Optional[int] = None) -> Optional[int]:
        """
        Validate file size; an unknown size (None) passes.

        Raises:
            FileTooLargeError: If file size exceeds limit
        """
        max_allowed = max_size or cls.MAX_FILE_SIZE
        if file_size is not None and file_size > max_allowed:
            raise FileTooLargeError(filename, max_allowed)
        return file_size

    @classmethod
    async def read_uploads(
        cls,
        files: Sequence[UploadFile],
        max_files: int,
        max_size: Optional[int] = None
    ) -> List[UploadedFile]:
        """
        Check limits and read every upload into memory.

        All files are checked before the first byte is stored, so a request
        that breaks a limit never reaches the object store.

        Args:
            files: Multipart uploads
            max_files: Maximum number of files accepted by the endpoint
            max_size: Maximum size per file in bytes

        Returns:
            Uploaded files with their content
        """
        cls.validate_file_count(len(files), max_files)

        # Declared sizes first, so oversized requests fail without reading
        for file in files:
            cls.validate_file_size(file.filename or "upload", file.size, max_size)

        uploads = []
        for file in files:
            await file.seek(0)
            content = await file.read()
            filename = file.filename or "upload"
            cls.validate_file_size(filename, len(content), max_size)
            uploads.append(UploadedFile(
                content=content,
                filename=filename,
                content_type=file.content_type or "application/octet-stream"
            ))
        return uploads


def resolve_extension(content_type: Optional[str], original_filename: Optional[str]) -> str:
    """
    Pick the stored object's extension.

    Derived from the MIME type, falling back to the original filename's
    extension and finally to "bin". Returned without the leading dot.
    """
    if content_type:
        guessed = mimetypes.guess_extension(content_type.split(";")[0].strip())
        if guessed:
            return guessed.lstrip(".")
    if original_filename:
        suffix = Path(original_filename).suffix.lstrip(".")
        if suffix:
            return suffix.lower()
    return "bin"


def generate_object_key(content_type: Optional[str], original_filename: Optional[str], folder: str = "") -> str:
    """
    Generate a unique object key: "<folder>/<uuid4>.<ext>" (folder omitted when empty).
    """
    unique_name = f"{uuid.uuid4()}.{resolve_extension(content_type, original_filename)}"
    return "/".join(part for part in (folder.strip("/"), unique_name) if part)


def build_public_url(base_url: str, bucket: str, key: str) -> str:
    """Public URL of an object: <base>/storage/v1/object/public/<bucket>/<key>."""
    return f"{base_url.rstrip('/')}{PUBLIC_OBJECT_PATH}/{bucket}/{key}"


def key_from_public_url(url: str, bucket: str) -> str:
    """
    Derive an object key from its public URL.

    Raises:
        UnrecognizedReferenceError: If the URL does not follow the public URL
            template for this bucket
    """
    path = urlsplit(url).path
    marker = f"/object/public/{bucket}/"
    index = path.find(marker)
    if index == -1:
        raise UnrecognizedReferenceError()
    key = path[index + len(marker):]
    if not key:
        raise UnrecognizedReferenceError()
    return key
