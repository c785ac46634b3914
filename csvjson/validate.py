from __future__ import annotations

from typing import Optional

from .errors import FileTooLarge, InvalidMimeType, NoFileSelected
from .models import UploadedFile
from .rules import EXPECTED_MIME_TYPE, MAX_FILE_SIZE_BYTES


def validate(file: Optional[UploadedFile]) -> UploadedFile:
    """
    Check a candidate file against the acceptance rules, first failure wins:

    - a file must be present
    - its media type must be exactly EXPECTED_MIME_TYPE
    - its size must not exceed MAX_FILE_SIZE_BYTES

    Content is never read here.
    """
    if file is None:
        raise NoFileSelected()

    if file.mime_type != EXPECTED_MIME_TYPE:
        raise InvalidMimeType()

    if file.size_bytes > MAX_FILE_SIZE_BYTES:
        raise FileTooLarge()

    return file
