"""Error taxonomy. Every message here is shown to the user verbatim."""

from __future__ import annotations


class ConversionError(Exception):
    """Base class for everything that can put a session into the error state."""

    kind = "conversion_error"
    message = "Conversion failed."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        if message is not None:
            self.message = message


class FileValidationError(ConversionError):
    """Raised before any read."""


class NoFileSelected(FileValidationError):
    kind = "no_file_selected"
    message = "No file selected. Please upload a CSV file."


class InvalidMimeType(FileValidationError):
    kind = "invalid_mime_type"
    message = "Invalid file type. Please upload a valid CSV file."


class FileTooLarge(FileValidationError):
    kind = "file_too_large"
    message = "File size is too large. Please upload a file smaller than 10MB."


class ReadError(ConversionError):
    kind = "io_failure"
    message = "Error reading the file. Please try again."


class TableParseError(ConversionError):
    """Raised after a successful read."""


class InsufficientData(TableParseError):
    kind = "insufficient_data"
    message = "Invalid CSV format. Please make sure your file has data."
