from enum import Enum


class ErrorKind(str, Enum):
    """Who is at fault for a failed request."""

    CLIENT = "client"
    UPSTREAM = "upstream"
    CONFIG = "config"


class BookAnalysisError(Exception):
    """Base exception for all pipeline failures surfaced to the caller."""

    code: str = "INTERNAL_ERROR"
    kind: ErrorKind = ErrorKind.CLIENT
    status_code: int = 500
    title: str = "Book analysis failed"

    def to_dict(self) -> dict[str, str]:
        """Render the error the way the boundary reports it."""
        return {
            "error": self.title,
            "code": self.code,
            "message": str(self),
        }


class UnsupportedTypeError(BookAnalysisError):
    """Raised when an upload is neither a PDF nor an EPUB."""

    code = "INVALID_FILE_TYPE"
    kind = ErrorKind.CLIENT
    status_code = 400
    title = "Invalid file type"


class EmptyContentError(BookAnalysisError):
    """Raised when a file parses but yields no readable text."""

    code = "NO_TEXT_CONTENT"
    kind = ErrorKind.CLIENT
    status_code = 422
    title = "No text content found"


class FileReadError(BookAnalysisError):
    """Raised when a file cannot be read from disk."""

    code = "FILE_READ_ERROR"
    kind = ErrorKind.CLIENT
    status_code = 400
    title = "File could not be read"


class ConfigurationError(BookAnalysisError):
    """Raised when settings cannot produce a working pipeline."""

    code = "CONFIG_ERROR"
    kind = ErrorKind.CONFIG
    status_code = 500
    title = "Invalid configuration"
