from book_analyzer.processor.exceptions import BookAnalysisError, ErrorKind


class ExtractionError(BookAnalysisError):
    """Raised when a buffer cannot be parsed as its declared format."""

    code = "PARSE_ERROR"
    kind = ErrorKind.CLIENT
    status_code = 422
    title = "Failed to parse file"
