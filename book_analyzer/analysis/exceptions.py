from book_analyzer.processor.exceptions import BookAnalysisError, ErrorKind


class AnalyzerError(BookAnalysisError):
    """Raised when semantic analysis fails."""

    code = "AI_SERVICE_ERROR"
    kind = ErrorKind.UPSTREAM
    status_code = 503
    title = "AI analysis failed"


class AnalyzerTimeoutError(AnalyzerError):
    """Raised when the analyzer does not answer within the configured timeout."""


class AnalyzerNetworkError(AnalyzerError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
