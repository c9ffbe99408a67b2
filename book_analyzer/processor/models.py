from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from book_analyzer.extraction.models import PageMarker, TocEntry


class FileType(str, Enum):
    PDF = "pdf"
    EPUB = "epub"


class PipelineState(str, Enum):
    """Lifecycle of a single analysis request."""

    RECEIVED = "received"
    TYPE_VALIDATED = "type_validated"
    EXTRACTED = "extracted"
    TEXT_VALIDATED = "text_validated"
    SCORED = "scored"
    ANALYZED = "analyzed"
    MERGED = "merged"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class UploadedFile:
    """A single uploaded book, held in memory for one pipeline run."""

    content: bytes
    media_type: str
    file_name: str


@dataclass(frozen=True)
class AnalysisRecord:
    """Consolidated output of one pipeline run."""

    metadata: dict[str, object]
    summary: str
    table_of_contents: list[TocEntry] | None
    page_list: list[PageMarker] | None
    cover_image: str | None
    file_name: str
    file_type: FileType
    processed_at: datetime

    def to_dict(self) -> dict[str, object]:
        """Serialize to the JSON response shape (camelCase keys)."""
        return {
            "metadata": dict(self.metadata),
            "summary": self.summary,
            "tableOfContents": (
                [entry.to_dict() for entry in self.table_of_contents]
                if self.table_of_contents is not None
                else None
            ),
            "pageList": (
                [marker.to_dict() for marker in self.page_list]
                if self.page_list is not None
                else None
            ),
            "coverImage": self.cover_image,
            "fileName": self.file_name,
            "fileType": self.file_type.value,
            "processedAt": self.processed_at.isoformat(),
        }
