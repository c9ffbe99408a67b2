from datetime import datetime, timezone

from book_analyzer.analysis.models import SemanticAnalysis
from book_analyzer.extraction.models import ExtractionResult
from book_analyzer.processor.models import AnalysisRecord, FileType
from book_analyzer.readability.models import ReadabilityScores


def merge(
    extraction: ExtractionResult,
    readability: ReadabilityScores,
    semantic: SemanticAnalysis,
    file_name: str,
    file_type: FileType,
    processed_at: datetime | None = None,
) -> AnalysisRecord:
    """Combine extractor, scorer and analyzer output into one record.

    Extracted metadata is written first, so classification and readability
    keys override any extracted key of the same name.
    """
    metadata: dict[str, object] = {
        **extraction.metadata,
        "lcc": semantic.lcc,
        "bisac": semantic.bisac,
        "lcsh": semantic.lcsh,
        "fieldOfStudy": semantic.field_of_study,
        "discipline": semantic.discipline,
        "readingLevel": readability.reading_level,
        "gunningFog": readability.gunning_fog,
    }
    return AnalysisRecord(
        metadata=metadata,
        summary=semantic.summary,
        table_of_contents=list(extraction.toc) if extraction.toc is not None else None,
        page_list=list(extraction.page_list) if extraction.page_list is not None else None,
        cover_image=extraction.cover_image_url,
        file_name=file_name,
        file_type=file_type,
        processed_at=processed_at or datetime.now(timezone.utc),
    )
