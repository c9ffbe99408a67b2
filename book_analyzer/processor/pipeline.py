from abc import ABC, abstractmethod
from dataclasses import dataclass

from book_analyzer.analysis.models import SemanticAnalysis
from book_analyzer.extraction.models import ExtractionResult
from book_analyzer.processor.models import (
    AnalysisRecord,
    FileType,
    PipelineState,
    UploadedFile,
)
from book_analyzer.readability.models import ReadabilityScores


@dataclass(slots=True)
class PipelineContext:
    upload: UploadedFile
    state: PipelineState = PipelineState.RECEIVED
    file_type: FileType | None = None
    extraction: ExtractionResult | None = None
    readability: ReadabilityScores | None = None
    semantic: SemanticAnalysis | None = None
    record: AnalysisRecord | None = None
    error: Exception | None = None
    error_message: str = ""


class PipelineStep(ABC):
    @abstractmethod
    async def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
