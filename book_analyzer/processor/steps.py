from collections.abc import Mapping

from book_analyzer.analysis.base import BaseAnalyzer
from book_analyzer.extraction.base import BaseExtractor
from book_analyzer.logging.logger import Log
from book_analyzer.processor.exceptions import (
    BookAnalysisError,
    EmptyContentError,
    UnsupportedTypeError,
)
from book_analyzer.processor.file_type import classify_file_type
from book_analyzer.processor.merger import merge
from book_analyzer.processor.models import FileType, PipelineState
from book_analyzer.processor.pipeline import PipelineContext, PipelineStep
from book_analyzer.readability.scorer import gunning_fog_label, reading_level_label, score


class ValidateTypeStep(PipelineStep):
    async def run(self, context: PipelineContext) -> PipelineContext:
        upload = context.upload
        file_type = classify_file_type(upload.media_type, upload.file_name)
        if file_type is None:
            raise UnsupportedTypeError(
                f"Invalid file type: {upload.media_type or 'unknown'} ({upload.file_name}). "
                "Only PDF and EPUB files are supported"
            )
        context.file_type = file_type
        context.state = PipelineState.TYPE_VALIDATED
        Log.info(f"Processing {file_type.value.upper()}: {upload.file_name}")
        return context


class ExtractStep(PipelineStep):
    def __init__(self, extractors: Mapping[FileType, BaseExtractor]) -> None:
        self._extractors = extractors

    async def run(self, context: PipelineContext) -> PipelineContext:
        if context.file_type is None:
            raise ValueError("PipelineContext.file_type must be set before extraction")
        extractor = self._extractors[context.file_type]
        context.extraction = extractor.extract(context.upload.content)
        context.state = PipelineState.EXTRACTED
        Log.info(
            f"Extracted {len(context.extraction.text)} chars from {context.upload.file_name}"
        )
        return context


class ValidateTextStep(PipelineStep):
    async def run(self, context: PipelineContext) -> PipelineContext:
        if context.extraction is None:
            raise ValueError("PipelineContext.extraction must be set before text validation")
        if not context.extraction.text.strip():
            raise EmptyContentError(
                "Could not extract readable text from the file. "
                "The file might be image-based, corrupted, or empty."
            )
        context.state = PipelineState.TEXT_VALIDATED
        return context


class ScoreStep(PipelineStep):
    async def run(self, context: PipelineContext) -> PipelineContext:
        if context.extraction is None:
            raise ValueError("PipelineContext.extraction must be set before scoring")
        context.readability = score(context.extraction.text)
        context.state = PipelineState.SCORED
        Log.info(
            f"Readability for {context.upload.file_name}: "
            f"grade={context.readability.reading_level} "
            f"({reading_level_label(context.readability.reading_level)}) "
            f"fog={context.readability.gunning_fog} "
            f"({gunning_fog_label(context.readability.gunning_fog)})"
        )
        return context


class AnalyzeStep(PipelineStep):
    def __init__(self, analyzer: BaseAnalyzer) -> None:
        self._analyzer = analyzer

    async def run(self, context: PipelineContext) -> PipelineContext:
        if context.extraction is None:
            raise ValueError("PipelineContext.extraction must be set before analysis")
        Log.info(f"Analyzing {context.upload.file_name} with AI provider")
        context.semantic = await self._analyzer.analyze(context.extraction.text)
        context.state = PipelineState.ANALYZED
        return context


class MergeStep(PipelineStep):
    async def run(self, context: PipelineContext) -> PipelineContext:
        if (
            context.extraction is None
            or context.readability is None
            or context.semantic is None
            or context.file_type is None
        ):
            raise ValueError("PipelineContext must be fully populated before merge")
        context.record = merge(
            context.extraction,
            context.readability,
            context.semantic,
            file_name=context.upload.file_name,
            file_type=context.file_type,
        )
        context.state = PipelineState.MERGED
        return context


class ReportFailureStep(PipelineStep):
    async def run(self, context: PipelineContext) -> PipelineContext:
        error = context.error
        if isinstance(error, BookAnalysisError):
            Log.error(
                f"Analysis of {context.upload.file_name} failed "
                f"[{error.code}, {error.kind.value}]: {context.error_message}"
            )
        elif error is not None:
            Log.exception(
                f"Analysis of {context.upload.file_name} failed unexpectedly: "
                f"{context.error_message}",
                error,
            )
        return context
