from book_analyzer.analysis.factory import AnalyzerFactory
from book_analyzer.config.settings import Settings
from book_analyzer.extraction.factory import ExtractorFactory
from book_analyzer.logging.logger import Log
from book_analyzer.processor.models import AnalysisRecord, PipelineState, UploadedFile
from book_analyzer.processor.pipeline import PipelineContext, PipelineStep
from book_analyzer.processor.steps import (
    AnalyzeStep,
    ExtractStep,
    MergeStep,
    ReportFailureStep,
    ScoreStep,
    ValidateTextStep,
    ValidateTypeStep,
)


class Processor:
    """Orchestrates the book analysis pipeline for one upload at a time.

    Pipeline: validate type -> extract -> validate text -> score -> analyze -> merge.
    Any failure is reported by the failure step and re-raised unchanged; no
    partial record is ever returned.
    """

    def __init__(self, steps: list[PipelineStep], failed_step: PipelineStep) -> None:
        self._steps = steps
        self._failed_step = failed_step

    async def process(self, upload: UploadedFile) -> AnalysisRecord:
        """Run every step for the upload and return the merged record."""
        with Log.book(upload.file_name):
            return await self._run(upload)

    async def _run(self, upload: UploadedFile) -> AnalysisRecord:
        Log.info(
            f"Received {upload.file_name} ({len(upload.content)} bytes, "
            f"{upload.media_type or 'no media type'})"
        )
        context = PipelineContext(upload=upload)
        try:
            for step in self._steps:
                context = await step.run(context)
            if context.record is None:
                raise RuntimeError("Pipeline finished without producing a record")
        except Exception as exc:
            context.state = PipelineState.FAILED
            context.error = exc
            context.error_message = str(exc)
            await self._failed_step.run(context)
            raise

        context.state = PipelineState.COMPLETED
        Log.info(f"Analysis of {upload.file_name} completed")
        return context.record


def build_processor(settings: Settings) -> Processor:
    """Build a Processor with all required adapters."""
    extractors = ExtractorFactory.create(settings)
    analyzer = AnalyzerFactory.create(settings)
    steps: list[PipelineStep] = [
        ValidateTypeStep(),
        ExtractStep(extractors=extractors),
        ValidateTextStep(),
        ScoreStep(),
        AnalyzeStep(analyzer=analyzer),
        MergeStep(),
    ]
    return Processor(steps=steps, failed_step=ReportFailureStep())
