from book_analyzer.config.settings import Settings
from book_analyzer.extraction.base import BaseExtractor
from book_analyzer.extraction.epub_extractor import EpubExtractor
from book_analyzer.extraction.pdfplumber_adapter import PdfPlumberExtractor
from book_analyzer.extraction.pymupdf_adapter import PyMuPdfExtractor
from book_analyzer.processor.models import FileType


class ExtractorFactory:
    """Creates one extractor per supported file type based on settings."""

    PDF_ADAPTERS: dict[str, type[PdfPlumberExtractor] | type[PyMuPdfExtractor]] = {
        "pdfplumber": PdfPlumberExtractor,
        "pymupdf": PyMuPdfExtractor,
    }

    @classmethod
    def create(cls, settings: Settings) -> dict[FileType, BaseExtractor]:
        return {
            FileType.PDF: cls.create_pdf(settings),
            FileType.EPUB: EpubExtractor(
                max_text_length=settings.max_text_length,
                extract_cover=settings.extract_cover,
            ),
        }

    @classmethod
    def create_pdf(cls, settings: Settings) -> BaseExtractor:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.PDF_ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.PDF_ADAPTERS)}"
            )
        return adapter_cls(max_text_length=settings.max_text_length)
