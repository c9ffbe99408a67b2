import pymupdf

from book_analyzer.extraction.base import BaseExtractor
from book_analyzer.extraction.exceptions import ExtractionError
from book_analyzer.extraction.metadata import build_pdf_metadata, build_toc_tree, truncate_text
from book_analyzer.extraction.models import ExtractionResult, PageMarker

FRONT_MATTER_PAGES = 10


class PyMuPdfExtractor(BaseExtractor):
    """Extracts text, document info and outline from PDF using PyMuPDF."""

    def __init__(self, max_text_length: int = 200_000) -> None:
        self._max_text_length = max_text_length

    def extract(self, content: bytes) -> ExtractionResult:
        try:
            with pymupdf.open(stream=content, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                pages = [page.get_text() for page in doc]
                outline = [
                    (level, title.strip(), f"#page={page}" if page > 0 else "")
                    for level, title, page in doc.get_toc(simple=True)
                ]
                page_list = None
                if doc.get_page_labels():
                    page_list = [
                        PageMarker(label=page.get_label(), page_number=str(page.number + 1))
                        for page in doc
                    ]
                metadata = build_pdf_metadata(
                    doc.metadata or {},
                    page_count=len(pages),
                    front_matter="\n".join(pages[:FRONT_MATTER_PAGES]),
                )
        except ExtractionError:
            raise
        except Exception as exc:
            raise ExtractionError(f"pymupdf extraction failed: {exc}") from exc

        return ExtractionResult(
            text=truncate_text("\n".join(pages).strip(), self._max_text_length),
            metadata=metadata,
            toc=build_toc_tree(outline),
            page_list=page_list,
            cover_image_url=None,
        )
