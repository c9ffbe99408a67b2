import io
from typing import Any

import pdfplumber
from pdfminer.pdfdocument import (
    PDFDestinationNotFound,
    PDFDocument,
    PDFNoOutlines,
    PDFNoPageLabels,
)
from pdfminer.pdftypes import PDFObjRef, resolve1
from pdfminer.psparser import PSLiteral

from book_analyzer.extraction.base import BaseExtractor
from book_analyzer.extraction.exceptions import ExtractionError
from book_analyzer.extraction.metadata import build_pdf_metadata, build_toc_tree, truncate_text
from book_analyzer.extraction.models import ExtractionResult, PageMarker, TocEntry

FRONT_MATTER_PAGES = 10


class PdfPlumberExtractor(BaseExtractor):
    """Extracts text, document info and outline from PDF using pdfplumber."""

    def __init__(self, max_text_length: int = 200_000) -> None:
        self._max_text_length = max_text_length

    def extract(self, content: bytes) -> ExtractionResult:
        try:
            with pdfplumber.open(io.BytesIO(content)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
                page_ids = {page.page_obj.pageid: page.page_number for page in pdf.pages}
                toc = self._read_outline(pdf.doc, page_ids)
                page_list = self._read_page_labels(pdf.doc, len(pages))
                metadata = build_pdf_metadata(
                    pdf.metadata,
                    page_count=len(pages),
                    front_matter="\n".join(pages[:FRONT_MATTER_PAGES]),
                )
        except ExtractionError:
            raise
        except Exception as exc:
            raise ExtractionError(f"pdfplumber extraction failed: {exc}") from exc

        text = truncate_text("\n".join(pages).strip(), self._max_text_length)
        return ExtractionResult(
            text=text,
            metadata=metadata,
            toc=toc,
            page_list=page_list,
            cover_image_url=None,
        )

    def _read_outline(
        self,
        doc: PDFDocument,
        page_ids: dict[int, int],
    ) -> list[TocEntry] | None:
        try:
            outlines = list(doc.get_outlines())
        except PDFNoOutlines:
            return None
        flat: list[tuple[int, str, str]] = []
        for level, title, dest, action, _se in outlines:
            page_number = self._resolve_page(doc, dest, action, page_ids)
            location = f"#page={page_number}" if page_number is not None else ""
            flat.append((level, (title or "").strip(), location))
        return build_toc_tree(flat)

    @staticmethod
    def _resolve_page(
        doc: PDFDocument,
        dest: Any,
        action: Any,
        page_ids: dict[int, int],
    ) -> int | None:
        if dest is None and action is not None:
            action = resolve1(action)
            if isinstance(action, dict):
                dest = action.get("D")
        dest = resolve1(dest)
        if isinstance(dest, (bytes, str, PSLiteral)):
            name = dest.name if isinstance(dest, PSLiteral) else dest
            try:
                dest = resolve1(doc.get_dest(name))
            except (PDFDestinationNotFound, KeyError):
                return None
        if isinstance(dest, dict):
            dest = resolve1(dest.get("D"))
        if isinstance(dest, list) and dest and isinstance(dest[0], PDFObjRef):
            return page_ids.get(dest[0].objid)
        return None

    @staticmethod
    def _read_page_labels(doc: PDFDocument, page_count: int) -> list[PageMarker] | None:
        try:
            labels = doc.get_page_labels()
            markers = [
                PageMarker(label=str(label), page_number=str(index + 1))
                for index, label in zip(range(page_count), labels)
            ]
        except PDFNoPageLabels:
            return None
        return markers or None
