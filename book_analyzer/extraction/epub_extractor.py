"""EPUB extraction on top of ebooklib: spine text, navigation, cover and OPF metadata."""

import base64
import tempfile
from collections.abc import Iterator
from pathlib import Path
from xml.etree.ElementTree import Element

import defusedxml.ElementTree as ET
import ebooklib
from bs4 import BeautifulSoup, Tag
from ebooklib import epub

from book_analyzer.extraction.base import BaseExtractor
from book_analyzer.extraction.exceptions import ExtractionError
from book_analyzer.extraction.metadata import (
    compact,
    estimate_page_count,
    find_isbn,
    normalize_date,
    truncate_text,
)
from book_analyzer.extraction.models import ExtractionResult, PageMarker, TocEntry
from book_analyzer.logging.logger import Log

NCX_MEDIA_TYPE = "application/x-dtbncx+xml"
OPF_SCHEME_ATTR = "{http://www.idpf.org/2007/opf}scheme"


class EpubExtractor(BaseExtractor):
    """Extracts spine text, navigation, cover and OPF metadata from EPUB."""

    def __init__(self, max_text_length: int = 200_000, extract_cover: bool = True) -> None:
        self._max_text_length = max_text_length
        self._extract_cover = extract_cover

    def extract(self, content: bytes) -> ExtractionResult:
        try:
            with tempfile.TemporaryDirectory(prefix="epub_") as temp_dir:
                path = Path(temp_dir) / "book.epub"
                path.write_bytes(content)
                book = epub.read_epub(str(path), options={"ignore_ncx": True})
            return self._extract_book(book)
        except ExtractionError:
            raise
        except Exception as exc:
            raise ExtractionError(
                f"Failed to parse the EPUB. The file may be corrupted, DRM-protected, "
                f"or in an unsupported format: {exc}"
            ) from exc

    def _extract_book(self, book: epub.EpubBook) -> ExtractionResult:
        chapters = []
        for idref, _linear in book.spine:
            item = book.get_item_with_id(idref)
            if item is not None:
                chapters.append(_document_text(item.get_content()))
        text = "\n\n".join(chapter for chapter in chapters if chapter)
        Log.debug(f"EPUB spine: {len(book.spine)} items, {len(text)} chars")

        ncx = self._load_ncx(book)
        toc = _toc_entries(book.toc) or None

        page_list = None
        nav_item = next((item for item in book.get_items() if isinstance(item, epub.EpubNav)), None)
        if nav_item is not None:
            page_list = _nav_page_list(BeautifulSoup(nav_item.content, "html.parser"))
        if page_list is None and ncx is not None:
            page_list = _ncx_page_list(ncx)

        cover = self._cover_data_uri(book) if self._extract_cover else None

        return ExtractionResult(
            text=truncate_text(text, self._max_text_length),
            metadata=self._read_metadata(book, text, ncx),
            toc=toc,
            page_list=page_list,
            cover_image_url=cover,
        )

    @staticmethod
    def _load_ncx(book: epub.EpubBook) -> Element | None:
        item = next((item for item in book.get_items() if item.media_type == NCX_MEDIA_TYPE), None)
        if item is None:
            return None
        try:
            return ET.fromstring(item.get_content())
        except ET.ParseError as exc:
            Log.warning(f"Could not parse NCX {item.get_name()}: {exc}")
            return None

    @staticmethod
    def _cover_data_uri(book: epub.EpubBook) -> str | None:
        cover = None
        for _value, attrs in book.get_metadata("OPF", "cover"):
            cover = book.get_item_with_id(attrs.get("content", ""))
            if cover is not None:
                break
        if cover is None:
            cover = next(iter(book.get_items_of_type(ebooklib.ITEM_COVER)), None)
        if cover is None:
            return None
        encoded = base64.b64encode(cover.get_content()).decode("ascii")
        return f"data:{cover.media_type};base64,{encoded}"

    def _read_metadata(
        self,
        book: epub.EpubBook,
        text: str,
        ncx: Element | None,
    ) -> dict[str, object]:
        isbn = self._find_identifier(book)
        return compact({
            "title": _dc(book, "title"),
            "author": _dc(book, "creator"),
            "subject": _dc(book, "subject"),
            "publisher": _dc(book, "publisher"),
            "publicationDate": normalize_date(_dc(book, "date")),
            "language": _dc(book, "language"),
            "epubVersion": book.version,
            "pageCount": self._page_count(book, text, ncx),
            "identifier": {"value": isbn, "source": "metadata"} if isbn else None,
            "accessibilityFeatures": _meta_values(book, "schema:accessibilityFeature"),
            "accessModes": _meta_values(book, "schema:accessMode"),
            "accessModesSufficient": _meta_values(book, "schema:accessModeSufficient"),
            "hazards": _meta_values(book, "schema:accessibilityHazard"),
            "certification": next(iter(_meta_values(book, "dcterms:conformsTo")), None),
        })

    @staticmethod
    def _find_identifier(book: epub.EpubBook) -> str | None:
        first: str | None = None
        for value, attrs in book.get_metadata("DC", "identifier"):
            value = (value or "").strip()
            if not value:
                continue
            first = first or value
            scheme = attrs.get(OPF_SCHEME_ATTR) or attrs.get("scheme") or ""
            if scheme.upper() == "ISBN":
                return find_isbn(value)
        return find_isbn(first)

    @staticmethod
    def _page_count(book: epub.EpubBook, text: str, ncx: Element | None) -> dict[str, object]:
        if ncx is not None:
            values = [
                int(value)
                for target in _iter_local(ncx, "pageTarget")
                if (value := target.get("value") or target.get("playOrder") or "").isdigit()
            ]
            if values and max(values) > 0:
                return {"value": max(values), "type": "actual"}
        declared = next(iter(_meta_values(book, "schema:numberOfPages")), "")
        if declared.isdigit():
            return {"value": int(declared), "type": "actual"}
        return estimate_page_count(text)


def _document_text(markup: bytes) -> str:
    soup = BeautifulSoup(markup, "html.parser")
    body = soup.body or soup
    return " ".join(body.get_text(" ").split())


def _toc_entries(nodes) -> list[TocEntry]:
    """Convert ebooklib's Link / (Section, children) tree into TocEntry objects."""
    entries: list[TocEntry] = []
    for node in nodes:
        if isinstance(node, tuple):
            section, children = node
            entries.append(TocEntry(
                title=" ".join((section.title or "").split()),
                location=getattr(section, "href", None) or "",
                children=_toc_entries(children),
            ))
        else:
            entries.append(TocEntry(
                title=" ".join((node.title or "").split()),
                location=node.href or "",
            ))
    return entries


def _dc(book: epub.EpubBook, name: str) -> str | None:
    for value, _attrs in book.get_metadata("DC", name):
        value = (value or "").strip()
        if value:
            return value
    return None


def _meta_values(book: epub.EpubBook, prop: str) -> list[str]:
    return [
        (value or "").strip()
        for value, attrs in book.get_metadata("OPF", None)
        if attrs.get("property") == prop and (value or "").strip()
    ]


def _local(tag: object) -> str:
    return tag.rsplit("}", 1)[-1] if isinstance(tag, str) else ""


def _iter_local(root: Element, name: str) -> Iterator[Element]:
    return (element for element in root.iter() if _local(element.tag) == name)


def _ncx_label(element: Element) -> str:
    nav_label = next((child for child in element if _local(child.tag) == "navLabel"), None)
    if nav_label is None:
        return ""
    text = next(_iter_local(nav_label, "text"), None)
    return " ".join((text.text or "").split()) if text is not None else ""


def _ncx_page_list(ncx: Element) -> list[PageMarker] | None:
    page_list = next(_iter_local(ncx, "pageList"), None)
    if page_list is None:
        return None
    markers = []
    for target in _iter_local(page_list, "pageTarget"):
        label = _ncx_label(target)
        value = target.get("value", "")
        if label and value:
            markers.append(PageMarker(label=label, page_number=value))
    return markers or None


def _nav_page_list(nav: BeautifulSoup) -> list[PageMarker] | None:
    page_nav = next(
        (
            element
            for element in nav.find_all("nav")
            if "page-list" in str(element.get("epub:type") or "").lower().split()
        ),
        None,
    )
    if not isinstance(page_nav, Tag):
        return None
    markers = []
    for anchor in page_nav.find_all("a"):
        label = " ".join(anchor.get_text(" ").split())
        if label:
            markers.append(PageMarker(label=label, page_number=label))
    return markers or None
