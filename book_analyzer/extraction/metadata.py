"""Helpers shared by the format extractors for metadata and text cleanup."""

import re
from datetime import date, datetime

from book_analyzer.extraction.models import TocEntry
from book_analyzer.logging.logger import Log

CHARS_PER_PAGE = 1500

_ISBN13_RE = re.compile(r"97[89]\d{10}")
_ISBN10_RE = re.compile(r"\d{9}[\dX]")
_ISBN_LABEL_RE = re.compile(r"ISBN(?:-1[03])?[:\s]*([\dX][\dX\s-]{8,16}[\dX])", re.IGNORECASE)
_PDF_DATE_RE = re.compile(r"^D:(\d{4})(\d{2})(\d{2})")


def find_isbn(text: str | None) -> str | None:
    """Return the first ISBN-13 (preferred) or ISBN-10 found in ``text``."""
    if not text:
        return None
    cleaned = re.sub(r"[-\s]", "", text)
    match = _ISBN13_RE.search(cleaned) or _ISBN10_RE.search(cleaned)
    return match.group(0) if match else None


def parse_pdf_date(value: str | None) -> str | None:
    """Convert a PDF date string (``D:YYYYMMDD...``) to an ISO date."""
    if not value:
        return None
    match = _PDF_DATE_RE.match(value.strip())
    if match is None:
        return None
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day).isoformat()
    except ValueError:
        return None


def normalize_date(value: str | None) -> str | None:
    """Normalize an OPF ``dc:date`` to an ISO date, keeping unparseable text as-is."""
    if not value:
        return None
    value = value.strip()
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        return value


def estimate_page_count(text: str) -> dict[str, object]:
    pages = round(len(text) / CHARS_PER_PAGE)
    return {"value": pages if pages > 0 else 1, "type": "estimated"}


def truncate_text(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    Log.warning(f"Extracted text truncated from {len(text)} to {max_length} characters")
    return text[:max_length]


def compact(metadata: dict[str, object | None]) -> dict[str, object]:
    """Drop keys whose value was not recovered."""
    return {key: value for key, value in metadata.items() if value not in (None, "", [])}


def find_isbn_in_text(text: str) -> str | None:
    """Return an ISBN printed after an ``ISBN`` label in body text."""
    for match in _ISBN_LABEL_RE.finditer(text):
        isbn = find_isbn(match.group(1))
        if isbn:
            return isbn
    return None


def build_pdf_metadata(
    info: dict[str, object],
    page_count: int,
    front_matter: str,
) -> dict[str, object]:
    """Map a PDF document information dictionary onto extracted metadata keys.

    Keys are matched case-insensitively so that both pdfminer (``Title``) and
    PyMuPDF (``title``) dictionaries are accepted.
    """
    fields = {str(key).lower(): _as_text(value) for key, value in info.items()}
    identifier: dict[str, str] | None = None
    labelled = " ".join(
        fields.get(key) or "" for key in ("subject", "keywords", "identifier")
    )
    isbn = find_isbn_in_text(labelled)
    if isbn:
        identifier = {"value": isbn, "source": "metadata"}
    else:
        isbn = find_isbn_in_text(front_matter)
        if isbn:
            identifier = {"value": isbn, "source": "text"}
    return compact({
        "title": fields.get("title"),
        "author": fields.get("author"),
        "subject": fields.get("subject"),
        "keywords": fields.get("keywords"),
        "publicationDate": parse_pdf_date(fields.get("creationdate")),
        "pageCount": {"value": page_count, "type": "actual"},
        "identifier": identifier,
    })


def build_toc_tree(outline: list[tuple[int, str, str]]) -> list[TocEntry] | None:
    """Nest a flat ``(level, title, location)`` outline into TocEntry trees."""
    roots: list[TocEntry] = []
    stack: list[tuple[int, TocEntry]] = []
    for level, title, location in outline:
        entry = TocEntry(title=title, location=location)
        while stack and stack[-1][0] >= level:
            stack.pop()
        if stack:
            stack[-1][1].children.append(entry)
        else:
            roots.append(entry)
        stack.append((level, entry))
    return roots or None


def _as_text(value: object) -> str | None:
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="ignore")
    if not isinstance(value, str):
        return None
    return value.strip() or None
