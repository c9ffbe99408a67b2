from book_analyzer.processor.models import FileType

PDF_MEDIA_TYPE = "application/pdf"
EPUB_MEDIA_TYPE = "application/epub+zip"
GENERIC_MEDIA_TYPES = frozenset({"", "application/octet-stream", "binary/octet-stream"})


def classify_file_type(media_type: str | None, file_name: str | None) -> FileType | None:
    """Decide which extractor handles an upload, or ``None`` if unsupported.

    Declared media types are unreliable, so an ``.epub`` extension is enough
    for EPUB, and a ``.pdf`` extension counts only when the declared type is
    a generic binary one.
    """
    declared = (media_type or "").split(";", 1)[0].strip().lower()
    name = (file_name or "").strip().lower()
    if declared == PDF_MEDIA_TYPE:
        return FileType.PDF
    if declared == EPUB_MEDIA_TYPE or name.endswith(".epub"):
        return FileType.EPUB
    if declared in GENERIC_MEDIA_TYPES and name.endswith(".pdf"):
        return FileType.PDF
    return None
