from dataclasses import dataclass, field


@dataclass(frozen=True)
class TocEntry:
    """A named location in the book, possibly with nested entries."""

    title: str
    location: str
    children: list["TocEntry"] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "title": self.title,
            "location": self.location,
            "children": [child.to_dict() for child in self.children],
        }


@dataclass(frozen=True)
class PageMarker:
    """A print page boundary recovered from the source file."""

    label: str
    page_number: str

    def to_dict(self) -> dict[str, str]:
        return {"label": self.label, "pageNumber": self.page_number}


@dataclass(frozen=True)
class ExtractionResult:
    """Uniform output of every format extractor.

    ``None`` for ``toc``, ``page_list`` and ``cover_image_url`` means the
    extractor recovered nothing; an empty list is never used for that.
    """

    text: str
    metadata: dict[str, object] = field(default_factory=dict)
    toc: list[TocEntry] | None = None
    page_list: list[PageMarker] | None = None
    cover_image_url: str | None = None
