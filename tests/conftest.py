import io
import re
import zipfile

import pymupdf
import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

BOOK_SENTENCES = (
    "The lighthouse keeper climbed the stairs every evening. "
    "He lit the lamp and watched the ships pass the rocks. "
    "Nobody in the village remembered a night without the light. "
)

COVER_BYTES = b"\x89PNG\r\n\x1a\nfake-cover"

CONTAINER_XML = """<?xml version="1.0" encoding="UTF-8"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="OEBPS/content.opf" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>
"""

EPUB3_OPF = """<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://www.idpf.org/2007/opf" version="3.0" unique-identifier="bookid">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">
    <dc:title>The Lighthouse</dc:title>
    <dc:creator>Ada Keeper</dc:creator>
    <dc:creator>Second Author</dc:creator>
    <dc:subject>Fiction</dc:subject>
    <dc:publisher>Harbor Press</dc:publisher>
    <dc:date>2021-05-04</dc:date>
    <dc:language>en</dc:language>
    <dc:identifier id="bookid">urn:isbn:978-1-4028-9462-6</dc:identifier>
    <meta name="cover" content="cover-img"/>
    <meta property="schema:accessibilityFeature">alternativeText</meta>
    <meta property="schema:accessibilityFeature">tableOfContents</meta>
    <meta property="schema:accessMode">textual</meta>
    <meta property="schema:accessModeSufficient">textual</meta>
    <meta property="schema:accessibilityHazard">none</meta>
    <meta property="dcterms:conformsTo">EPUB Accessibility 1.1 - WCAG 2.1 Level AA</meta>
  </metadata>
  <manifest>
    <item id="nav" href="nav.xhtml" media-type="application/xhtml+xml" properties="nav"/>
    <item id="ncx" href="toc.ncx" media-type="application/x-dtbncx+xml"/>
    <item id="cover-img" href="images/cover.png" media-type="image/png"/>
    <item id="ch1" href="text/chapter1.xhtml" media-type="application/xhtml+xml"/>
    <item id="ch2" href="text/chapter2.xhtml" media-type="application/xhtml+xml"/>
  </manifest>
  <spine toc="ncx">
    <itemref idref="ch1"/>
    <itemref idref="ch2"/>
  </spine>
</package>
"""

NAV_XHTML = """<?xml version="1.0" encoding="UTF-8"?>
<html xmlns="http://www.w3.org/1999/xhtml" xmlns:epub="http://www.idpf.org/2007/ops">
<head><title>Navigation</title></head>
<body>
  <nav epub:type="toc">
    <ol>
      <li><a href="text/chapter1.xhtml">Chapter One</a>
        <ol>
          <li><a href="text/chapter1.xhtml#lamp">The Lamp</a></li>
        </ol>
      </li>
      <li><a href="text/chapter2.xhtml">Chapter Two</a></li>
    </ol>
  </nav>
  <nav epub:type="page-list">
    <ol>
      <li><a href="text/chapter1.xhtml#p1">1</a></li>
      <li><a href="text/chapter2.xhtml#p2">2</a></li>
    </ol>
  </nav>
</body>
</html>
"""

NCX = """<?xml version="1.0" encoding="UTF-8"?>
<ncx xmlns="http://www.daisy.org/z3986/2005/ncx/" version="2005-1">
  <navMap>
    <navPoint id="np1" playOrder="1">
      <navLabel><text>NCX Chapter One</text></navLabel>
      <content src="text/chapter1.xhtml"/>
      <navPoint id="np1-1" playOrder="2">
        <navLabel><text>NCX Section</text></navLabel>
        <content src="text/chapter1.xhtml#lamp"/>
      </navPoint>
    </navPoint>
    <navPoint id="np2" playOrder="3">
      <navLabel><text>NCX Chapter Two</text></navLabel>
      <content src="text/chapter2.xhtml"/>
    </navPoint>
  </navMap>
  <pageList>
    <pageTarget id="pg1" type="normal" value="1">
      <navLabel><text>i</text></navLabel>
      <content src="text/chapter1.xhtml#p1"/>
    </pageTarget>
    <pageTarget id="pg2" type="normal" value="42">
      <navLabel><text>42</text></navLabel>
      <content src="text/chapter2.xhtml#p2"/>
    </pageTarget>
  </pageList>
</ncx>
"""

EPUB2_OPF = """<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://www.idpf.org/2007/opf" version="2.0" unique-identifier="bookid">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/"
            xmlns:opf="http://www.idpf.org/2007/opf">
    <dc:title>Old Harbor</dc:title>
    <dc:identifier opf:scheme="UUID">urn:uuid:1234</dc:identifier>
    <dc:identifier opf:scheme="ISBN">0-306-40615-2</dc:identifier>
  </metadata>
  <manifest>
    <item id="ncx" href="toc.ncx" media-type="application/x-dtbncx+xml"/>
    <item id="ch1" href="text/chapter1.xhtml" media-type="application/xhtml+xml"/>
    <item id="ch2" href="text/chapter2.xhtml" media-type="application/xhtml+xml"/>
  </manifest>
  <spine toc="ncx">
    <itemref idref="ch1"/>
    <itemref idref="ch2"/>
  </spine>
</package>
"""


def _chapter(title: str, body: str) -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<html xmlns="http://www.w3.org/1999/xhtml">'
        f"<head><title>{title}</title></head>"
        f"<body><h1>{title}</h1><p>{body}</p></body></html>"
    )


def build_epub(files: dict[str, str | bytes], include_container: bool = True) -> bytes:
    """Assemble an EPUB archive in memory from path -> content pairs."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as archive:
        archive.writestr("mimetype", "application/epub+zip", compress_type=zipfile.ZIP_STORED)
        if include_container:
            archive.writestr("META-INF/container.xml", CONTAINER_XML)
        for path, content in files.items():
            archive.writestr(path, content)
    return buf.getvalue()


def epub3_files() -> dict[str, str | bytes]:
    return {
        "OEBPS/content.opf": EPUB3_OPF,
        "OEBPS/nav.xhtml": NAV_XHTML,
        "OEBPS/toc.ncx": NCX,
        "OEBPS/images/cover.png": COVER_BYTES,
        "OEBPS/text/chapter1.xhtml": _chapter("Chapter One", BOOK_SENTENCES),
        "OEBPS/text/chapter2.xhtml": _chapter("Chapter Two", "The storm came at dawn."),
    }


MANIFEST_PATHS = {
    "nav": "OEBPS/nav.xhtml",
    "ncx": "OEBPS/toc.ncx",
    "cover-img": "OEBPS/images/cover.png",
}


def drop_items(files: dict[str, str | bytes], *item_ids: str) -> dict[str, str | bytes]:
    """Remove manifest items and the files behind them from an EPUB file set."""
    opf = str(files["OEBPS/content.opf"])
    for item_id in item_ids:
        opf = re.sub(rf'\s*<item id="{item_id}"[^>]*/>', "", opf)
        files.pop(MANIFEST_PATHS[item_id], None)
    if "ncx" in item_ids:
        opf = opf.replace(' toc="ncx"', "")
    files["OEBPS/content.opf"] = opf
    return files


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def labelled_pdf_bytes(multi_page_pdf_bytes: bytes) -> bytes:
    """Two-page PDF whose pages are labelled with lowercase roman numerals."""
    doc = pymupdf.open(stream=multi_page_pdf_bytes, filetype="pdf")
    doc.set_page_labels([{"startpage": 0, "prefix": "", "style": "r", "firstpagenum": 1}])
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def book_pdf_bytes() -> bytes:
    """Generate a two-chapter PDF with document info and an outline."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.setTitle("The Lighthouse")
    c.setAuthor("Ada Keeper")
    c.setSubject("ISBN 978-1-4028-9462-6")
    c.bookmarkPage("ch1")
    c.addOutlineEntry("Chapter One", "ch1", level=0)
    c.drawString(72, 720, "The lighthouse keeper climbed the stairs every evening.")
    c.showPage()
    c.bookmarkPage("ch2")
    c.addOutlineEntry("Chapter Two", "ch2", level=0)
    c.drawString(72, 720, "The storm came at dawn.")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def epub3_bytes() -> bytes:
    """EPUB 3 with nav document, NCX, cover and accessibility metadata."""
    return build_epub(epub3_files())


@pytest.fixture()
def epub2_bytes() -> bytes:
    """EPUB 2 with NCX navigation only and no cover."""
    files = epub3_files()
    del files["OEBPS/nav.xhtml"]
    del files["OEBPS/images/cover.png"]
    files["OEBPS/content.opf"] = EPUB2_OPF
    return build_epub(files)


@pytest.fixture()
def epub_builder():
    """Return the EPUB builder, the default EPUB 3 file set and the item dropper."""
    return build_epub, epub3_files, drop_items
