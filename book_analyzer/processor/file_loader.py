import mimetypes
from pathlib import Path

from book_analyzer.processor.exceptions import FileReadError
from book_analyzer.processor.models import UploadedFile

mimetypes.add_type("application/epub+zip", ".epub")


class FileLoader:
    """Reads a book from disk and wraps it as an UploadedFile."""

    DEFAULT_MEDIA_TYPE = "application/octet-stream"

    def load(self, path: Path, media_type: str | None = None) -> UploadedFile:
        """Read file bytes and guess the media type from the extension.

        Raises:
            FileReadError: if the path does not exist or cannot be read.
        """
        if not path.is_file():
            raise FileReadError(f"File not found: {path}")
        try:
            content = path.read_bytes()
        except OSError as exc:
            raise FileReadError(f"Failed to read {path}: {exc}") from exc
        return UploadedFile(
            content=content,
            media_type=media_type or self._guess_media_type(path),
            file_name=path.name,
        )

    def _guess_media_type(self, path: Path) -> str:
        guessed, _ = mimetypes.guess_type(path.name)
        return guessed or self.DEFAULT_MEDIA_TYPE
