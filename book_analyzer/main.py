import argparse
import asyncio
import json
import sys
from pathlib import Path

from book_analyzer.config.settings import Settings
from book_analyzer.logging.logger import Log
from book_analyzer.processor.exceptions import BookAnalysisError, ConfigurationError, ErrorKind
from book_analyzer.processor.file_loader import FileLoader
from book_analyzer.processor.processor import Processor, build_processor

EXIT_OK = 0
EXIT_CLIENT_ERROR = 1
EXIT_UPSTREAM_ERROR = 2
EXIT_CONFIG_ERROR = 3

_EXIT_CODES = {
    ErrorKind.CLIENT: EXIT_CLIENT_ERROR,
    ErrorKind.UPSTREAM: EXIT_UPSTREAM_ERROR,
    ErrorKind.CONFIG: EXIT_CONFIG_ERROR,
}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="book_analyzer",
        description="Extract metadata, readability and classification from a PDF or EPUB.",
    )
    parser.add_argument("file", type=Path, help="path to the PDF or EPUB file")
    parser.add_argument(
        "--media-type",
        default=None,
        help="declared media type (guessed from the extension when omitted)",
    )
    return parser.parse_args(argv)


def configure() -> Processor:
    """Load settings, set up logging and build the pipeline.

    Raises:
        ConfigurationError: if a setting is invalid or a provider lacks what it needs.
    """
    try:
        settings = Settings()
        Log.configure(settings.log_level)
        return build_processor(settings)
    except ValueError as exc:
        raise ConfigurationError(str(exc)) from exc


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> build pipeline -> analyze one file."""
    args = parse_args(argv)
    try:
        processor = configure()
        upload = FileLoader().load(args.file, media_type=args.media_type)
        record = asyncio.run(processor.process(upload))
    except BookAnalysisError as exc:
        if isinstance(exc, ConfigurationError):
            Log.error(f"Invalid configuration: {exc}")
        print(json.dumps(exc.to_dict(), indent=2))
        return _EXIT_CODES[exc.kind]

    print(json.dumps(record.to_dict(), indent=2, ensure_ascii=False))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
