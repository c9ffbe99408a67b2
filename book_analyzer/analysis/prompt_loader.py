from pathlib import Path

from book_analyzer.analysis.exceptions import AnalyzerError

PROMPTS_DIR = Path(__file__).parent / "prompts"
PROMPT_TEMPLATE = "analysis_prompt.txt"
JSON_SCHEMA = "analysis_schema.json"


def load_prompt_file(name: str, directory: Path | None = None) -> str:
    """Read one analysis prompt resource by file name.

    Args:
        name: File name, e.g. ``PROMPT_TEMPLATE`` or ``JSON_SCHEMA``.
        directory: Folder to read from. Defaults to the bundled prompts.

    Raises:
        AnalyzerError: if the file cannot be read.
    """
    path = (directory or PROMPTS_DIR) / name
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise AnalyzerError(f"Failed to load {name}: {exc}") from exc
