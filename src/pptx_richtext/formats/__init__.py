"""Document format handlers for pptx-richtext."""

from pptx_richtext.formats.base import FormatHandler, Paragraph, split_paragraphs
from pptx_richtext.formats.txt_handler import TXTHandler
from pptx_richtext.formats.html_handler import HTMLHandler
from pptx_richtext.formats.json_handler import JSONHandler
from pptx_richtext.formats.pptx_handler import PPTXHandler

__all__ = [
    "FormatHandler",
    "Paragraph",
    "split_paragraphs",
    "TXTHandler",
    "HTMLHandler",
    "JSONHandler",
    "PPTXHandler",
]

# Map file extensions to handlers
HANDLER_MAP: dict[str, type[FormatHandler]] = {
    ".txt": TXTHandler,
    ".md": TXTHandler,
    ".html": HTMLHandler,
    ".htm": HTMLHandler,
    ".json": JSONHandler,
    ".pptx": PPTXHandler,
}

SUPPORTED_EXTENSIONS = tuple(HANDLER_MAP.keys())

# Extensions whose content is read as HTML rather than Markdown
HTML_EXTENSIONS = (".html", ".htm")


def get_handler(extension: str) -> type[FormatHandler]:
    """Get the appropriate handler class for a file extension."""
    ext = extension.lower()
    if ext not in HANDLER_MAP:
        raise ValueError(
            f"Unsupported file format: {ext}. "
            f"Supported formats: {', '.join(SUPPORTED_EXTENSIONS)}"
        )
    return HANDLER_MAP[ext]
