"""Core conversion logic for pptx-richtext."""

from pptx_richtext.core.converter import (
    ConversionError,
    InputKind,
    RichTextConverter,
    detect_input_kind,
    get_sample_html,
    get_sample_rich_text,
)

__all__ = [
    "ConversionError",
    "InputKind",
    "RichTextConverter",
    "detect_input_kind",
    "get_sample_html",
    "get_sample_rich_text",
]
