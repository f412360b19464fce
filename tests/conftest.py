"""Pytest fixtures for pptx-richtext tests."""

import os
import pytest
from pathlib import Path

from pptx_richtext.config import reset_settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch: pytest.MonkeyPatch):
    """Start every test from default settings."""
    for name in list(os.environ):
        if name.startswith("RICHTEXT_"):
            monkeypatch.delenv(name)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def sample_markdown() -> str:
    """Sample Markdown-style rich text."""
    return "This is **bold** and *italic*.\n\nSecond ~~line~~ with <u>underline</u>."


@pytest.fixture
def sample_html() -> str:
    """Sample editor HTML with a heading, paragraph and nested list."""
    return (
        "<h1>Title</h1>"
        "<p>Some <strong>bold</strong> text.</p>"
        "<ul><li>A<ul><li>B</li></ul></li><li>C</li></ul>"
    )


@pytest.fixture
def tmp_markdown_file(tmp_path: Path, sample_markdown: str) -> Path:
    """Create a temporary Markdown file."""
    file_path = tmp_path / "notes.md"
    file_path.write_text(sample_markdown, encoding="utf-8")
    return file_path


@pytest.fixture
def tmp_html_file(tmp_path: Path, sample_html: str) -> Path:
    """Create a temporary HTML file."""
    file_path = tmp_path / "editor.html"
    file_path.write_text(sample_html, encoding="utf-8")
    return file_path
