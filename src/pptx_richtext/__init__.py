"""pptx-richtext: convert Markdown or editor HTML into styled slide text runs."""

__version__ = "0.1.0"
