"""Utilities package - Helper functions for page images and text."""

from .image_utils import (
    open_pdf,
    render_pdf_page,
    render_pdf_page_to_base64,
    image_to_base64
)

from .text_utils import (
    normalize_whitespace,
    tokenize_query,
    find_term,
    make_snippet
)

__all__ = [
    # Image utils
    'open_pdf',
    'render_pdf_page',
    'render_pdf_page_to_base64',
    'image_to_base64',

    # Text utils
    'normalize_whitespace',
    'tokenize_query',
    'find_term',
    'make_snippet'
]
