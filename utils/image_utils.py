"""
Image utilities for re-displaying manual pages.
"""
import base64
from io import BytesIO
from typing import Tuple, Union

import fitz  # PyMuPDF
from PIL import Image


def open_pdf(source: Union[str, bytes]) -> fitz.Document:
    """Open a PDF from a file path or raw bytes."""
    if isinstance(source, (bytes, bytearray)):
        return fitz.open(stream=bytes(source), filetype="pdf")
    return fitz.open(source)


def render_pdf_page(source: Union[str, bytes], page_num: int, target_dpi: int = 150) -> Image.Image:
    """
    Render a PDF page to a PIL image.

    Args:
        source: Path to the PDF file or its bytes
        page_num: 1-indexed physical page number
        target_dpi: Rendering DPI

    Returns:
        RGB PIL Image
    """
    doc = open_pdf(source)
    try:
        page = doc.load_page(page_num - 1)
        mat = fitz.Matrix(target_dpi / 72, target_dpi / 72)
        pix = page.get_pixmap(matrix=mat, alpha=False)
        img = Image.open(BytesIO(pix.tobytes("png")))
        img.load()
    finally:
        doc.close()
    return img.convert('RGB')


def image_to_base64(img: Image.Image, max_size: int = 2048) -> Tuple[str, int, int]:
    """
    Encode a PIL image as base64 PNG, shrinking it to fit max_size.

    Returns:
        (base64 string, width, height) of the encoded image
    """
    if max(img.size) > max_size:
        img = img.copy()
        img.thumbnail((max_size, max_size), Image.Resampling.LANCZOS)

    buf = BytesIO()
    img.save(buf, format='PNG')
    width, height = img.size
    return base64.b64encode(buf.getvalue()).decode(), width, height


def render_pdf_page_to_base64(
    source: Union[str, bytes],
    page_num: int,
    target_dpi: int = 150,
    max_size: int = 2048
) -> Tuple[str, int, int]:
    """
    Render a PDF page to a base64-encoded PNG.

    Returns:
        (base64 string, width, height) of the encoded image
    """
    img = render_pdf_page(source, page_num, target_dpi)
    return image_to_base64(img, max_size)
