"""
PDF utility functions for inspecting templates and generated documents.
"""

from pathlib import Path
import fitz  # pymupdf


def _open(pdf_input: bytes | str | Path) -> fitz.Document:
    if isinstance(pdf_input, bytes):
        return fitz.open(stream=pdf_input, filetype="pdf")
    return fitz.open(str(pdf_input))


def pdf_page_count(pdf_input: bytes | str | Path) -> int:
    """
    Get the number of pages in a PDF.

    Args:
        pdf_input: PDF as bytes, file path string, or Path object

    Returns:
        Number of pages in the PDF
    """
    doc = _open(pdf_input)
    count = len(doc)
    doc.close()

    return count


def extract_text_from_pdf(pdf_input: bytes | str | Path) -> str:
    """
    Extract all text from a PDF.

    Args:
        pdf_input: PDF as bytes, file path string, or Path object

    Returns:
        Concatenated text from all pages
    """
    doc = _open(pdf_input)

    text_parts = []

    for page_num in range(len(doc)):
        page = doc[page_num]
        text_parts.append(page.get_text())

    doc.close()

    return "\n\n".join(text_parts)


def list_form_fields(pdf_input: bytes | str | Path) -> list[str]:
    """
    List the fully qualified names of every form widget in a PDF.

    Args:
        pdf_input: PDF as bytes, file path string, or Path object

    Returns:
        Sorted, de-duplicated field names
    """
    doc = _open(pdf_input)

    names: set[str] = set()
    for page in doc:
        for widget in page.widgets() or []:
            if widget.field_name:
                names.add(widget.field_name)

    doc.close()

    return sorted(names)


def is_valid_pdf(data: bytes) -> bool:
    """
    Check if the given bytes represent a valid PDF.

    Args:
        data: Bytes to check

    Returns:
        True if valid PDF, False otherwise
    """
    try:
        doc = fitz.open(stream=data, filetype="pdf")
        is_valid = len(doc) > 0
        doc.close()
        return is_valid
    except Exception:
        return False
