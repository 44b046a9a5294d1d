"""Text fragment sources: PDF documents (pdfplumber) and JSON fragment dumps."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List

import pdfplumber

from roster_import.domain.roster import Page, TextFragment
from roster_import.exceptions import FragmentSourceError

logger = logging.getLogger(__name__)

# Horizontal gap (points) below which neighbouring glyphs stay in one fragment.
X_TOLERANCE = 3


def extract_page_fragments(page, page_index: int = 0) -> Page:
    """
    Convert one pdfplumber page into positioned text fragments.

    Words are extracted with blank characters kept, so a cell such as
    "Evening Shift (4-10)" stays one fragment. ``y`` is the distance of the
    text baseline from the top of the page.
    """
    words = page.extract_words(keep_blank_chars=True, x_tolerance=X_TOLERANCE, use_text_flow=True)
    fragments = [
        TextFragment(text=word["text"].strip(), x=float(word["x0"]), y=float(word["bottom"]))
        for word in words
        if word["text"].strip()
    ]
    logger.debug("Extracted %d text fragments from page %d", len(fragments), page_index + 1)
    return Page(index=page_index, fragments=fragments)


def read_pdf_pages(pdf_path: str | Path) -> List[Page]:
    """
    Extract text fragments from every page of a PDF.

    Raises:
        FragmentSourceError: If the file is missing or not a readable PDF
    """
    pdf_path = Path(pdf_path)
    if not pdf_path.exists():
        raise FragmentSourceError(f"PDF not found: {pdf_path}")
    try:
        with pdfplumber.open(str(pdf_path)) as pdf:
            pages = [extract_page_fragments(page, index) for index, page in enumerate(pdf.pages)]
    except Exception as e:
        raise FragmentSourceError(f"Failed to read PDF {pdf_path}: {e}") from e
    logger.info("Loaded %s: %d pages", pdf_path.name, len(pages))
    return pages


def read_fragment_json(json_path: str | Path) -> List[Page]:
    """
    Load pages from a JSON dump: a list of pages, each a list of
    ``{"text", "x", "y"}`` objects.
    """
    json_path = Path(json_path)
    try:
        data = json.loads(json_path.read_text(encoding="utf-8"))
        return [
            Page(
                index=index,
                fragments=[
                    TextFragment(text=str(item["text"]).strip(), x=float(item["x"]), y=float(item["y"]))
                    for item in page
                    if str(item["text"]).strip()
                ],
            )
            for index, page in enumerate(data)
        ]
    except (OSError, ValueError, KeyError, TypeError) as e:
        raise FragmentSourceError(f"Invalid fragment file {json_path}: {e}") from e


def read_pages(path: str | Path) -> List[Page]:
    """Dispatch on file extension: .json fragment dumps, anything else as PDF."""
    if Path(path).suffix.lower() == ".json":
        return read_fragment_json(path)
    return read_pdf_pages(path)
