"""
Document text extraction using pypdf.

Flattens an uploaded PDF into a single string: every text run of every
text item of every page, in content-stream order, joined by single spaces.
No layout reconstruction and no reordering.

Dependencies: pypdf, cv_roast.core.exceptions
System role: First stage of the critique pipeline
"""

import io
import logging
from collections.abc import Iterable

from pypdf import PdfReader

from cv_roast.core.exceptions import ExtractionError

logger = logging.getLogger(__name__)

# page -> text items -> text runs
PageItems = Iterable[Iterable[str]]


def flatten_pages(pages: Iterable[PageItems]) -> str:
    """
    Concatenate text runs across items and pages.

    Args:
        pages: Pages, each an iterable of text items, each an iterable of runs

    Returns:
        str: Flattened text

    Raises:
        ExtractionError: If no page structure is present or the text is blank
    """
    page_texts: list[str] = []
    page_count = 0

    for items in pages:
        page_count += 1
        item_texts = []
        for runs in items:
            item_text = " ".join(run.strip() for run in runs if run and run.strip())
            if item_text:
                item_texts.append(item_text)
        if item_texts:
            page_texts.append(" ".join(item_texts))

    if page_count == 0:
        raise ExtractionError("Document has no pages")

    text = " ".join(page_texts)
    if not text.strip():
        raise ExtractionError("Failed to extract text from document or document is empty")
    return text


class PdfTextExtractor:
    """Extract flat text from PDF bytes."""

    def extract(self, data: bytes, file_name: str | None = None) -> str:
        """
        Extract text from raw PDF bytes.

        Args:
            data: Raw document bytes
            file_name: Original file name, used for error context only

        Returns:
            str: Flattened document text

        Raises:
            ExtractionError: When the document is unreadable or contains no text
        """
        if not data:
            raise ExtractionError("Uploaded document is empty", file_name)

        try:
            reader = PdfReader(io.BytesIO(data))
            pages = [self._page_items(page) for page in reader.pages]
            text = flatten_pages(pages)
        except ExtractionError as e:
            raise ExtractionError(e.message, file_name) from e
        except Exception as e:
            raise ExtractionError(
                f"Failed to parse document: {type(e).__name__}", file_name
            ) from e

        logger.info(
            f"{__name__}:extract - Extracted text",
            extra={"file_name": file_name, "pages": len(pages), "chars": len(text)},
        )
        return text

    @staticmethod
    def _page_items(page) -> list[list[str]]:
        """Collect text-show operations of a page in stream order."""
        items: list[list[str]] = []

        def visitor(text, cm, tm, font_dict, font_size):
            if text:
                items.append(text.splitlines())

        page.extract_text(visitor_text=visitor)
        return items
