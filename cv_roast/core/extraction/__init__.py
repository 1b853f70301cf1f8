"""Document text extraction."""

from cv_roast.core.extraction.text_extractor import PdfTextExtractor, flatten_pages

__all__ = ["PdfTextExtractor", "flatten_pages"]
