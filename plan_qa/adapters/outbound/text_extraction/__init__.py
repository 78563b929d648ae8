"""Text extraction adapters."""

from .pypdf_extractor import PyPDFTextExtractor

__all__ = ["PyPDFTextExtractor"]
