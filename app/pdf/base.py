from abc import ABC, abstractmethod

from app.pdf.exceptions import ExtractionError


class BasePdfExtractor(ABC):
    """Contract for all PDF text extraction adapters."""

    def extract(self, pdf_bytes: bytes) -> str:
        """Extract plain text from PDF bytes.

        Args:
            pdf_bytes: Raw PDF file content read from storage.

        Returns:
            Page texts joined with newlines, trimmed. Never empty.

        Raises:
            ExtractionError: if the bytes are empty, are not a readable PDF,
                or contain no text (e.g. an image-only scan).
        """
        if not pdf_bytes:
            raise ExtractionError("Document file is empty")
        try:
            pages = self._extract_pages(pdf_bytes)
        except ExtractionError:
            raise
        except Exception as exc:
            raise ExtractionError(f"{self.engine} extraction failed: {exc}") from exc

        text = "\n".join(pages).strip()
        if not text:
            raise ExtractionError("PDF text extraction returned empty content")
        return text

    @property
    @abstractmethod
    def engine(self) -> str:
        """Short engine name used in error messages."""

    @abstractmethod
    def _extract_pages(self, pdf_bytes: bytes) -> list[str]:
        """Return the text of every page, in order."""
