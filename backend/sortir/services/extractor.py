from io import BytesIO

from pypdf import PdfReader

from sortir.config import setup_logger
from sortir.core.exceptions import ExtractionError


logger = setup_logger("extractor")


def extract_text(pdf_file: bytes) -> str:
    """Return the text of every page of ``pdf_file`` in page order.

    Raises ``ExtractionError`` when the bytes are not a readable PDF or when
    the PDF carries no text layer (for example a scanned image).
    """
    try:
        reader = PdfReader(BytesIO(pdf_file))
        pages = [page.extract_text() or "" for page in reader.pages]
    except Exception as e:
        raise ExtractionError(
            "Could not read PDF file", reason=f"PDF parsing failed: {str(e)}"
        ) from e

    text = "\n".join(pages)
    if not text.strip():
        raise ExtractionError("No extractable text found in PDF")

    logger.debug(f"Extracted {len(text)} characters from {len(pages)} pages")
    return text
