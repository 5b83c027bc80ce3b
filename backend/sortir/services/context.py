from collections.abc import Sequence

from sortir.config import setup_logger
from sortir.core.protocols import Document


logger = setup_logger("context")

DOCUMENT_SEPARATOR = "\n\n"


def _start_label(filename: str) -> str:
    return f"--- START OF DOCUMENT: {filename} ---\n"


def _end_label(filename: str) -> str:
    return f"\n--- END OF DOCUMENT: {filename} ---"


def format_document(document: Document) -> str:
    return f"{_start_label(document.filename)}{document.text}{_end_label(document.filename)}"


def truncate_document(document: Document, max_length: int) -> str | None:
    """Labelled block for ``document`` with its body cut to fit ``max_length``.

    Returns None when not even the two labels and one character of text fit.
    """
    start = _start_label(document.filename)
    end = _end_label(document.filename)
    room = max_length - len(start) - len(end)
    if room <= 0:
        return None
    return f"{start}{document.text[:room]}{end}"


def assemble_context(documents: Sequence[Document], max_length: int) -> str:
    """Concatenate labelled documents into a context of at most ``max_length`` characters.

    When everything does not fit, whole documents are kept from the front of
    the list and the remaining budget goes to the head of the next document,
    still closed by its END label. Only if not even the labels of the first
    document fit is the text cut blindly.
    """
    if max_length < 0:
        raise ValueError("max_length must not be negative")

    blocks = [format_document(document) for document in documents]
    context = DOCUMENT_SEPARATOR.join(blocks)
    if len(context) <= max_length:
        return context

    kept: list[str] = []
    length = 0
    for document, block in zip(documents, blocks):
        separator = len(DOCUMENT_SEPARATOR) if kept else 0
        if length + separator + len(block) <= max_length:
            kept.append(block)
            length += separator + len(block)
            continue
        partial = truncate_document(document, max_length - length - separator)
        if partial is not None:
            kept.append(partial)
        break

    logger.warning(
        f"Context truncated to {max_length} characters "
        f"({len(kept)} of {len(blocks)} documents included)"
    )

    if kept:
        return DOCUMENT_SEPARATOR.join(kept)
    return context[:max_length]
