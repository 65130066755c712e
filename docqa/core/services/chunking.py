"""Recursive character text splitter."""

import logging
from collections.abc import Sequence

from ..domain.exceptions import EmptyInputError, InvalidChunkConfigError

logger = logging.getLogger(__name__)

DEFAULT_SEPARATORS = ("\n\n", "\n", " ", "")


class RecursiveTextSplitter:
    """Split text into overlapping chunks of bounded size.

    The text is split on the coarsest separator it contains (paragraphs, then
    lines, then words, then single characters). Pieces that are still longer
    than ``chunk_size`` are split again with the next finer separator. Adjacent
    pieces are then merged back into chunks of at most ``chunk_size``
    characters, and each new chunk starts with up to ``chunk_overlap``
    characters of trailing pieces from the previous one. Empty pieces left by
    repeated separators are dropped before merging.
    """

    def __init__(
        self,
        chunk_size: int = 500,
        chunk_overlap: int = 100,
        separators: Sequence[str] = DEFAULT_SEPARATORS,
    ) -> None:
        """Initialize the splitter.

        Args:
            chunk_size: Maximum size of each chunk in characters (must be positive).
            chunk_overlap: Overlap between consecutive chunks (must be less than chunk_size).
            separators: Separators to try, coarsest first.

        Raises:
            InvalidChunkConfigError: If the size/overlap pair is invalid.
        """
        context = {"chunk_size": chunk_size, "chunk_overlap": chunk_overlap}
        if chunk_size <= 0:
            raise InvalidChunkConfigError("chunk_size must be positive", context=context)
        if chunk_overlap < 0:
            raise InvalidChunkConfigError("chunk_overlap must be non-negative", context=context)
        if chunk_overlap >= chunk_size:
            raise InvalidChunkConfigError(
                "chunk_overlap must be less than chunk_size", context=context
            )
        if not separators:
            raise InvalidChunkConfigError("at least one separator is required", context=context)

        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self.separators = list(separators)

    def split(self, text: str) -> list[str]:
        """Split ``text`` into chunks.

        Raises:
            EmptyInputError: If the text is empty or yields no chunks.
        """
        if not text:
            raise EmptyInputError("Cannot split empty text")

        chunks = self._split_text(text, self.separators)
        if not chunks:
            raise EmptyInputError(
                "Document chunking resulted in zero chunks",
                context={"length": len(text)},
            )

        logger.debug("Split %d characters into %d chunks", len(text), len(chunks))
        return chunks

    def _split_text(self, text: str, separators: list[str]) -> list[str]:
        separator = separators[-1]
        finer: list[str] = []
        for i, candidate in enumerate(separators):
            if candidate == "":
                separator = candidate
                break
            if candidate in text:
                separator = candidate
                finer = separators[i + 1 :]
                break

        pieces = [piece for piece in (text.split(separator) if separator else text) if piece]

        chunks: list[str] = []
        pending: list[str] = []
        for piece in pieces:
            if len(piece) < self.chunk_size:
                pending.append(piece)
                continue
            if pending:
                chunks.extend(self._merge(pending, separator))
                pending = []
            if finer:
                chunks.extend(self._split_text(piece, finer))
            elif piece.strip():
                chunks.append(piece.strip())

        if pending:
            chunks.extend(self._merge(pending, separator))
        return chunks

    def _merge(self, pieces: list[str], separator: str) -> list[str]:
        sep_len = len(separator)
        chunks: list[str] = []
        window: list[str] = []
        total = 0

        for piece in pieces:
            length = len(piece)
            if window and total + length + sep_len > self.chunk_size:
                chunk = self._join(window, separator)
                if chunk is not None:
                    chunks.append(chunk)
                # Drop leading pieces until only the overlap remains and the next piece fits
                while window and (
                    total > self.chunk_overlap
                    or total + length + sep_len > self.chunk_size
                ):
                    total -= len(window[0]) + (sep_len if len(window) > 1 else 0)
                    window.pop(0)

            total += length + (sep_len if window else 0)
            window.append(piece)

        chunk = self._join(window, separator)
        if chunk is not None:
            chunks.append(chunk)
        return chunks

    @staticmethod
    def _join(pieces: list[str], separator: str) -> str | None:
        text = separator.join(pieces).strip()
        return text or None
