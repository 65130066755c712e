"""Grounded answer generation."""

import logging
from collections.abc import Sequence

from ..domain.exceptions import NoContextError
from ..ports.llm_port import LLMPort
from .prompts import ANSWER_PROMPT_TEMPLATE, CONTEXT_ITEM_SEPARATOR

logger = logging.getLogger(__name__)


def build_prompt(question: str, context: Sequence[str]) -> str:
    """Build the grounded prompt, numbering context items ``[1]``, ``[2]``, ..."""
    numbered = CONTEXT_ITEM_SEPARATOR.join(
        f"[{i}] {item}" for i, item in enumerate(context, start=1)
    )
    return ANSWER_PROMPT_TEMPLATE.format(question=question, context=numbered)


class AnswerService:
    """Prompts the language model with retrieved context."""

    def __init__(self, llm: LLMPort) -> None:
        self.llm = llm

    def generate(self, question: str, context: Sequence[str]) -> str:
        """Answer ``question`` from ``context``.

        The model's text is returned as-is; citations are not validated.

        Raises:
            NoContextError: If ``context`` is empty.
        """
        if not context:
            raise NoContextError("No context available for answer generation")

        prompt = build_prompt(question, context)
        answer = self.llm.generate(prompt)
        logger.info("LLM response generated (%d context items)", len(context))
        return answer
