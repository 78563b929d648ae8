"""Grounded answer generation on top of the LLM port."""

import logging

from ..ports.llm_port import LLMPort
from .prompts import GROUNDED_SYSTEM_PROMPT, NO_ANSWER_FALLBACK, USER_PROMPT_TEMPLATE

logger = logging.getLogger(__name__)


class AnswerGenerator:
    """Asks the language model to answer strictly from the retrieved context."""

    def __init__(self, llm: LLMPort, system_prompt: str = GROUNDED_SYSTEM_PROMPT) -> None:
        self.llm = llm
        self.system_prompt = system_prompt

    def build_user_prompt(self, question: str, context: str) -> str:
        return USER_PROMPT_TEMPLATE.format(question=question, context=context)

    def generate(self, question: str, context: str) -> str:
        """Generate an answer for ``question`` grounded in ``context``.

        Args:
            question: The user's question.
            context: Assembled, citation-labelled passages.

        Returns:
            The trimmed completion, or a fixed fallback when it is empty.
        """
        completion = self.llm.complete(self.system_prompt, self.build_user_prompt(question, context))
        answer = (completion or "").strip()
        if not answer:
            logger.warning("Completion service returned an empty answer")
            return NO_ANSWER_FALLBACK
        return answer
