"""Build the citable context block sent to the language model."""

from ..domain import Passage, ScoredPassage


def citation_label(passage: Passage) -> str:
    """Header line identifying a passage's source file, project and page."""
    parts = [f"source: {passage.display_name or passage.document_id}"]
    if passage.project_name:
        parts.append(f"project: {passage.project_name}")
    parts.append(f"page: {passage.page}")
    return f"[{' | '.join(parts)}]"


class ContextAssembler:
    """Concatenates ranked passages into one labelled context string."""

    separator = "\n\n"

    def assemble(self, scored: list[ScoredPassage]) -> str:
        """Render passages in ranked order, each under its citation label.

        Passage text is not truncated; the context size is bounded by the
        number of passages and the passage window size.
        """
        return self.separator.join(
            f"{citation_label(item.passage)}\n{item.passage.text}" for item in scored
        )
