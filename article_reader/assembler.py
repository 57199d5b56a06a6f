"""
Article assembly.

Starting from the top candidate, look through its siblings for content
that belongs to the article too: preambles, captions, text split off by
ads that were removed, and so on.

Deciding and rendering are kept apart: classify_sibling() returns a
SiblingDecision for one node, render() turns decisions into markup.

Pipeline position: Stage 3 (Preprocessor → Scorer → Assembler).
Input:  top Candidate + CandidateSet
Output: HTML fragment wrapped in <div>...</div>
"""

from typing import Iterator, Optional

from bs4 import Tag

from .config import ReaderSettings
from .logger import get_module_logger
from .schemas import SKIP, Candidate, CandidateSet, SiblingDecision
from .scorer import get_link_density

logger = get_module_logger("assembler")


def contains_sentence(text: str) -> bool:
    return text.endswith('.') or '. ' in text


class Assembler:
    """Builds the article fragment around the top candidate."""

    def __init__(self, settings: Optional[ReaderSettings] = None):
        self.settings = settings or ReaderSettings()

    def siblings_and_self(self, node: Tag) -> Iterator[Tag]:
        """Element children of the node's parent in document order, node included."""
        parent = node.parent
        if parent is None:
            yield node
            return
        yield from parent.find_all(True, recursive=False)

    def classify_sibling(self, node: Tag, top: Candidate,
                         candidates: CandidateSet) -> SiblingDecision:
        """
        Decide whether one node joins the article and under which tag.

        - the top candidate itself: always, as <div> (a synthesized <body>
          stand-in is never emitted itself, only its siblings are weighed)
        - a sibling candidate scoring at least the sibling threshold: as <div>
        - a <p>: under its own tag when it reads like prose
        """
        if node is top.node:
            return SKIP if top.synthesized else SiblingDecision(emit_as='div')

        candidate = candidates.get(node)
        if candidate is not None and candidate.score >= self.settings.sibling_threshold(top.score):
            return SiblingDecision(emit_as='div')

        if node.name == 'p' and self._is_prose_paragraph(node):
            return SiblingDecision(emit_as=node.name)

        return SKIP

    def _is_prose_paragraph(self, node: Tag) -> bool:
        content = node.get_text()
        link_density = get_link_density(node)

        if len(content) >= self.settings.paragraph_min_length:
            return link_density < self.settings.paragraph_max_link_density

        return link_density == 0 and contains_sentence(content)

    @staticmethod
    def render(node: Tag, decision: SiblingDecision) -> str:
        """Serialize the node's inner markup wrapped in the decided tag."""
        tag = decision.emit_as
        return f"<{tag}>{node.decode_contents()}</{tag}>"

    def assemble(self, top: Candidate, candidates: CandidateSet) -> str:
        """
        Build the article fragment.

        Args:
            top: Top candidate (possibly the synthesized <body> fallback)
            candidates: Normalized candidate set

        Returns:
            HTML string starting with <div> and ending with </div>
        """
        parts = ['<div>']
        emitted = 0

        for node in self.siblings_and_self(top.node):
            decision = self.classify_sibling(node, top, candidates)
            if decision.emit:
                parts.append(self.render(node, decision))
                emitted += 1

        parts.append('</div>')
        logger.debug(f"Assembled article from {emitted} block(s)")
        return ''.join(parts)
