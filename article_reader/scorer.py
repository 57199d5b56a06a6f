"""
Candidate scoring.

Walks the scoring-eligible elements of a preprocessed tree, scores their
text, and credits that score to the parent (in full) and the grandparent
(halved). Once every element has been seen, each candidate is scaled by
(1 - link density) and the best one becomes the root of the article.

Pipeline position: Stage 2 (Preprocessor → Scorer → Assembler).
Input:  cleaned BeautifulSoup tree
Output: CandidateSet + top Candidate
"""

from typing import Optional

from bs4 import BeautifulSoup, Tag

from .classifier import get_class_weight
from .config import ReaderSettings
from .logger import get_module_logger
from .schemas import Candidate, CandidateSet

logger = get_module_logger("scorer")

# Base score a node gets when it first becomes a candidate
TAG_BASE_SCORES = {
    'div': 5,
    'pre': 3, 'td': 3, 'blockquote': 3, 'img': 3,
    'address': -3, 'ol': -3, 'ul': -3, 'dl': -3, 'dd': -3, 'dt': -3, 'li': -3, 'form': -3,
    'h1': -5, 'h2': -5, 'h3': -5, 'h4': -5, 'h5': -5, 'h6': -5, 'th': -5,
}


def get_link_density(elem: Tag) -> float:
    """
    Fraction of an element's text that sits inside <a> descendants.

    An element without text has a density of 0.
    """
    text_length = len(elem.get_text())
    if text_length == 0:
        return 0.0

    link_length = sum(len(a.get_text()) for a in elem.find_all('a'))
    return link_length / text_length


def _element_parent(elem: Tag) -> Optional[Tag]:
    # The BeautifulSoup object itself is not an element
    parent = elem.parent
    if parent is None or isinstance(parent, BeautifulSoup):
        return None
    return parent


class Scorer:
    """Scores candidates and picks the top one."""

    def __init__(self, settings: Optional[ReaderSettings] = None):
        self.settings = settings or ReaderSettings()

    def score_node(self, elem: Tag) -> Candidate:
        """Create a candidate with the tag's base score plus its class/id weight."""
        score = TAG_BASE_SCORES.get(elem.name, 0)
        score += get_class_weight(elem, self.settings.class_weight)
        return Candidate(node=elem, score=float(score))

    def content_score(self, text: str) -> float:
        """
        Score a block of text.

        One point as a base, one per comma-separated fragment, and one per
        full 100 characters up to max_length_bonus.
        """
        score = 1.0
        score += text.count(',') + 1
        score += min(len(text) // 100, self.settings.max_length_bonus)
        return score

    def get_candidates(self, soup: BeautifulSoup) -> CandidateSet:
        """
        Score every eligible element and return the normalized candidate set.

        Candidates are created in document order the first time a scored
        element credits them.
        """
        candidates = CandidateSet()

        for elem in soup.find_all(self.settings.tags_to_score):
            text = elem.get_text()
            if len(text) < self.settings.min_text_length:
                continue

            parent = _element_parent(elem)
            if parent is None:
                continue
            grandparent = _element_parent(parent)

            parent_candidate = self._ensure_candidate(candidates, parent)
            grandparent_candidate = None
            if grandparent is not None:
                grandparent_candidate = self._ensure_candidate(candidates, grandparent)

            score = self.content_score(text)
            parent_candidate.score += score
            if grandparent_candidate is not None:
                grandparent_candidate.score += score / 2.0

        self.normalize(candidates)
        return candidates

    def _ensure_candidate(self, candidates: CandidateSet, elem: Tag) -> Candidate:
        candidate = candidates.get(elem)
        if candidate is None:
            candidate = candidates.add(self.score_node(elem))
        return candidate

    def normalize(self, candidates: CandidateSet) -> None:
        """
        Scale every candidate by (1 - link density).

        Good content has a small link density and is barely affected;
        navigation blocks lose most of their score.
        """
        for candidate in candidates:
            candidate.score *= (1 - get_link_density(candidate.node))

    def get_top_candidate(self, soup: BeautifulSoup, candidates: CandidateSet) -> Candidate:
        """
        Return the highest-scoring candidate; the earliest one wins ties.

        With no candidates, a zero-score stand-in wrapping <body> is returned.
        """
        best = None
        for candidate in candidates:
            if best is None or best.score < candidate.score:
                best = candidate

        if best is None:
            body = soup.find('body') or soup
            logger.debug("No candidates found, falling back to <body>")
            best = Candidate(node=body, score=0.0, synthesized=True)

        return best
