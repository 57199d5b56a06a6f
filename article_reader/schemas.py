"""
Pydantic schemas defining the contracts between pipeline stages.

Candidate: an element paired with its running content score (Scorer → Assembler)
SiblingDecision: per-sibling verdict produced by the Assembler's classifier
ExtractionResult: standard output of ArticleReader.extract()

Data flow through the pipeline:
  Preprocessor → cleaned BeautifulSoup tree → Scorer produces CandidateSet
  CandidateSet + top Candidate → Assembler → HTML fragment → ExtractionResult
"""

from typing import Iterator, Optional

from bs4 import Tag
from pydantic import BaseModel, ConfigDict, Field


class Candidate(BaseModel):
    """An element node and its accumulated content score."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    node: Tag
    score: float = 0.0
    # True only for the zero-score <body> stand-in used when nothing was scored
    synthesized: bool = False

    def __str__(self) -> str:
        node_id = self.node.get("id") or ""
        node_class = self.node.get("class") or ""
        if isinstance(node_class, list):
            node_class = " ".join(node_class)

        if node_id and node_class:
            return f"{self.node.name}#{node_id}.{node_class} => {self.score:f}"
        if node_id:
            return f"{self.node.name}#{node_id} => {self.score:f}"
        if node_class:
            return f"{self.node.name}.{node_class} => {self.score:f}"
        return f"{self.node.name} => {self.score:f}"


class CandidateSet:
    """
    Candidates keyed by element identity.

    Iteration follows insertion order, i.e. the document order in which the
    scorer first created each candidate. Top-candidate ties are broken by
    this order.
    """

    def __init__(self):
        self._candidates: dict[int, Candidate] = {}

    def get(self, node: Tag) -> Optional[Candidate]:
        return self._candidates.get(id(node))

    def add(self, candidate: Candidate) -> Candidate:
        self._candidates[id(candidate.node)] = candidate
        return candidate

    def __contains__(self, node: Tag) -> bool:
        return id(node) in self._candidates

    def __iter__(self) -> Iterator[Candidate]:
        return iter(self._candidates.values())

    def __len__(self) -> int:
        return len(self._candidates)

    def __str__(self) -> str:
        return ", ".join(str(c) for c in self)


class SiblingDecision(BaseModel):
    """Whether a sibling of the top candidate is emitted, and under which tag."""
    emit_as: Optional[str] = None   # None means skip

    @property
    def emit(self) -> bool:
        return self.emit_as is not None


SKIP = SiblingDecision()


class ExtractionResult(BaseModel):
    """Output from ArticleReader.extract() — the final pipeline product."""
    base_url: str = ""      # Absolute <base href>, or "" when absent/relative
    content: str = Field(default="<div></div>", description="Extracted article HTML fragment")
    warnings: list[str] = Field(default_factory=list)  # Non-fatal issues (e.g. parser fallback)
