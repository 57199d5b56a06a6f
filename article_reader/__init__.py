"""
Article Reader

Readability-style main content extraction for HTML pages.
- Preprocessor: parsing and tree cleanup
- Scorer: candidate scoring and top-candidate selection
- Assembler: sibling gathering and fragment rendering

Public API surface:
  Entry points      — ArticleReader, extract_content, extract_file
  Pipeline stages   — Preprocessor, Scorer, Assembler
  Data models       — Candidate, CandidateSet, SiblingDecision, ExtractionResult
  Configuration     — ReaderSettings
  Error types       — ReaderError, ParseError (fatal)
"""

# --- Entry points ---
from .main import ArticleReader, extract_content, extract_file

# --- Pipeline stage classes ---
from .preprocessor import Preprocessor
from .scorer import Scorer
from .assembler import Assembler

# --- Data models ---
from .schemas import Candidate, CandidateSet, SiblingDecision, ExtractionResult

# --- Configuration ---
from .config import ReaderSettings

# --- Exceptions (callers should catch ParseError) ---
from .exceptions import ReaderError, ParseError

__version__ = "0.1.0"
__all__ = [
    "ArticleReader",
    "extract_content",
    "extract_file",
    "Preprocessor",
    "Scorer",
    "Assembler",
    "Candidate",
    "CandidateSet",
    "SiblingDecision",
    "ExtractionResult",
    "ReaderSettings",
    "ReaderError",
    "ParseError",
]
