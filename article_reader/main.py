"""
Main orchestrator for the article reader.

Coordinates the pipeline: Preprocessor → Scorer → Assembler.
Each call owns its own tree and candidate set; nothing is shared between
calls, so one ArticleReader can serve any number of pages.
"""

from pathlib import Path
from typing import Optional, Union

from .assembler import Assembler
from .config import ReaderSettings
from .exceptions import ParseError
from .logger import get_module_logger, setup_logger
from .preprocessor import Preprocessor
from .schemas import ExtractionResult
from .scorer import Scorer
from .urls import resolve_base_url

logger = get_module_logger("main")


class ArticleReader:
    """
    Main orchestrator for article extraction.

    Coordinates the pipeline:
    1. Preprocessor: parse the page and clean the tree
    2. Scorer: score candidates and pick the top one
    3. Assembler: gather the top candidate and related siblings
    """

    def __init__(
        self,
        settings: Optional[ReaderSettings] = None,
        log_level: int = None
    ):
        if log_level is not None:
            setup_logger(level=log_level)

        self.settings = settings or ReaderSettings()
        self.preprocessor = Preprocessor()
        self.scorer = Scorer(self.settings)
        self.assembler = Assembler(self.settings)

    def extract(self, page) -> ExtractionResult:
        """
        Extract the main article from a page.

        Args:
            page: binary/text readable stream, bytes, or str

        Returns:
            ExtractionResult with the base URL and article fragment

        Raises:
            ParseError: if the page cannot be read or parsed
        """
        logger.info("Starting extraction")
        warnings = []

        soup = self.preprocessor.parse(page, warnings)

        # Read <base> before cleanup touches the tree
        base_url = resolve_base_url(soup)

        self.preprocessor.process(soup)

        candidates = self.scorer.get_candidates(soup)
        top_candidate = self.scorer.get_top_candidate(soup, candidates)

        logger.debug(
            f"Readability parsing: base_url={base_url!r} "
            f"candidates=[{candidates}] top_candidate={top_candidate}"
        )

        if top_candidate.synthesized:
            warnings.append("No content candidates found, using body")

        content = self.assembler.assemble(top_candidate, candidates)

        logger.info(f"Complete: {len(candidates)} candidates, {len(content)} chars extracted")
        return ExtractionResult(base_url=base_url, content=content, warnings=warnings)

    def extract_file(self, file_path: Union[str, Path]) -> ExtractionResult:
        """Extract the main article from an HTML file."""
        file_path = Path(file_path)

        # Raw bytes, so the declared charset decides the decoding
        try:
            raw_bytes = file_path.read_bytes()
        except OSError as e:
            raise ParseError(f"Unable to read {file_path}: {e}", source=str(file_path)) from e

        return self.extract(raw_bytes)


def extract_content(page, settings: Optional[ReaderSettings] = None) -> tuple[str, str]:
    """
    Convenience function: return (base_url, article_html) for a page.

    Raises:
        ParseError: if the page cannot be read or parsed
    """
    result = ArticleReader(settings=settings).extract(page)
    return result.base_url, result.content


def extract_file(file_path: Union[str, Path], settings: Optional[ReaderSettings] = None) -> ExtractionResult:
    """Convenience function to extract the article from an HTML file."""
    return ArticleReader(settings=settings).extract_file(file_path)
