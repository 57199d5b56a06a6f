"""
Preprocessor module: turn a page into a cleaned document tree.

Two responsibilities:
- Parsing: read bytes/str/stream input, decode it with the declared charset,
  and build a BeautifulSoup tree (html5lib → lxml → html.parser fallback).
- Cleanup: strip <script>/<style>, rename <div>s that only hold inline
  content to <p>, and remove elements whose class/id marks them as
  non-content regions.

Every tree mutation is two-phase: a read-only pass collects the targets,
then a second pass applies the changes.

Pipeline position: Stage 1 (Preprocessor → Scorer → Assembler).
Input:  raw page (binary stream, bytes or str)
Output: mutated BeautifulSoup tree ready for scoring
"""

import re

from bs4 import BeautifulSoup

from .classifier import get_attr, should_remove
from .exceptions import ParseError
from .logger import get_module_logger

logger = get_module_logger("preprocessor")

# A <div> whose inner markup contains any of these tags is a real container
DIV_TO_P_PATTERN = re.compile(r'<(?:a|blockquote|dl|div|img|ol|p|pre|table|ul)[ />]', re.IGNORECASE)

# Parsers tried in order; html5lib follows the WHATWG algorithm, so it
# always produces <html>, <head> and <body>.
PARSERS = ['html5lib', 'lxml', 'html.parser']


class Preprocessor:
    """Parses a page and cleans the tree before scoring."""

    STRIP_ELEMENTS = ['script', 'style']

    # Elements never considered for unlikely-candidate removal
    PROTECTED_ELEMENTS = ('html', 'body')

    # Nothing inside these is removed, code samples must survive verbatim
    CODE_ELEMENTS = ['pre', 'code']

    # Browsers silently remap these charset labels (WHATWG encoding spec),
    # so decode the way a browser would.
    WHATWG_CHARSET_MAP = {
        'iso-8859-1': 'windows-1252',
        'iso8859-1': 'windows-1252',
        'latin1': 'windows-1252',
        'latin-1': 'windows-1252',
        'us-ascii': 'windows-1252',
        'ascii': 'windows-1252',
        'iso-8859-9': 'windows-1254',
        'iso-8859-11': 'windows-874',
        # A meta-declared UTF-16 is read as UTF-8, as the prescan does
        'utf-16': 'utf-8',
        'utf-16le': 'utf-8',
        'utf-16be': 'utf-8',
        'x-user-defined': 'windows-1252',
    }

    META_CHARSET = re.compile(r'<meta[^>]+charset=["\']?\s*([^\s"\';>]+)', re.IGNORECASE)

    @classmethod
    def detect_charset(cls, raw_bytes: bytes) -> str:
        """
        Find the charset declared by a <meta> tag in the first 2048 bytes.

        Covers both <meta charset="..."> and the http-equiv Content-Type
        form. Returns 'utf-8' when nothing is declared.
        """
        head = raw_bytes[:2048].decode('ascii', errors='ignore')
        m = cls.META_CHARSET.search(head)
        if not m:
            return 'utf-8'
        charset = m.group(1).strip().lower()
        return cls.WHATWG_CHARSET_MAP.get(charset, charset)

    def read(self, page, warnings: list = None) -> str:
        """
        Read a page into a string.

        Args:
            page: binary/text readable stream, bytes, or str

        Returns:
            Decoded markup

        Raises:
            ParseError: if the stream cannot be read or the input type
                        is unsupported
        """
        if hasattr(page, 'read'):
            try:
                page = page.read()
            except (OSError, ValueError) as e:
                raise ParseError(f"Unable to read page: {e}", source=repr(page)) from e

        if isinstance(page, (bytes, bytearray)):
            charset = self.detect_charset(bytes(page))
            try:
                return bytes(page).decode(charset, errors='replace')
            except LookupError:
                message = f"Unknown charset '{charset}', decoding as utf-8"
                logger.warning(message)
                if warnings is not None:
                    warnings.append(message)
                return bytes(page).decode('utf-8', errors='replace')

        if isinstance(page, str):
            return page

        raise ParseError(
            f"Unsupported page type: {type(page).__name__}",
            details={"type": type(page).__name__}
        )

    def parse(self, page, warnings: list = None) -> BeautifulSoup:
        """
        Parse a page into a BeautifulSoup tree.

        Attribute values are kept as raw strings (class is not split into a
        list) so class/id matching sees exactly what the page declared.

        Raises:
            ParseError: if every parser fails
        """
        warnings = warnings if warnings is not None else []
        html = self.read(page, warnings)

        errors = {}
        for parser in PARSERS:
            try:
                return BeautifulSoup(html, parser, multi_valued_attributes=None)
            except Exception as e:
                logger.warning(f"{parser} parsing failed: {e}")
                warnings.append(f"{parser} parsing failed: {e}")
                errors[parser] = str(e)

        raise ParseError("No parser could handle the page", details=errors)

    def process(self, soup: BeautifulSoup) -> BeautifulSoup:
        """Run every cleanup step on the tree, in order. Mutates in place."""
        removed = self.strip_scripts(soup)
        renamed = self.transform_misused_divs(soup)
        unlikely = self.remove_unlikely_candidates(soup)
        logger.debug(
            f"Preprocessing complete: {removed} script/style removed, "
            f"{renamed} divs renamed, {unlikely} unlikely candidates removed"
        )
        return soup

    def strip_scripts(self, soup: BeautifulSoup) -> int:
        """Remove every <script> and <style> element. Returns the count."""
        targets = soup.find_all(self.STRIP_ELEMENTS)
        for elem in targets:
            elem.decompose()
        return len(targets)

    def transform_misused_divs(self, soup: BeautifulSoup) -> int:
        """
        Rename <div>s that hold no block-level markup to <p>.

        Many sites wrap plain text in <div> instead of <p>; the scorer would
        otherwise only see those blocks through their containers.
        Returns the number of renamed elements.
        """
        targets = [
            div for div in soup.find_all('div')
            if not DIV_TO_P_PATTERN.search(div.decode_contents())
        ]
        for div in targets:
            div.name = 'p'
        return len(targets)

    def remove_unlikely_candidates(self, soup: BeautifulSoup) -> int:
        """
        Remove elements whose class or id marks a non-content region.

        <html>, <body>, and anything that is or sits inside <pre>/<code>
        are never removed. Returns the number of removed subtrees.
        """
        targets = [elem for elem in soup.find_all(True) if self._is_unlikely(elem)]
        target_ids = {id(elem) for elem in targets}

        # Drop targets that will go away with an ancestor anyway
        roots = [
            elem for elem in targets
            if not any(id(parent) in target_ids for parent in elem.parents)
        ]
        for elem in roots:
            elem.decompose()
        return len(roots)

    def _is_unlikely(self, elem) -> bool:
        if elem.name in self.PROTECTED_ELEMENTS:
            return False

        if elem.name in self.CODE_ELEMENTS or elem.find_parent(self.CODE_ELEMENTS) is not None:
            return False

        elem_class = get_attr(elem, 'class')
        if elem_class is not None and should_remove(elem_class):
            return True

        elem_id = get_attr(elem, 'id')
        return elem_id is not None and should_remove(elem_id)


def preprocess(page) -> BeautifulSoup:
    """
    Convenience function: parse a page and clean the tree.

    Args:
        page: binary/text readable stream, bytes, or str

    Returns:
        Cleaned BeautifulSoup tree
    """
    preprocessor = Preprocessor()
    return preprocessor.process(preprocessor.parse(page))
