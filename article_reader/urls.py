"""Base URL resolution from <head><base href>."""

from urllib.parse import urlparse

from bs4 import BeautifulSoup


def is_absolute_url(url: str) -> bool:
    """True when the URL has both a scheme and a host."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return bool(parsed.scheme and parsed.netloc)


def resolve_base_url(soup: BeautifulSoup) -> str:
    """
    Return the document's <base href> if it is an absolute URL, else "".

    Only the first <base> inside <head> is considered.
    """
    base = soup.select_one('head base')
    if base is None:
        return ""

    href = base.get('href')
    if href is None:
        return ""

    href = href.strip()
    return href if is_absolute_url(href) else ""
