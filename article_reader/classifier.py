"""
Class/id name classification.

The term lists below are plain data; the functions here are pure string
classifiers so they can be tested without building a tree.

- should_remove(): is this class/id value an unlikely-content region?
- attribute_weight(): does this class/id value look like content or chrome?
"""

import re

# No false positives are known for these, so no override is consulted
STRONG_NEGATIVE_TERMS = ("popupbody", "-ad", "g-plus")

UNLIKELY_TERMS = (
    "banner", "breadcrumbs", "combx", "comment", "community", "cover-wrap",
    "disqus", "extra", "foot", "header", "legends", "menu", "modal", "related",
    "remark", "replies", "rss", "shoutbox", "sidebar", "skyscraper", "social",
    "sponsor", "supplemental", "ad-break", "agegate", "pagination", "pager",
    "popup", "yom-remote",
)

# An unlikely match that also contains one of these is kept
MAYBE_TERMS = ("and", "article", "body", "column", "main", "shadow")

NEGATIVE_TERMS = (
    "hid", "banner", "combx", "comment", "com-", "contact", "foot", "masthead",
    "media", "meta", "modal", "outbrain", "promo", "related", "scroll", "share",
    "shoutbox", "sidebar", "skyscraper", "sponsor", "shopping", "tags", "tool",
    "widget", "byline", "author", "dateline", "writtenby",
)

POSITIVE_TERMS = (
    "article", "body", "content", "entry", "hentry", "h-entry", "main", "page",
    "pagination", "post", "text", "blog", "story",
)

NEGATIVE_PATTERN = re.compile("|".join(re.escape(t) for t in NEGATIVE_TERMS))
POSITIVE_PATTERN = re.compile("|".join(re.escape(t) for t in POSITIVE_TERMS))


def should_remove(value: str) -> bool:
    """
    Decide whether a class or id value marks an unlikely-content region.

    Strong-negative terms are checked first and can never be overridden.
    """
    value = value.lower()

    if any(term in value for term in STRONG_NEGATIVE_TERMS):
        return True

    if any(term in value for term in UNLIKELY_TERMS):
        return not any(term in value for term in MAYBE_TERMS)

    return False


def attribute_weight(value: str, weight: float = 25) -> float:
    """Return -weight, +weight or 0 for one class or id value."""
    value = value.lower()
    if NEGATIVE_PATTERN.search(value):
        return -weight
    if POSITIVE_PATTERN.search(value):
        return weight
    return 0


def get_attr(elem, name: str):
    """
    Read an attribute as a single string, or None when absent.

    Multi-valued attributes (a list, depending on how the tree was built)
    are joined back with spaces.
    """
    value = elem.get(name)
    if isinstance(value, list):
        return " ".join(value)
    return value


def get_class_weight(elem, weight: float = 25) -> float:
    """Sum the class weight and the id weight of an element."""
    total = 0
    for name in ("class", "id"):
        value = get_attr(elem, name)
        if value is not None:
            total += attribute_weight(value, weight)
    return total
