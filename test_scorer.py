"""
Tests for class/id classification, candidate scoring, link density and
top-candidate selection.
"""

import pytest
from bs4 import BeautifulSoup
from pydantic import ValidationError

from article_reader.classifier import attribute_weight, get_attr, get_class_weight, should_remove
from article_reader.config import ReaderSettings
from article_reader.preprocessor import Preprocessor
from article_reader.schemas import Candidate, CandidateSet
from article_reader.scorer import Scorer, get_link_density

# 150 characters, no commas
PARAGRAPH = "word " * 30


def parse(html):
    return Preprocessor().parse(html)


@pytest.fixture
def scorer() -> Scorer:
    return Scorer()


# --- classifier ---

@pytest.mark.parametrize("value, expected", [
    ("sidebar", True),
    ("Site-Header", True),
    ("main-sidebar", False),        # rescued by "main"
    ("comment-body", False),        # rescued by "body"
    ("g-plus article", True),       # strong term ignores the rescue
    ("popupbody", True),
    ("top-ad", True),
    ("story", False),
    ("", False),
])
def test_should_remove(value, expected):
    assert should_remove(value) is expected


@pytest.mark.parametrize("value, expected", [
    ("sidebar", -25),
    ("main-sidebar", -25),          # negative is checked first
    ("ShareBox", -25),
    ("hidden", -25),
    ("article-content", 25),
    ("h-entry", 25),
    ("wrapper", 0),
    ("", 0),
])
def test_attribute_weight(value, expected):
    assert attribute_weight(value) == expected


def test_class_and_id_weights_add_up():
    soup = parse('<div class="content" id="sidebar">x</div><div class="post" id="story">y</div>')
    first, second = soup.find_all("div")

    assert get_class_weight(first) == 0
    assert get_class_weight(second) == 50


def test_missing_attributes_weigh_nothing():
    assert get_class_weight(parse("<section>x</section>").find("section")) == 0


# --- node and content scores ---

@pytest.mark.parametrize("html, expected", [
    ("<div>x</div>", 5),
    ('<div class="article">x</div>', 30),
    ('<div class="comment">x</div>', -20),
    ("<blockquote>x</blockquote>", 3),
    ("<ul><li>x</li></ul>", -3),
    ("<h2>x</h2>", -5),
    ("<section>x</section>", 0),
])
def test_score_node(scorer, html, expected):
    elem = parse(html).find("body").find(True)
    if elem.name == "ul":
        elem = elem.find("li")

    assert scorer.score_node(elem).score == expected


@pytest.mark.parametrize("text, expected", [
    ("a, b, c", 4),                 # 1 + 3 fragments
    ("x" * 250, 4),                 # 1 + 1 + two full hundreds
    ("x" * 1000, 5),                # length bonus capped at 3
    ("y, " * 200, 205),             # 1 + 201 fragments + 3
])
def test_content_score(scorer, text, expected):
    assert scorer.content_score(text) == expected


def test_score_flows_to_parent_and_grandparent(scorer):
    soup = parse(f"<html><body><section><p>{PARAGRAPH}</p></section></body></html>")

    candidates = scorer.get_candidates(soup)

    # The section itself credits body/html; the paragraph credits section/body
    assert [c.node.name for c in candidates] == ["body", "html", "section"]
    assert candidates.get(soup.find("section")).score == 3.0
    assert candidates.get(soup.find("body")).score == 4.5
    assert candidates.get(soup.find("html")).score == 1.5


def test_short_text_is_not_scored(scorer):
    soup = parse("<html><body><div><p>too short to count</p></div></body></html>")
    assert len(scorer.get_candidates(soup)) == 0


def test_text_length_counts_characters_not_bytes(scorer):
    # 23 characters, 69 bytes in UTF-8
    text = "\u4eca\u5929\u6211\u4eec\u8ba8\u8bba\u7684\u8bdd\u9898\u662f\u5982\u4f55\u5199\u51fa\u6613\u8bfb\u7684\u4e2d\u6587\u6587\u7ae0\u5185\u5bb9"
    html = f"<html><body><div><p>{text}</p></div></body></html>"

    assert len(scorer.get_candidates(parse(html))) == 0

    lowered = Scorer(ReaderSettings(min_text_length=20))
    assert len(lowered.get_candidates(parse(html))) > 0
    assert "characters" in ReaderSettings.model_fields["min_text_length"].description


def test_more_content_raises_parent_score(scorer):
    def parent_score(text):
        soup = parse(f"<html><body><div><p>{text}</p></div></body></html>")
        candidates = scorer.get_candidates(soup)
        return candidates.get(soup.find("div")).score

    plain = parent_score("alpha beta gamma delta epsilon")
    commas = parent_score("alpha, beta, gamma, delta, epsilon")
    longer = parent_score("alpha, beta, gamma, delta, epsilon " + "zeta " * 40)

    assert plain < commas < longer


# --- link density ---

def test_link_density():
    p = parse('<p>abcd<a href="/">efgh</a></p>').find("p")
    assert get_link_density(p) == 0.5


def test_link_density_counts_every_anchor():
    p = parse('<p><a href="/a">ab</a>cd<a href="/b">ef</a>gh</p>').find("p")
    assert get_link_density(p) == 0.5


def test_link_density_of_empty_element_is_zero():
    assert get_link_density(parse("<p></p>").find("p")) == 0
    assert get_link_density(parse('<div><a href="/"></a></div>').find("div")) == 0


def test_normalize_scales_by_link_density(scorer):
    soup = parse('<p>abcd<a href="/">efgh</a></p><div>no links</div><span></span>')
    candidates = CandidateSet()
    linked = candidates.add(Candidate(node=soup.find("p"), score=10))
    plain = candidates.add(Candidate(node=soup.find("div"), score=10))
    empty = candidates.add(Candidate(node=soup.find("span"), score=10))

    scorer.normalize(candidates)

    assert linked.score == 5
    assert plain.score == 10
    assert empty.score == 10


def test_navigation_block_loses_to_prose(scorer):
    links = "".join(f'<a href="/{i}">navigation entry number {i}</a>' for i in range(10))
    soup = parse(
        "<html><body>"
        f'<div id="nav"><p>{links}</p></div>'
        f'<div id="prose"><p>{PARAGRAPH}</p></div>'
        "</body></html>"
    )

    candidates = scorer.get_candidates(soup)
    top = scorer.get_top_candidate(soup, candidates)

    assert candidates.get(soup.find(id="nav")).score == 0
    assert top.node is soup.find(id="prose")


# --- top candidate ---

def test_first_seen_wins_ties(scorer):
    soup = parse("<div>a</div><div>b</div><div>c</div>")
    first, second, third = soup.find_all("div")
    candidates = CandidateSet()
    candidates.add(Candidate(node=first, score=7))
    candidates.add(Candidate(node=second, score=7))
    candidates.add(Candidate(node=third, score=3))

    assert scorer.get_top_candidate(soup, candidates).node is first


def test_later_higher_score_wins(scorer):
    soup = parse("<div>a</div><div>b</div>")
    first, second = soup.find_all("div")
    candidates = CandidateSet()
    candidates.add(Candidate(node=first, score=-2))
    candidates.add(Candidate(node=second, score=1))

    assert scorer.get_top_candidate(soup, candidates).node is second


def test_empty_candidate_set_falls_back_to_body(scorer):
    soup = parse("<p>short</p>")

    top = scorer.get_top_candidate(soup, CandidateSet())

    assert top.node is soup.find("body")
    assert top.score == 0
    assert top.synthesized


def test_candidate_set_is_keyed_by_identity():
    soup = parse("<p>same</p><p>same</p>")
    first, second = soup.find_all("p")
    candidates = CandidateSet()
    candidates.add(Candidate(node=first, score=1))

    # Equal markup, different node
    assert first == second
    assert first in candidates
    assert second not in candidates


@pytest.mark.parametrize("html, expected", [
    ('<div id="main" class="post">x</div>', "div#main.post => 1.500000"),
    ('<div id="main">x</div>', "div#main => 1.500000"),
    ('<div class="post">x</div>', "div.post => 1.500000"),
    ("<div>x</div>", "div => 1.500000"),
])
def test_candidate_str(html, expected):
    assert str(Candidate(node=parse(html).find("div"), score=1.5)) == expected


# --- settings ---

def test_settings_from_env():
    settings = ReaderSettings.from_env({
        "ARTICLE_READER_MIN_TEXT_LENGTH": "40",
        "ARTICLE_READER_TAGS_TO_SCORE": "p, DIV",
        "UNRELATED": "ignored",
    })

    assert settings.min_text_length == 40
    assert settings.tags_to_score == ["p", "div"]
    assert settings.paragraph_min_length == 80


def test_settings_validation():
    with pytest.raises(ValidationError):
        ReaderSettings(min_text_length=-1)
    with pytest.raises(ValidationError):
        ReaderSettings(sibling_score_divisor=0)


def test_sibling_threshold():
    settings = ReaderSettings()
    assert settings.sibling_threshold(0) == 10
    assert settings.sibling_threshold(20) == 10
    assert settings.sibling_threshold(100) == 20


def test_custom_tags_to_score():
    soup = parse(f"<html><body><article><blockquote>{PARAGRAPH}</blockquote></article></body></html>")

    assert len(Scorer().get_candidates(soup)) == 0

    candidates = Scorer(ReaderSettings(tags_to_score=["blockquote"])).get_candidates(soup)
    assert [c.node.name for c in candidates] == ["article", "body"]


def test_multi_valued_class_from_default_soup():
    # Trees built by callers with bs4 defaults split class into a list
    soup = BeautifulSoup('<div class="post main" id="story">x</div>', "html5lib")
    div = soup.find("div")

    assert div["class"] == ["post", "main"]
    assert get_attr(div, "class") == "post main"
    assert get_class_weight(div) == 50
    assert str(Candidate(node=div, score=2)) == "div#story.post main => 2.000000"
