"""
Article extraction from arbitrary HTML.

Real-world article pages follow no single markup convention, so each field
is resolved by a selector cascade: an ordered table of (selector, reader)
pairs tried from the most specific/semantic locator to the least specific.
The first reader producing a non-empty value wins and later candidates are
never evaluated. Fields nothing matches get the NOT_FOUND sentinel, so
extract() never raises for lack of a signal.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from bs4 import BeautifulSoup, Tag

from .config import MIN_CANDIDATE_LENGTH, NOT_FOUND

logger = logging.getLogger(__name__)

Reader = Callable[[Tag], str]

# Descendants removed from a content container before reading its text
NOISE_SELECTOR = 'script, style, nav, header, footer, aside, .ad, .advertisement, .sidebar'


@dataclass(frozen=True)
class ArticleDocument:
    """Parsed article: every field is text or the NOT_FOUND sentinel."""

    title: str = NOT_FOUND
    date: str = NOT_FOUND
    content: str = NOT_FOUND

    def to_dict(self) -> Dict[str, str]:
        return {'date': self.date, 'title': self.title, 'content': self.content}


def read_text(element: Tag) -> str:
    """Rendered text of an element (text nodes joined as-is), trimmed."""
    return element.get_text().strip()


def read_content_attr(element: Tag) -> str:
    """Value of a <meta> tag's content attribute."""
    return (element.get('content') or '').strip()


def read_datetime(element: Tag) -> str:
    """Machine-readable datetime attribute, falling back to rendered text."""
    return (element.get('datetime') or '').strip() or read_text(element)


def read_content_block(element: Tag) -> str:
    """
    Text of a content container with noise removed.

    Returns an empty string when what remains is too short to be an
    article body, which moves the cascade on to the next candidate.
    """
    strip_noise(element)
    text = read_text(element)
    return text if len(text) > MIN_CANDIDATE_LENGTH else ''


TITLE_CASCADE: List[Tuple[str, Reader]] = [
    ('h1', read_text),
    ('article h1', read_text),
    ('.post-title', read_text),
    ('.article-title', read_text),
    ('[class*="title"]', read_text),
    ('meta[property="og:title"]', read_content_attr),
    ('meta[name="twitter:title"]', read_content_attr),
]

DATE_CASCADE: List[Tuple[str, Reader]] = [
    ('time[datetime]', read_datetime),
    ('time', read_datetime),
    ('[class*="date"]', read_datetime),
    ('[class*="published"]', read_datetime),
    ('[class*="time"]', read_datetime),
    ('meta[property="article:published_time"]', read_content_attr),
    ('meta[name="publish-date"]', read_content_attr),
    ('meta[name="date"]', read_content_attr),
]

CONTENT_CASCADE: List[Tuple[str, Reader]] = [
    ('article', read_content_block),
    ('.post', read_content_block),
    ('.content', read_content_block),
    ('.article-content', read_content_block),
    ('.post-content', read_content_block),
    ('[class*="article"]', read_content_block),
    ('[class*="post"]', read_content_block),
    ('[class*="content"]', read_content_block),
    ('main article', read_content_block),
    ('main .content', read_content_block),
]


def strip_noise(element: Tag) -> None:
    """Remove scripts, navigation, ads and similar descendants in place."""
    for noise in element.select(NOISE_SELECTOR):
        noise.decompose()


def resolve_cascade(soup: BeautifulSoup, cascade: List[Tuple[str, Reader]]) -> Optional[str]:
    """
    Run a selector cascade against the document.

    Only the first element matching each selector is considered.

    Returns:
        The first non-empty value, or None if no candidate produced one
    """
    for selector, read in cascade:
        element = soup.select_one(selector)
        if element is None:
            continue
        value = read(element)
        if value:
            logger.debug("Cascade matched selector %r", selector)
            return value
    return None


def extract_fallback_content(soup: BeautifulSoup) -> str:
    """Whole-body text with noise removed; no minimum length."""
    body = soup.body
    if body is None:
        # Fragment without <body>: document metadata is not article text
        for element in soup.select('head, title'):
            element.decompose()
        body = soup
    strip_noise(body)
    return read_text(body)


def collapse_whitespace(text: str) -> str:
    return re.sub(r'\s+', ' ', text).strip()


def extract(html: str) -> ArticleDocument:
    """
    Extract title, date and body text from raw HTML.

    Args:
        html: Raw page markup (may be empty or malformed)

    Returns:
        ArticleDocument with NOT_FOUND for every field that could not be located
    """
    soup = BeautifulSoup(html or '', 'html.parser')

    # Metadata first: content resolution removes nodes from the tree
    title = resolve_cascade(soup, TITLE_CASCADE)
    date = resolve_cascade(soup, DATE_CASCADE)

    content = resolve_cascade(soup, CONTENT_CASCADE)
    if content is None:
        logger.debug("No content container qualified, falling back to body")
        content = extract_fallback_content(soup)
    content = collapse_whitespace(content)

    return ArticleDocument(
        title=title or NOT_FOUND,
        date=date or NOT_FOUND,
        content=content or NOT_FOUND,
    )
