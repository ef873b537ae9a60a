"""Page fetching for the article pipeline."""

import logging

import requests

from .config import FETCH_TIMEOUT_SECONDS, USER_AGENT
from .errors import UpstreamFetchFailed
from .extractor import ArticleDocument, extract

logger = logging.getLogger(__name__)

HEADERS = {
    'User-Agent': USER_AGENT,
    'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
    'Accept-Language': 'ru-RU,ru;q=0.9,en-US;q=0.8,en;q=0.7',
}


def fetch_webpage(url: str) -> str:
    """
    Fetch raw HTML for a URL.

    Raises:
        UpstreamFetchFailed: on a non-success status or transport error,
            with the upstream status preserved when there is one
    """
    try:
        response = requests.get(url, headers=HEADERS, timeout=FETCH_TIMEOUT_SECONDS, allow_redirects=True)
        response.raise_for_status()
        return response.text

    except requests.exceptions.Timeout:
        raise UpstreamFetchFailed(f'Failed to fetch URL: request timed out after {FETCH_TIMEOUT_SECONDS}s', 408)
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code
        raise UpstreamFetchFailed(f'Failed to fetch URL: HTTP error {status} {e.response.reason or ""}'.rstrip(), status)
    except requests.exceptions.RequestException as e:
        raise UpstreamFetchFailed(f'Failed to fetch URL: {e}')


def fetch_article(url: str) -> ArticleDocument:
    """Fetch a page and run the extractor over it."""
    html = fetch_webpage(url)
    document = extract(html)
    logger.info("Extracted %d content chars from %s", len(document.content), url)
    return document
