"""
Orchestration of the article transformation pipeline.

process(): URL -> fetch -> extract -> validate -> prompt -> Gemini -> post-process.

Every step fails fast with the first typed error; no partial results are
returned and nothing is retried, cached or shared between requests.
"""

import dataclasses
import logging
import re
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from . import config
from .errors import ContentTooShort, ContentUnextractable, InvalidInput, MissingCredential
from .extractor import ArticleDocument
from .fetcher import fetch_article
from .generation import GeminiClient, generate_text
from .prompts import ActionKind, build_prompt, build_translation_prompt

logger = logging.getLogger(__name__)

SOURCE_MARKER = re.compile(r'источник:[ \t]*', re.IGNORECASE)


@dataclass(frozen=True)
class TransformationRequest:
    url: str
    action_kind: ActionKind

    @classmethod
    def validate(cls, url, action_kind) -> 'TransformationRequest':
        """Build a request from raw input, raising InvalidInput on bad fields."""
        return cls(url=validate_url(url), action_kind=ActionKind.parse(action_kind))


@dataclass(frozen=True)
class GenerationResult:
    action_kind: ActionKind
    original: Dict[str, str]
    result: str

    def to_dict(self) -> dict:
        return {
            'actionKind': self.action_kind.value,
            'original': self.original,
            'result': self.result,
        }


@dataclass(frozen=True)
class TranslationResult:
    original: Dict[str, str]
    translation: str

    def to_dict(self) -> dict:
        return {'original': self.original, 'translation': self.translation}


def validate_url(url) -> str:
    if not isinstance(url, str) or not url.strip():
        raise InvalidInput('URL is required')
    return url.strip()


def check_content(content: str) -> None:
    """
    Reject content that is missing or too short to transform.

    Raises:
        ContentUnextractable: sentinel or blank content
        ContentTooShort: fewer than MIN_CONTENT_LENGTH characters after trimming
    """
    if not content or content == config.NOT_FOUND or not content.strip():
        raise ContentUnextractable()

    length = len(content.strip())
    if length < config.MIN_CONTENT_LENGTH:
        raise ContentTooShort(config.MIN_CONTENT_LENGTH, length)


def truncate_content(content: str) -> str:
    """Cap content at MAX_CONTENT_LENGTH characters, marking the cut."""
    if len(content) <= config.MAX_CONTENT_LENGTH:
        return content
    logger.info("Truncating content from %d to %d chars", len(content), config.MAX_CONTENT_LENGTH)
    return content[:config.MAX_CONTENT_LENGTH] + config.TRUNCATION_MARKER


def make_excerpt(document: ArticleDocument) -> Dict[str, str]:
    """Original article fields for the response, content capped to an excerpt."""
    return {
        'title': document.title,
        'content': document.content[:config.EXCERPT_LENGTH] + '...',
        'date': document.date,
    }


def attach_source_link(text: str, url: str) -> str:
    """
    Make sure a social post ends up carrying the source URL exactly once.

    - URL already present: unchanged
    - No "Источник:" marker: a source line is appended
    - Marker without URL: the first marker is rewritten to include the URL
    """
    if url in text:
        return text

    match = SOURCE_MARKER.search(text)
    if match is None:
        return f'{text}\n\n🔗 Источник: {url}'

    # Keep a separator if the marker was followed by more text on the same line
    rest = text[match.end():]
    separator = ' ' if rest and not rest.startswith(('\n', '\r')) else ''
    return f'{text[:match.start()]}Источник: {url}{separator}{rest}'


def require_api_key(api_key: Optional[str]) -> str:
    api_key = api_key if api_key is not None else config.GEMINI_API_KEY
    if not api_key:
        raise MissingCredential()
    return api_key


def prepare_document(url: str, fetch: Callable[[str], ArticleDocument]) -> ArticleDocument:
    """Fetch, extract and gate an article; returns the original document."""
    document = fetch(url)
    check_content(document.content)
    return document


def process(
    url,
    action_kind,
    api_key: Optional[str] = None,
    fetch: Callable[[str], ArticleDocument] = fetch_article,
    client_factory: Callable = GeminiClient,
    timeout: float = config.GENERATION_TIMEOUT_SECONDS,
) -> GenerationResult:
    """
    Run an AI transformation over the article at a URL.

    Args:
        url: Article URL
        action_kind: 'summary', 'theses' or 'telegram' (or an ActionKind)
        api_key: Gemini key; defaults to GEMINI_API_KEY from the environment
        fetch: URL -> ArticleDocument collaborator
        client_factory: api_key -> generation client
        timeout: Deadline for the generation call in seconds

    Returns:
        GenerationResult with an excerpt of the original and the generated text

    Raises:
        ReferentError subclasses, see referent.errors
    """
    request = TransformationRequest.validate(url, action_kind)
    logger.info("Processing %s for %s", request.action_kind.value, request.url)

    document = prepare_document(request.url, fetch)
    content = truncate_content(document.content)
    key = require_api_key(api_key)

    prompt = build_prompt(
        request.action_kind,
        dataclasses.replace(document, content=content),
        request.url,
    )
    result = generate_text(client_factory(key), prompt, timeout=timeout)

    if request.action_kind is ActionKind.TELEGRAM:
        result = attach_source_link(result, request.url)

    return GenerationResult(
        action_kind=request.action_kind,
        original=make_excerpt(document),
        result=result,
    )


def translate(
    url,
    api_key: Optional[str] = None,
    fetch: Callable[[str], ArticleDocument] = fetch_article,
    client_factory: Callable = GeminiClient,
    timeout: float = config.GENERATION_TIMEOUT_SECONDS,
) -> TranslationResult:
    """Translate the article at a URL into Russian. Same gates and errors as process()."""
    url = validate_url(url)
    logger.info("Translating %s", url)

    document = prepare_document(url, fetch)
    content = truncate_content(document.content)
    key = require_api_key(api_key)

    prompt = build_translation_prompt(dataclasses.replace(document, content=content), url)
    translation = generate_text(client_factory(key), prompt, timeout=timeout)

    return TranslationResult(original=document.to_dict(), translation=translation)
