"""
Text generation via Gemini.

The client makes exactly one call per request under a hard deadline
(passed to the transport as the request timeout) and never retries:
a paid generation call is only repeated when the caller asks again.
Service failures are mapped onto the typed errors in referent.errors.
"""

import logging
from typing import Optional

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from . import config
from .errors import (
    EmptyGenerationResult,
    GenerationTimeout,
    InvalidCredential,
    InvalidUpstreamResponse,
    RateLimited,
    ReferentError,
    UpstreamError,
    UpstreamUnavailable,
)
from .prompts import PromptSpec

logger = logging.getLogger(__name__)


class GeminiClient:
    """Thin wrapper around google.generativeai for one-shot completions."""

    def __init__(self, api_key: str, model_name: Optional[str] = None):
        genai.configure(api_key=api_key)
        self.model_name = model_name or config.GEMINI_MODEL

    def generate(self, prompt: PromptSpec, timeout: float):
        """Send the prompt pair; returns the raw GenerateContentResponse."""
        model = genai.GenerativeModel(
            self.model_name,
            system_instruction=prompt.system_instruction,
        )
        return model.generate_content(
            prompt.user_instruction,
            generation_config=genai.GenerationConfig(temperature=prompt.temperature),
            # The SDK's default policy retries 503 for up to 600 s
            request_options={'timeout': timeout, 'retry': None},
        )


def map_generation_error(exc: Exception, timeout: float) -> Optional[ReferentError]:
    """
    Translate a generation-service exception into a typed error.

    Returns:
        The typed error, or None if the exception is not a service failure
    """
    if isinstance(exc, (google_exceptions.DeadlineExceeded, TimeoutError)):
        return GenerationTimeout(int(timeout))

    if not isinstance(exc, google_exceptions.GoogleAPICallError):
        return None

    status = int(exc.code) if exc.code is not None else None

    # Gemini reports a bad key as 400 with reason API_KEY_INVALID
    if status == 401 or getattr(exc, 'reason', None) == 'API_KEY_INVALID':
        return InvalidCredential()
    if status == 429:
        return RateLimited()
    if status == 503:
        return UpstreamUnavailable()

    return UpstreamError(f'Ошибка Gemini: {exc.message}', status)


def completion_text(response) -> str:
    """
    Pull the completion text out of a response.

    Raises:
        InvalidUpstreamResponse: no candidate or no content parts
    """
    candidates = getattr(response, 'candidates', None)
    if not candidates:
        raise InvalidUpstreamResponse()

    content = getattr(candidates[0], 'content', None)
    parts = getattr(content, 'parts', None) if content is not None else None
    if not parts:
        raise InvalidUpstreamResponse()

    return ''.join(getattr(part, 'text', '') or '' for part in parts).strip()


def generate_text(client, prompt: PromptSpec, timeout: float = config.GENERATION_TIMEOUT_SECONDS) -> str:
    """
    Run one generation call and return the trimmed completion.

    Raises:
        GenerationTimeout: the deadline passed
        InvalidCredential, RateLimited, UpstreamUnavailable, UpstreamError:
            mapped from the service status
        InvalidUpstreamResponse: malformed response
        EmptyGenerationResult: completion was blank
    """
    try:
        response = client.generate(prompt, timeout=timeout)
    except ReferentError:
        raise
    except Exception as e:
        mapped = map_generation_error(e, timeout)
        if mapped is None:
            raise
        logger.warning("Generation call failed: %s (%s)", mapped.kind, e)
        raise mapped

    text = completion_text(response)
    if not text:
        raise EmptyGenerationResult()
    return text
