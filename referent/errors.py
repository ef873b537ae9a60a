"""
Error taxonomy for the Referent pipeline.

Every failure the pipeline can report is a ReferentError subclass carrying
the caller-facing message and HTTP status. The HTTP functions turn these
into ``{"error": message}`` responses; anything else becomes Unknown (500).

Error Classification:
====================

CLIENT ERRORS (HTTP 4xx):
- InvalidInput, UpstreamFetchFailed
- ContentUnextractable, ContentTooShort

CONFIGURATION ERRORS (HTTP 500):
- MissingCredential

GENERATION SERVICE ERRORS (status mapped from the service):
- GenerationTimeout (504)
- InvalidCredential, RateLimited, UpstreamUnavailable, UpstreamError
- InvalidUpstreamResponse, EmptyGenerationResult (500)
"""

from typing import Dict, Optional, Tuple


class ReferentError(Exception):
    """Base class for all typed pipeline failures."""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    @property
    def kind(self) -> str:
        return type(self).__name__

    def to_response(self) -> Tuple[Dict[str, str], int]:
        """Caller-facing (body, status) pair."""
        return {'error': self.message}, self.status_code


class InvalidInput(ReferentError):
    status_code = 400


class UpstreamFetchFailed(ReferentError):
    """The article page could not be fetched."""

    status_code = 400

    def __init__(self, message: str, upstream_status: Optional[int] = None):
        # Upstream client errors pass through, everything else is a plain 400
        status = upstream_status if upstream_status and 400 <= upstream_status < 500 else 400
        super().__init__(message, status)
        self.upstream_status = upstream_status


class ContentUnextractable(ReferentError):
    status_code = 400

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or (
            'Не удалось извлечь контент статьи. '
            'Возможно, статья недоступна или имеет нестандартную структуру.'
        ))


class ContentTooShort(ReferentError):
    status_code = 400

    def __init__(self, threshold: int, length: int):
        super().__init__(
            f'Контент статьи слишком короткий ({length} символов, минимум {threshold}). '
            'Возможно, это не статья или парсинг не удался.'
        )
        self.threshold = threshold
        self.length = length


class MissingCredential(ReferentError):
    status_code = 500

    def __init__(self, message: str = 'GEMINI_API_KEY не настроен'):
        super().__init__(message)


class GenerationTimeout(ReferentError):
    status_code = 504

    def __init__(self, timeout_seconds: int):
        super().__init__(
            f'Превышено время ожидания ответа от AI (более {timeout_seconds} секунд). '
            'Статья может быть слишком длинной.'
        )
        self.timeout_seconds = timeout_seconds


class InvalidCredential(ReferentError):
    status_code = 401

    def __init__(self, message: str = 'Неверный API ключ Gemini. Проверьте GEMINI_API_KEY.'):
        super().__init__(message)


class RateLimited(ReferentError):
    status_code = 429

    def __init__(self, message: str = 'Превышен лимит запросов к Gemini API. Попробуйте позже.'):
        super().__init__(message)


class UpstreamUnavailable(ReferentError):
    status_code = 502

    def __init__(self, message: str = 'Сервис Gemini временно недоступен. Попробуйте позже.'):
        super().__init__(message)


class UpstreamError(ReferentError):
    """Any other non-success answer from the generation service."""

    def __init__(self, message: str, upstream_status: Optional[int] = None):
        # Server-class (and unknown) upstream failures are reported as bad gateway
        if upstream_status is None or upstream_status >= 500:
            status = 502
        else:
            status = upstream_status
        super().__init__(message, status)
        self.upstream_status = upstream_status


class InvalidUpstreamResponse(ReferentError):
    status_code = 500

    def __init__(self, message: str = 'Неожиданный формат ответа от Gemini'):
        super().__init__(message)


class EmptyGenerationResult(ReferentError):
    status_code = 500

    def __init__(self, message: str = 'AI вернул пустой ответ. Попробуйте еще раз или выберите другую статью.'):
        super().__init__(message)


class Unknown(ReferentError):
    status_code = 500

    @classmethod
    def from_exception(cls, exc: Exception) -> 'Unknown':
        return cls(str(exc) or 'Unknown error')
