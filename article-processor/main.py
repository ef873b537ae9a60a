"""
Article Processor Cloud Functions

HTTP entry points for the Referent article pipeline.

Responsibilities:
- Parse an article page into title, date and content
- Run an AI transformation (summary, theses, Telegram post)
- Translate an article into Russian

Does NOT:
- Cache results or deduplicate requests
- Retry failed generation calls (the caller decides)
- Persist anything between requests
"""

import functions_framework
import json
import logging
import os
import sys

# Add the referent package to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
from referent import config
from referent.errors import InvalidInput, ReferentError, Unknown
from referent.fetcher import fetch_article
from referent.orchestrator import process, translate, validate_url

logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)
logger = logging.getLogger(__name__)

CORS_PREFLIGHT_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Methods': 'POST',
    'Access-Control-Allow-Headers': 'Content-Type',
    'Access-Control-Max-Age': '3600'
}
RESPONSE_HEADERS = {'Access-Control-Allow-Origin': '*', 'Content-Type': 'application/json'}


def read_request_json(request) -> dict:
    """Request body as a dict; anything else is invalid input."""
    request_json = request.get_json(silent=True)
    if not isinstance(request_json, dict):
        raise InvalidInput('Request body must be a JSON object')
    return request_json


def error_response(error: ReferentError, operation: str, url=None) -> tuple:
    """Log a pipeline failure with context and build the caller-facing response."""
    body, status = error.to_response()
    if status >= 500:
        logger.error("%s failed for %s: %s (%d) %s", operation, url, error.kind, status, error.message)
    else:
        logger.warning("%s rejected for %s: %s (%d) %s", operation, url, error.kind, status, error.message)
    return (json.dumps(body, ensure_ascii=False), status, RESPONSE_HEADERS)


def handle(request, operation: str, run) -> tuple:
    """
    Shared request lifecycle: CORS preflight, JSON decoding, error mapping.

    `run` receives the decoded body and returns a JSON-serializable dict.
    """
    if request.method == 'OPTIONS':
        return ('', 204, CORS_PREFLIGHT_HEADERS)

    url = None
    try:
        request_json = read_request_json(request)
        url = request_json.get('url')
        return (json.dumps(run(request_json), ensure_ascii=False), 200, RESPONSE_HEADERS)

    except ReferentError as e:
        return error_response(e, operation, url)
    except Exception as e:
        logger.exception("%s crashed for %s", operation, url)
        return error_response(Unknown.from_exception(e), operation, url)


@functions_framework.http
def parse_article(request):
    """
    Extract an article without AI processing.

    Expected JSON input:
    {
        "url": "https://example.com/article"
    }
    """
    return handle(
        request,
        'parse',
        lambda body: fetch_article(validate_url(body.get('url'))).to_dict(),
    )


@functions_framework.http
def process_article(request):
    """
    Main Cloud Function entry point.

    Expected JSON input:
    {
        "url": "https://example.com/article",
        "actionKind": "summary" | "theses" | "telegram"
    }

    "actionType" is accepted as an alias for "actionKind".
    """
    return handle(
        request,
        'process',
        lambda body: process(
            body.get('url'),
            body.get('actionKind', body.get('actionType')),
        ).to_dict(),
    )


@functions_framework.http
def translate_article(request):
    """
    Translate an article into Russian.

    Expected JSON input:
    {
        "url": "https://example.com/article"
    }
    """
    return handle(request, 'translate', lambda body: translate(body.get('url')).to_dict())
