"""
Error Contract Tests - Defines the caller-facing shape of every failure.

Every failure is reported as {"error": message} with a status code:

CLIENT ERRORS (HTTP 4xx):
- InvalidInput (400)
- UpstreamFetchFailed (upstream 4xx passes through, otherwise 400)
- ContentUnextractable, ContentTooShort (400)

SERVER ERRORS:
- MissingCredential (500)
- GenerationTimeout (504)
- InvalidCredential (401), RateLimited (429) pass the service status through
- UpstreamUnavailable and server-class UpstreamError are bad gateway (502)
- InvalidUpstreamResponse, EmptyGenerationResult, Unknown (500)
"""

import pytest

from referent.errors import (
    ContentTooShort,
    ContentUnextractable,
    EmptyGenerationResult,
    GenerationTimeout,
    InvalidCredential,
    InvalidInput,
    InvalidUpstreamResponse,
    MissingCredential,
    RateLimited,
    ReferentError,
    Unknown,
    UpstreamError,
    UpstreamFetchFailed,
    UpstreamUnavailable,
)


class TestStatusCodes:
    """Each error kind maps to its status class."""

    @pytest.mark.parametrize('error, status', [
        (InvalidInput('URL is required'), 400),
        (ContentUnextractable(), 400),
        (ContentTooShort(50, 10), 400),
        (MissingCredential(), 500),
        (GenerationTimeout(120), 504),
        (InvalidCredential(), 401),
        (RateLimited(), 429),
        (UpstreamUnavailable(), 502),
        (InvalidUpstreamResponse(), 500),
        (EmptyGenerationResult(), 500),
        (Unknown('boom'), 500),
    ])
    def test_status(self, error, status):
        assert error.status_code == status

    def test_all_errors_are_referent_errors(self):
        for error in (InvalidInput('x'), GenerationTimeout(1), UpstreamError('x', 418), Unknown('x')):
            assert isinstance(error, ReferentError)


class TestUpstreamFetchFailed:
    """Fetch failures are client errors with the cause preserved."""

    def test_404_passes_through(self):
        error = UpstreamFetchFailed('Failed to fetch URL: HTTP error 404', 404)
        assert error.status_code == 404
        assert error.upstream_status == 404

    def test_upstream_server_error_is_client_error(self):
        error = UpstreamFetchFailed('Failed to fetch URL: HTTP error 500', 500)
        assert error.status_code == 400
        assert error.upstream_status == 500

    def test_transport_error(self):
        assert UpstreamFetchFailed('Connection refused').status_code == 400


class TestUpstreamError:
    """Generation service failures without a dedicated kind."""

    def test_server_class_is_bad_gateway(self):
        assert UpstreamError('x', 500).status_code == 502
        assert UpstreamError('x', 504).status_code == 502

    def test_client_class_passes_through(self):
        assert UpstreamError('x', 400).status_code == 400

    def test_unknown_status_is_bad_gateway(self):
        assert UpstreamError('x').status_code == 502


class TestResponseShape:
    """to_response() builds the caller-facing body."""

    def test_body_has_only_error(self):
        body, status = RateLimited().to_response()
        assert set(body) == {'error'}
        assert isinstance(body['error'], str) and body['error']
        assert status == 429

    def test_too_short_message_has_diagnostics(self):
        error = ContentTooShort(50, 12)
        assert '12' in error.message
        assert '50' in error.message

    def test_kind_is_class_name(self):
        assert GenerationTimeout(120).kind == 'GenerationTimeout'

    def test_unknown_from_exception(self):
        assert Unknown.from_exception(ValueError('bad value')).message == 'bad value'
        assert Unknown.from_exception(ValueError()).message == 'Unknown error'
