"""
Shared pytest fixtures for Referent tests.
"""

import pytest
import sys
import importlib.util
from pathlib import Path
from types import SimpleNamespace

from google.api_core import exceptions as google_exceptions

from referent.extractor import ArticleDocument

# Project root for finding Cloud Function modules
PROJECT_ROOT = Path(__file__).parent.parent


def _load_module_from_path(module_name: str, file_path: Path):
    """Load a module from a specific file path."""
    spec = importlib.util.spec_from_file_location(module_name, file_path)
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    return module


# Cloud Function directories are not importable package names
_article_processor_module = _load_module_from_path(
    'article_processor_main',
    PROJECT_ROOT / 'article-processor' / 'main.py'
)


# ============================================================================
# Generation service fakes
# ============================================================================

def make_gemini_response(text):
    """Minimal stand-in for a GenerateContentResponse with one candidate."""
    part = SimpleNamespace(text=text)
    candidate = SimpleNamespace(content=SimpleNamespace(parts=[part]))
    return SimpleNamespace(candidates=[candidate])


class FakeGenerationClient:
    """
    Records prompts and simulates service latency against the deadline.

    A latency above the timeout the caller passes raises DeadlineExceeded,
    the way the Gemini transport does.
    """

    def __init__(self, text='Сгенерированный текст', latency=0, error=None, response=None):
        self.text = text
        self.latency = latency
        self.error = error
        self.response = response
        self.calls = []
        self.api_key = None

    def __call__(self, api_key):
        # Acts as its own client_factory
        self.api_key = api_key
        return self

    def generate(self, prompt, timeout):
        self.calls.append({'prompt': prompt, 'timeout': timeout})
        if self.latency > timeout:
            raise google_exceptions.DeadlineExceeded('Deadline Exceeded')
        if self.error is not None:
            raise self.error
        if self.response is not None:
            return self.response
        return make_gemini_response(self.text)


@pytest.fixture
def gemini_response():
    """Factory for fake GenerateContentResponse objects."""
    return make_gemini_response


@pytest.fixture
def fake_client():
    """Factory for FakeGenerationClient instances."""
    return FakeGenerationClient


@pytest.fixture
def article_content():
    """Article body comfortably above every length gate."""
    return (
        'Исследователи представили новый метод обработки текстов, который позволяет '
        'быстро выделять главные идеи из длинных статей и сохранять важный контекст.'
    )


@pytest.fixture
def make_fetch():
    """Factory for fetch collaborators returning a fixed ArticleDocument."""
    def _make(content, title='Новая статья', date='2024-12-15'):
        calls = []

        def fetch(url):
            calls.append(url)
            return ArticleDocument(title=title, date=date, content=content)

        fetch.calls = calls
        return fetch
    return _make


# ============================================================================
# HTML fixtures
# ============================================================================

@pytest.fixture
def sample_article_html():
    """A typical news article page with navigation and ads."""
    return """
    <!DOCTYPE html>
    <html>
    <head>
        <title>Python 3.13 Released | Example News</title>
        <meta property="og:title" content="Python 3.13 Released (og)">
        <meta property="article:published_time" content="2024-10-07T10:00:00Z">
    </head>
    <body>
        <header><a href="/">Example News</a></header>
        <nav><a href="/world">World</a> <a href="/tech">Tech</a></nav>
        <article>
            <h1>Python 3.13 Released</h1>
            <time datetime="2024-10-07">October 7, 2024</time>
            <p>The Python core team has announced the release of Python 3.13,
            bringing an experimental free-threaded build and a new interactive shell.</p>
            <p>The release also ships an experimental JIT compiler and improved error messages.</p>
            <script>trackPageView();</script>
            <div class="advertisement">Buy our course today!</div>
        </article>
        <footer>Copyright Example News</footer>
    </body>
    </html>
    """


@pytest.fixture
def mock_flask_request():
    """Factory for creating mock Flask request objects."""
    class MockRequest:
        def __init__(self, json_data=None, method='POST'):
            self._json = json_data
            self.method = method
            self.data = b''

        def get_json(self, force=False, silent=False):
            return self._json

    return MockRequest


# ============================================================================
# Cloud Function entry points
# ============================================================================

@pytest.fixture
def article_processor():
    """The loaded article-processor main module."""
    return _article_processor_module


@pytest.fixture
def parse_article():
    return _article_processor_module.parse_article


@pytest.fixture
def process_article():
    return _article_processor_module.process_article


@pytest.fixture
def translate_article():
    return _article_processor_module.translate_article
