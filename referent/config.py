"""
Configuration for the Referent article processor.

Secrets and deployment knobs come from the Cloud Function environment;
the pipeline thresholds are fixed.
"""

import os

# Environment
GEMINI_API_KEY = os.environ.get('GEMINI_API_KEY')  # Required for AI processing
GEMINI_MODEL = os.environ.get('GEMINI_MODEL', 'gemini-2.0-flash')
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

# Page fetching
USER_AGENT = 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
FETCH_TIMEOUT_SECONDS = 30

# Extraction
NOT_FOUND = 'Не найдено'
MIN_CANDIDATE_LENGTH = 100  # Content candidates must be longer than this

# Orchestration
MIN_CONTENT_LENGTH = 50
MAX_CONTENT_LENGTH = 100000
TRUNCATION_MARKER = '\n\n[... контент обрезан из-за большой длины ...]'
EXCERPT_LENGTH = 500
GENERATION_TIMEOUT_SECONDS = 120
