"""Referent: article extraction and AI transformations."""

from .extractor import (
    ArticleDocument,
    extract,
)

from .prompts import (
    ActionKind,
    PromptSpec,
    build_prompt,
)

from .orchestrator import (
    GenerationResult,
    TransformationRequest,
    TranslationResult,
    process,
    translate,
)

from .errors import ReferentError

__all__ = [
    # Extraction
    'ArticleDocument',
    'extract',
    # Prompts
    'ActionKind',
    'PromptSpec',
    'build_prompt',
    # Orchestration
    'GenerationResult',
    'TransformationRequest',
    'TranslationResult',
    'process',
    'translate',
    # Errors
    'ReferentError',
]
