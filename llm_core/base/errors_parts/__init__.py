"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `llm_core.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import ProviderError
from .translation_error import TranslationError
from .unsupported_model_error import UnsupportedModelError
from .classification import classify_exception, wrap_exception

__all__ = [
    "ErrorCode",
    "ProviderError",
    "TranslationError",
    "UnsupportedModelError",
    "classify_exception",
    "wrap_exception",
]
