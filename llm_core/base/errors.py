"""Unified provider error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``llm_core.base.errors_parts`` to keep a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.translation_error import TranslationError
from .errors_parts.unsupported_model_error import UnsupportedModelError
from .errors_parts.classification import classify_exception, wrap_exception

__all__ = [
    "ErrorCode",
    "ProviderError",
    "TranslationError",
    "UnsupportedModelError",
    "classify_exception",
    "wrap_exception",
]
