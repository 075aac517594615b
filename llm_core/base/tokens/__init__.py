"""Token counting and usage helpers."""

from .counter import CountMode, TokenCounter, rune_count, MESSAGE_OVERHEAD_TOKENS
from .async_counter import AsyncTokenCounter, default_async_counter, DEFAULT_ENCODING
from .usage import extract_openai_usage, extract_genai_usage

__all__ = [
    "CountMode",
    "TokenCounter",
    "rune_count",
    "MESSAGE_OVERHEAD_TOKENS",
    "AsyncTokenCounter",
    "default_async_counter",
    "DEFAULT_ENCODING",
    "extract_openai_usage",
    "extract_genai_usage",
]
