"""
OpenAI-compatible provider package.

Exports:
- OpenAIClient: ``LlmClient`` over Chat Completions streaming
- OpenAIStream: the per-request stream adapter
"""

from .client import OpenAIClient
from .stream import OpenAIStream

__all__ = ["OpenAIClient", "OpenAIStream"]
