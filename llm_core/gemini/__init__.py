"""
Google GenAI (Gemini) provider package.

Exports:
- GenAIClient: ``LlmClient`` over ``generate_content_stream``
- GenAIStream: the per-request stream adapter
"""

from .client import GenAIClient
from .stream import GenAIStream

__all__ = ["GenAIClient", "GenAIStream"]
