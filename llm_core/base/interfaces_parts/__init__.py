"""Interfaces (Protocols) split into single-class modules.

``llm_core.base.interfaces`` re-exports the stable API.
"""

from .stream import Stream
from .llm_client import LlmClient

__all__ = ["Stream", "LlmClient"]
