"""
Provider-agnostic interfaces for the client layer.

Re-exports the Protocols implemented under ``llm_core.base.interfaces_parts``.
"""

from __future__ import annotations

from .interfaces_parts import LlmClient, Stream

__all__ = ["LlmClient", "Stream"]
