"""llm_core.config.defaults
========================

Small, stable default values used by the provider clients and the debugging
CLI. Everything here can be overridden through environment variables or the
external config file; no I/O happens at import time.
"""

from __future__ import annotations

# ---- CLI ----
# Provider selected by the debugging CLI when none is given.
CLI_DEFAULT_PROVIDER = "openai"

# ---- OpenAI-compatible Chat Completions ----
# The SDK targets api.openai.com (or its own OPENAI_BASE_URL lookup) when no
# base_url is configured.
OPENAI_DEFAULT_MODEL = "gpt-4o-mini"

# ---- Google GenAI (Gemini API backend) ----
GEMINI_DEFAULT_MODEL = "gemini-2.5-flash"

# ---- Local token counting ----
TOKENIZER_DEFAULT_ENCODING = "cl100k_base"

# GenAI ``max_output_tokens`` is an int32 on the wire.
GENAI_MAX_OUTPUT_TOKENS = 2**31 - 1


__all__ = [
    "CLI_DEFAULT_PROVIDER",
    "OPENAI_DEFAULT_MODEL",
    "GEMINI_DEFAULT_MODEL",
    "TOKENIZER_DEFAULT_ENCODING",
    "GENAI_MAX_OUTPUT_TOKENS",
]
