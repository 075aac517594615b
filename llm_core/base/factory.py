"""Client factory.

Resolves a provider name to its ``LlmClient`` implementation. Provider
packages are imported lazily with ``importlib`` so that importing
``llm_core`` does not pull in every SDK.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Tuple


class UnknownProviderError(LookupError):
    """Raised when a provider name cannot be resolved to a client.

    Covers unknown names, provider modules that fail to import and
    constructor argument mismatches.
    """


class ClientFactory:
    """Create chat clients by canonical provider name (``"openai"``, ``"gemini"``)."""

    _PROVIDERS: Dict[str, Tuple[str, str]] = {
        "openai": ("llm_core.openai.client", "OpenAIClient"),
        "gemini": ("llm_core.gemini.client", "GenAIClient"),
    }

    _ALIASES: Dict[str, str] = {
        "google": "gemini",
        "genai": "gemini",
    }

    @classmethod
    def canonical(cls, provider: str) -> str:
        name = (provider or "").lower().strip()
        return cls._ALIASES.get(name, name)

    @classmethod
    def create(cls, provider: str, **kwargs: Any) -> Any:
        """Instantiate the client for ``provider`` with ``kwargs``.

        Raises:
            UnknownProviderError: unknown provider, import failure or invalid
                constructor arguments.
        """
        name = cls.canonical(provider)
        entry = cls._PROVIDERS.get(name)
        if entry is None:
            raise UnknownProviderError(f"Unknown provider '{provider}'")
        module_path, class_name = entry
        try:
            mod = import_module(module_path)
        except ImportError as exc:
            raise UnknownProviderError(
                f"Failed to import module '{module_path}' for provider '{provider}': {exc}"
            ) from exc
        klass = getattr(mod, class_name)
        try:
            return klass(**kwargs)
        except TypeError as exc:
            raise UnknownProviderError(
                f"Invalid arguments for '{provider}' client constructor: {exc}"
            ) from exc

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        return tuple(cls._PROVIDERS)


def create_client(provider: str, **kwargs: Any) -> Any:
    """Shortcut for :meth:`ClientFactory.create`."""
    return ClientFactory.create(provider, **kwargs)


__all__ = ["ClientFactory", "UnknownProviderError", "create_client"]
