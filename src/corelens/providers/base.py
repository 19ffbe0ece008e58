"""Provider contracts the engine depends on.

Anything with a matching ``embed`` / ``generate`` method can be passed in;
the bundled CodeBERT and Ollama/Groq providers are just defaults.
"""

from typing import Protocol


class EmbeddingProvider(Protocol):
    def embed(self, text: str) -> list[float]:
        """Return a fixed-length vector for ``text``; raise ProviderError on failure."""
        ...


class TextGenerator(Protocol):
    def generate(self, prompt: str) -> str:
        """Return a short response for ``prompt``; raise ProviderError on failure."""
        ...
