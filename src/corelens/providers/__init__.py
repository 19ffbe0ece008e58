"""Providers Module — Embedding and text-generation backends.

The engine only depends on the EmbeddingProvider / TextGenerator protocols.
The bundled implementations are:

    - CodeBERTEmbedder   (transformers + torch, 768-dim vectors)
    - LLMTextGenerator   (Ollama locally, Groq when LLM_PROVIDER=groq)

CodeBERTEmbedder is imported lazily so that torch is only loaded when
real embeddings are requested.
"""

from corelens.providers.base import EmbeddingProvider, TextGenerator
from corelens.providers.batching import run_in_batches
from corelens.providers.llm import LLMTextGenerator, llm_generate

__all__ = [
    "EmbeddingProvider",
    "TextGenerator",
    "LLMTextGenerator",
    "llm_generate",
    "run_in_batches",
]
