"""LLM Provider Factory — Toggle between Groq (cloud) and Ollama (local).

Usage:
    from corelens.providers.llm import LLMTextGenerator

    generator = LLMTextGenerator()
    text = generator.generate("How should these two reports be merged?")

Set LLM_PROVIDER=groq and ensure GROQ_API_KEY (or apikey.env) is present.
Default is "local" (Ollama).
"""

import os
import re
from pathlib import Path

from corelens.errors import ProviderError

# ---------------------------------------------------------------------------
# Provider backends
# ---------------------------------------------------------------------------

def _call_ollama(model: str, prompt: str, temperature: float, max_tokens: int) -> str:
    """Call the local Ollama server."""
    import ollama

    response = ollama.generate(
        model=model,
        prompt=prompt,
        options={"temperature": temperature, "num_predict": max_tokens},
    )
    return response["response"].strip()


def _call_groq(model: str, prompt: str, temperature: float, max_tokens: int) -> str:
    """Call the Groq cloud API."""
    from groq import Groq

    api_key = os.environ.get("GROQ_API_KEY") or _load_api_key()

    client = Groq(api_key=api_key)
    response = client.chat.completions.create(
        model=model,
        messages=[{"role": "user", "content": prompt}],
        temperature=temperature,
        max_tokens=max_tokens,
    )
    text = response.choices[0].message.content or ""

    # Qwen3 wraps its chain of thought in <think> tags
    return re.sub(r"<think>.*?</think>", "", text, flags=re.DOTALL).strip()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

# Local Ollama names → Groq-hosted equivalents
GROQ_MODEL_MAP = {
    "qwen2.5-coder:7b": "qwen/qwen3-32b",
    "deepseek-coder:6.7b": "qwen/qwen3-32b",
    "phi4-mini": "llama-3.3-70b-versatile",
}

DEFAULT_MODEL = "qwen2.5-coder:7b"


def _load_api_key() -> str:
    """Read the Groq API key from apikey.env in the working directory or project root."""
    search_dirs = [
        Path.cwd(),
        Path(__file__).resolve().parent.parent.parent.parent,  # project root
    ]

    for d in search_dirs:
        env_file = d / "apikey.env"
        if env_file.exists():
            for line in env_file.read_text().splitlines():
                line = line.strip()
                if line and not line.startswith("#"):
                    # Accepts: groq="gsk_..." or GROQ_API_KEY=gsk_...
                    _, _, value = line.partition("=")
                    value = value.strip().strip("\"'")
                    if value.startswith("gsk_"):
                        return value

    raise ProviderError(
        "groq",
        "API key not found. Set GROQ_API_KEY or create apikey.env with: groq=\"gsk_...\"",
    )


def _resolve_model(model: str, provider: str) -> str:
    if provider == "groq":
        return GROQ_MODEL_MAP.get(model, model)
    return model


def llm_generate(
    prompt: str,
    model: str = DEFAULT_MODEL,
    temperature: float = 0.3,
    max_tokens: int = 150,
) -> str:
    """
    Generate text from an LLM, using whichever backend is configured.

    The backend is chosen by the LLM_PROVIDER env var:
        "groq"  → Groq cloud API (fast, needs API key)
        "local" → Ollama local server (private, slower)

    Args:
        prompt:      The prompt to send
        model:       Model name (auto-mapped for Groq)
        temperature: Sampling temperature (0.0 = deterministic)
        max_tokens:  Upper bound on response length

    Returns:
        The model's text response, stripped of whitespace.

    Raises:
        ProviderError: If the backend call fails or returns nothing
    """
    provider = os.environ.get("LLM_PROVIDER", "local").lower()
    resolved_model = _resolve_model(model, provider)

    try:
        if provider == "groq":
            text = _call_groq(resolved_model, prompt, temperature, max_tokens)
        else:
            text = _call_ollama(resolved_model, prompt, temperature, max_tokens)
    except ProviderError:
        raise
    except Exception as e:
        raise ProviderError(provider, str(e)) from e

    if not text:
        raise ProviderError(provider, "empty response")
    return text


class LLMTextGenerator:
    """TextGenerator backed by ``llm_generate``."""

    def __init__(self, model: str = DEFAULT_MODEL, temperature: float = 0.3, max_tokens: int = 150):
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    def generate(self, prompt: str) -> str:
        return llm_generate(
            prompt=prompt,
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
