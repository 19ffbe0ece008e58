"""Code embeddings using CodeBERT."""

import logging
import threading
from typing import Optional

import torch
from transformers import AutoModel, AutoTokenizer

from corelens.errors import ProviderError

logger = logging.getLogger(__name__)


class CodeBERTEmbedder:
    """Generate code embeddings with CodeBERT.

    Satisfies the EmbeddingProvider protocol.
    """

    # CodeBERT produces 768-dimensional embeddings
    EMBEDDING_DIM = 768
    MODEL_NAME = "microsoft/codebert-base"

    def __init__(self, model_name: str = MODEL_NAME, max_chars: int = 8000):
        """
        Initialize the embedder.

        Args:
            model_name: Hugging Face model to load
            max_chars: Input text is cut to this many characters before tokenizing
        """
        self.model_name = model_name
        self.max_chars = max_chars

        # Lazy loading - only load when needed
        self._tokenizer: Optional[AutoTokenizer] = None
        self._model: Optional[AutoModel] = None
        self._load_lock = threading.Lock()

    def _ensure_model_loaded(self) -> None:
        """Load CodeBERT model if not already loaded."""
        with self._load_lock:
            if self._tokenizer is None:
                logger.info("Loading %s...", self.model_name)
                self._tokenizer = AutoTokenizer.from_pretrained(self.model_name)
                self._model = AutoModel.from_pretrained(self.model_name)
                self._model.eval()  # Set to evaluation mode
                logger.info("Model loaded.")

    def embed(self, text: str) -> list[float]:
        """
        Generate an embedding for a code snippet.

        Args:
            text: Source code string (truncated to max_chars)

        Returns:
            768-dimensional embedding as a list of floats

        Raises:
            ProviderError: If the model cannot be loaded or inference fails
        """
        try:
            self._ensure_model_loaded()

            # Tokenize (truncate to 512 tokens max)
            tokens = self._tokenizer(
                text[: self.max_chars],
                return_tensors="pt",
                truncation=True,
                max_length=512,
                padding=True,
            )

            # Generate embedding (no gradient needed)
            with torch.no_grad():
                outputs = self._model(**tokens)
                # Use [CLS] token embedding (first token)
                embedding = outputs.last_hidden_state[:, 0, :].squeeze().numpy()
        except Exception as e:
            raise ProviderError("codebert", str(e)) from e

        return embedding.tolist()
