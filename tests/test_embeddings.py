"""Tests for the CodeBERT embedding provider."""

import asyncio
from unittest.mock import MagicMock, patch

import pytest

from corelens.errors import ProviderError


# Mock the heavy dependencies (transformers) for fast tests
class TestCodeBERTEmbedderMocked:
    """Tests for CodeBERTEmbedder with mocked dependencies."""

    def test_embed_shape(self):
        """Embedding returns the 768-dim [CLS] vector as floats (mocked)."""
        with patch('corelens.providers.embeddings.AutoTokenizer') as mock_tok, \
             patch('corelens.providers.embeddings.AutoModel') as mock_model:

            import torch

            # Setup mock tokenizer
            mock_tok.from_pretrained.return_value = MagicMock()
            mock_tok.from_pretrained.return_value.return_value = {
                'input_ids': torch.zeros(1, 10, dtype=torch.long),
                'attention_mask': torch.ones(1, 10, dtype=torch.long),
            }

            # Setup mock model output (768-dim)
            mock_output = MagicMock()
            mock_output.last_hidden_state = torch.randn(1, 10, 768)
            mock_model.from_pretrained.return_value.return_value = mock_output

            from corelens.providers.embeddings import CodeBERTEmbedder

            embedder = CodeBERTEmbedder()
            embedding = embedder.embed("SELECT * FROM vbak.")

            assert len(embedding) == 768
            assert all(isinstance(x, float) for x in embedding)

            # [CLS] token is the first position
            expected = mock_output.last_hidden_state[0, 0, :].tolist()
            assert embedding == pytest.approx(expected)

    def test_model_loaded_once(self):
        """Test that the model loads only once across calls."""
        with patch('corelens.providers.embeddings.AutoTokenizer') as mock_tok, \
             patch('corelens.providers.embeddings.AutoModel') as mock_model:

            import torch

            mock_tok.from_pretrained.return_value.return_value = {
                'input_ids': torch.zeros(1, 4, dtype=torch.long),
            }
            mock_output = MagicMock()
            mock_output.last_hidden_state = torch.randn(1, 4, 768)
            mock_model.from_pretrained.return_value.return_value = mock_output

            from corelens.providers.embeddings import CodeBERTEmbedder

            embedder = CodeBERTEmbedder()
            embedder.embed("a")
            embedder.embed("b")

            mock_tok.from_pretrained.assert_called_once_with("microsoft/codebert-base")
            mock_model.from_pretrained.assert_called_once()
            mock_model.from_pretrained.return_value.eval.assert_called_once()

    def test_input_truncated(self):
        """Input is cut to max_chars before tokenizing."""
        with patch('corelens.providers.embeddings.AutoTokenizer') as mock_tok, \
             patch('corelens.providers.embeddings.AutoModel') as mock_model:

            import torch

            tokenizer = mock_tok.from_pretrained.return_value
            tokenizer.return_value = {'input_ids': torch.zeros(1, 4, dtype=torch.long)}
            mock_output = MagicMock()
            mock_output.last_hidden_state = torch.randn(1, 4, 768)
            mock_model.from_pretrained.return_value.return_value = mock_output

            from corelens.providers.embeddings import CodeBERTEmbedder

            CodeBERTEmbedder(max_chars=100).embed("x" * 5000)

            text = tokenizer.call_args.args[0]
            assert len(text) == 100

    def test_load_failure_is_provider_error(self):
        """A failing model load surfaces as a ProviderError."""
        with patch('corelens.providers.embeddings.AutoTokenizer') as mock_tok, \
             patch('corelens.providers.embeddings.AutoModel'):

            mock_tok.from_pretrained.side_effect = OSError("model not found")

            from corelens.providers.embeddings import CodeBERTEmbedder

            with pytest.raises(ProviderError, match="model not found") as excinfo:
                CodeBERTEmbedder().embed("x")
            assert excinfo.value.provider == "codebert"


class TestCodeBERTEmbedderIntegration:
    """Integration tests that require actual dependencies.

    These are marked slow and can be skipped with: pytest -m "not slow"
    """

    @pytest.mark.slow
    def test_real_embedding_generation(self):
        """Test actual embedding generation with CodeBERT."""
        from corelens.providers.embeddings import CodeBERTEmbedder

        embedding = CodeBERTEmbedder().embed("SELECT * FROM vbak INTO TABLE lt_vbak.")

        # Should be 768-dimensional
        assert len(embedding) == 768
        assert all(isinstance(x, float) for x in embedding)

    @pytest.mark.slow
    def test_identical_code_is_redundant(self):
        """Two copies of the same function come out as a redundancy pair."""
        from corelens.config import RedundancyConfig
        from corelens.corpus import CodeObject
        from corelens.providers.embeddings import CodeBERTEmbedder
        from corelens.redundancy import RedundancyDetector

        code = "FUNCTION z_get_order.\n  SELECT SINGLE * FROM vbak INTO ls_vbak.\nENDFUNCTION."
        objects = [
            CodeObject(id="1", name="Z_GET_ORDER", content=code, type="FUNCTION", module="SD", line_count=50),
            CodeObject(id="2", name="Z_GET_ORDER_COPY", content=code, type="FUNCTION", module="SD", line_count=50),
        ]
        detector = RedundancyDetector(CodeBERTEmbedder(), config=RedundancyConfig(batch_pause_seconds=0))

        [pair] = asyncio.run(detector.find_redundancies(objects))
        assert pair.similarity == pytest.approx(1.0, abs=1e-4)
        assert pair.savings.loc_reduction == 30
