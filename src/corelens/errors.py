"""Error taxonomy for the CoreLens analysis engine.

Recoverable failures (text generation) never reach the caller; structural
failures either degrade to an empty result or propagate as one of these.
"""


class CoreLensError(Exception):
    """Base class for all engine errors."""


class ValidationError(CoreLensError):
    """Input or configuration failed validation."""


class ConfigError(ValidationError):
    """A configuration value could not be parsed or is out of range."""


class ProviderError(CoreLensError):
    """An embedding or text-generation provider call failed."""

    def __init__(self, provider: str, message: str):
        self.provider = provider
        super().__init__(f"{provider}: {message}")


class ComputationError(CoreLensError):
    """A numeric computation received structurally invalid input."""


class AnalysisCancelled(CoreLensError):
    """The caller cancelled a running analysis between provider batches."""
