"""Custom exception hierarchy for prospect-engine."""


class ProspectEngineError(Exception):
    """Base exception for all prospect-engine errors."""


class ValidationError(ProspectEngineError):
    """Raised when property attributes are malformed or out of range."""


class ClassificationUnavailableError(ProspectEngineError):
    """Raised when the image classifier times out or fails."""


class ConfigurationError(ProspectEngineError):
    """Raised when configuration is invalid or missing."""


class CatalogError(ConfigurationError):
    """Raised when a catalog or market data asset cannot be loaded."""


class PersistenceError(ProspectEngineError):
    """Raised when saving or loading an analysis fails."""


class AnalysisNotFoundError(PersistenceError):
    """Raised when a referenced analysis does not exist."""


class SinkError(ProspectEngineError):
    """Raised when a sink operation fails."""
