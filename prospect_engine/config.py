"""Configuration management for prospect-engine."""

from dataclasses import dataclass, field
from pathlib import Path

from prospect_engine.exceptions import ConfigurationError

DATA_DIR = Path(__file__).parent / "catalog" / "data"


@dataclass
class ClassifierConfig:
    """Image classifier collaborator configuration."""

    timeout_seconds: float = 5.0
    min_confidence: float = 0.5
    default_label: str = "building"
    default_confidence: float = 0.75
    reject_label: str = "human"


@dataclass
class CatalogConfig:
    """Locations of the versioned knowledge-base assets."""

    prospects_path: Path = field(default_factory=lambda: DATA_DIR / "prospects.json")
    market_path: Path = field(default_factory=lambda: DATA_DIR / "market.json")


@dataclass
class ArchiveConfig:
    """Archival policy for saved analyses."""

    age_days: int = 90


@dataclass
class OutputConfig:
    """Output configuration."""

    json_output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False


@dataclass
class EngineConfig:
    """Main configuration for prospect-engine."""

    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    archive: ArchiveConfig = field(default_factory=ArchiveConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    prospect_count: int = 5
    seed: int | None = None
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.prospect_count < 1:
            raise ConfigurationError(f"prospect_count must be positive, got {self.prospect_count}")
        if self.classifier.timeout_seconds <= 0:
            raise ConfigurationError("classifier timeout must be positive")
        if self.archive.age_days < 0:
            raise ConfigurationError("archive age must not be negative")

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Create config from environment variables."""
        import os

        try:
            classifier = ClassifierConfig(
                timeout_seconds=float(os.getenv("PROSPECT_CLASSIFIER_TIMEOUT", "5.0")),
                min_confidence=float(os.getenv("PROSPECT_MIN_CONFIDENCE", "0.5")),
            )

            catalog = CatalogConfig()
            if os.getenv("PROSPECT_CATALOG_PATH"):
                catalog.prospects_path = Path(os.environ["PROSPECT_CATALOG_PATH"])
            if os.getenv("PROSPECT_MARKET_PATH"):
                catalog.market_path = Path(os.environ["PROSPECT_MARKET_PATH"])

            archive = ArchiveConfig(age_days=int(os.getenv("PROSPECT_ARCHIVE_DAYS", "90")))

            output = OutputConfig(
                json_output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
                pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
            )

            return cls(
                classifier=classifier,
                catalog=catalog,
                archive=archive,
                output=output,
                seed=int(os.getenv("SEED")) if os.getenv("SEED") else None,
                log_level=os.getenv("LOG_LEVEL", "INFO"),
            )
        except ValueError as exc:
            raise ConfigurationError(f"Invalid environment configuration: {exc}") from exc
