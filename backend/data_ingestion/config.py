from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class IngestionConfig:
    """
    Configuration for loading the curated static dataset.
    """

    data_dir: Path = Path(__file__).resolve().parent.parent / "data"
    curated_filename: str = "curated_places.json"

    @property
    def curated_path(self) -> Path:
        return self.data_dir / self.curated_filename


DEFAULT_INGESTION_CONFIG = IngestionConfig()
