from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Paths
    base_dir: Path = Path(__file__).resolve().parent.parent
    data_dir: Path = base_dir / "data"
    storage_path: Path = data_dir / "storage.json"
    sample_data_path: Path = Path(__file__).resolve().parent / "data" / "sample_applications.yaml"

    # Storage
    storage_key: str = "jobApplications"
    seed_sample_data: bool = False  # write the demo records when the key is empty

    # Server
    host: str = "127.0.0.1"
    port: int = 8765
    log_level: str = "INFO"

    model_config = {"env_prefix": "JOB_TRACKER_"}


settings = Settings()
