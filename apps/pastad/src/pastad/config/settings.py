from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_host: str = "127.0.0.1"
    app_port: int = 8199
    app_data_dir: str = "./data"
    log_level: str = "INFO"

    # Base URL used when building links for new pastas, e.g. "https://paste.example.org".
    public_url: str = ""

    id_length: int = 8
    token_length: int = 20
    default_expire_seconds: int = 0
    max_upload_bytes: int = 32 * 1024 * 1024

    @property
    def data_dir(self) -> Path:
        return Path(self.app_data_dir).resolve()

    @property
    def pasta_path(self) -> Path:
        return self.data_dir / "pastas"

    def ensure_dirs(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.pasta_path.mkdir(parents=True, exist_ok=True)
