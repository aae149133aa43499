"""Application settings."""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    host: str = "127.0.0.1"
    port: int = 8788
    debug: bool = False
    archive_filename: str = "matched_files.zip"
    batch_size: int = 100
    default_language: str = "en"
    max_upload_size_mb: int = 500
    admin_username: str = "admin"
    admin_password: str = "admin"
    user_store_path: Optional[Path] = None

    model_config = {"env_prefix": "MATCHER_"}


settings = Settings()
