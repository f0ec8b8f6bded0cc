from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., APP_NAME, DEBUG,
    DATA_DIR, DB_FILENAME, API_PREFIX, CORS_ALLOW_ORIGINS, PORT).
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Basic app metadata
    app_name: str = "SpendWise API"
    debug: bool = False
    version: str = "0.1.0"

    # Data & persistence
    data_dir: Path = Path("data")
    db_filename: str = "spendwise.sqlite3"
    db_path: Optional[Path] = None  # derived if not provided

    # HTTP surface
    api_prefix: str = "/api"
    cors_allow_origins: List[str] = ["*"]
    log_requests: bool = True

    # Server bootstrap (uvicorn)
    host: str = "127.0.0.1"
    port: int = 5000

    def init_post_load(self) -> None:
        """Finalize derived fields and ensure directories exist."""
        if self.db_path is None:
            self.db_path = self.data_dir / self.db_filename
        # Ensure persistence directory exists
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        prefix = self.api_prefix.strip().strip("/")
        self.api_prefix = f"/{prefix}" if prefix else ""


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.init_post_load()
    return settings
