from pathlib import Path
from typing import Optional, List
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="ASSETGRAPH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # CSV Column Configuration
    child_column: str = Field(default="assetId")
    parent_column: str = Field(default="parentAssetId")
    child_type_column: str = Field(default="assetType")
    parent_type_column: str = Field(default="parentAssetType")

    # Graph Configuration
    unknown_type: str = Field(default="Unknown")
    label_max_length: int = Field(default=10)

    # API Configuration
    dataset_path: Optional[str] = Field(default=None)
    api_host: str = Field(default="localhost")
    api_port: int = Field(default=8000)

    # Logging Configuration
    log_level: str = Field(default="INFO")
    log_file: Optional[str] = Field(default=None)

    @property
    def required_columns(self) -> List[str]:
        """Get the CSV columns every source must carry, in record field order."""
        return [
            self.child_column,
            self.parent_column,
            self.child_type_column,
            self.parent_type_column,
        ]

    @property
    def log_dir(self) -> Optional[Path]:
        """Get log directory path."""
        if not self.log_file:
            return None
        return Path(self.log_file).parent

    def ensure_directories(self):
        """Ensure necessary directories exist."""
        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)


settings = Settings()
settings.ensure_directories()
