"""Application configuration."""
import os
from dataclasses import dataclass


@dataclass
class AppConfig:
    """Application configuration."""

    namespace_prefix: str = "hydra:"  # stripped from collection keys
    log_level: str = "WARNING"
    output_dir: str = "./output"

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load config from environment variables."""
        return cls(
            namespace_prefix=os.getenv("HYDRA_SCHEMA_PREFIX", "hydra:"),
            log_level=os.getenv("HYDRA_SCHEMA_LOG_LEVEL", "WARNING").upper(),
            output_dir=os.getenv("HYDRA_SCHEMA_OUTPUT_DIR", "./output"),
        )


# Global instance
app_config = AppConfig.from_env()
