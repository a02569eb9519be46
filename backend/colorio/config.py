"""
Color.io Configuration
Manages environment variables and defaults for the palette service.
"""
import os
from typing import Dict, List

from dotenv import load_dotenv

load_dotenv()


class Config:
    """Configuration class for Color.io services."""

    # Extraction request limits
    DEFAULT_COLOR_COUNT: int = int(os.environ.get("COLORIO_DEFAULT_COLOR_COUNT", "6"))
    MIN_COLOR_COUNT: int = int(os.environ.get("COLORIO_MIN_COLOR_COUNT", "1"))
    MAX_COLOR_COUNT: int = int(os.environ.get("COLORIO_MAX_COLOR_COUNT", "12"))

    # Uploads
    MAX_FILE_MB: int = int(os.environ.get("COLORIO_MAX_FILE_MB", "10"))
    DEFAULT_QUALITY: str = os.environ.get("COLORIO_DEFAULT_QUALITY", "medium")

    # Longest edge (px) images are downsized to before sampling
    QUALITY_MAX_DIMENSION: Dict[str, int] = {
        "low": int(os.environ.get("COLORIO_QUALITY_LOW_PX", "100")),
        "medium": int(os.environ.get("COLORIO_QUALITY_MEDIUM_PX", "150")),
        "high": int(os.environ.get("COLORIO_QUALITY_HIGH_PX", "200")),
    }

    # Similar palette search
    SIMILARITY_THRESHOLD: float = float(os.environ.get("COLORIO_SIMILARITY_THRESHOLD", "30"))
    SIMILAR_PALETTES_LIMIT: int = int(os.environ.get("COLORIO_SIMILAR_PALETTES_LIMIT", "10"))

    # Logging
    LOG_LEVEL: str = os.environ.get("COLORIO_LOG_LEVEL", "INFO")
    LOG_JSON: bool = bool(int(os.environ.get("COLORIO_LOG_JSON", "0")))

    # CORS settings
    ALLOWED_ORIGINS: str = os.environ.get(
        "COLORIO_ALLOWED_ORIGINS", "http://localhost:3000,http://localhost:8081"
    )

    # Observability
    METRICS_ENABLED: bool = bool(int(os.environ.get("COLORIO_METRICS_ENABLED", "1")))

    SUPPORTED_MIME_TYPES = ["image/jpeg", "image/png", "image/webp"]

    @classmethod
    def max_dimension_for(cls, quality: str) -> int:
        """Longest edge for a quality preset."""
        return cls.QUALITY_MAX_DIMENSION[quality]

    @classmethod
    def allowed_origins(cls) -> List[str]:
        """CORS origins as a list."""
        return [origin.strip() for origin in cls.ALLOWED_ORIGINS.split(",") if origin.strip()]


# Global config instance
config = Config()
