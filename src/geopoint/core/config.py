"""
Configuration settings for the geopoint package.
"""

from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Package settings with environment variable support.

    Attributes:
        default_nickname: Nickname of the projection registered on bootstrap
        default_definition: PROJ definition of that projection
        default_srid: SRID of that projection
        fallback_datum: Datum used for UTM synthesis when no default exists
        distance_method: Great-circle method used by ``Geometry.distance``
        distance_unit: Unit used when ``Geometry.distance`` gets none
        distance_nickname: Geographic projection distances are measured in
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="GEOPOINT_",
        extra="ignore",
    )

    # Projection bootstrap
    default_nickname: str = "wgs84"
    default_definition: str = "+proj=latlong +datum=WGS84 +ellps=WGS84"
    default_srid: Optional[int] = Field(default=4326, gt=0)
    fallback_datum: str = "wgs84"

    # Distances
    distance_method: Literal["haversine", "geodesic"] = "haversine"
    distance_unit: str = "kilometer"
    distance_nickname: str = "wgs84"

    # Logging
    log_level: Optional[str] = None
    json_logs: bool = False

    # Environment
    environment: Literal["development", "staging", "production"] = "development"

    @property
    def default_log_level(self) -> str:
        """Log level used when none is configured."""
        if self.log_level:
            return self.log_level.upper()
        return "DEBUG" if self.environment == "development" else "INFO"


# Global settings instance
settings = Settings()
