"""
Configuration settings for ogutils.
"""

from typing import Any

from pydantic import ValidationError as PydanticValidationError
from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ogutils.core.errors import ConfigurationError


class Settings(BaseSettings):
    """
    Library settings with environment variable support.

    Attributes:
        geographic_tolerance: Tolerance for lon/lat layers, in degrees
        projected_tolerance: Tolerance for projected layers, in meters
        cache_transforms: Whether TransformBuilder caches by (source, target)
        skip_invalid_geometries: Skip features whose WKT fails to parse
            during layer reprojection instead of aborting the layer
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="OGU_",
        extra="ignore",
    )

    # Tolerance policy
    geographic_tolerance: float = 1e-9
    projected_tolerance: float = 1e-4

    # Reprojection behaviour
    cache_transforms: bool = True
    skip_invalid_geometries: bool = True

    @model_validator(mode="after")
    def check_tolerances(self) -> "Settings":
        """Geographic tolerance must stay several orders below the projected one."""
        if self.geographic_tolerance <= 0 or self.projected_tolerance <= 0:
            raise ValueError("Tolerances must be positive")
        if self.geographic_tolerance * 1000 > self.projected_tolerance:
            raise ValueError(
                "geographic_tolerance must be at least 1000 times smaller "
                "than projected_tolerance"
            )
        return self


def load_settings(**overrides: Any) -> Settings:
    """
    Build settings from the environment plus explicit overrides.

    Raises:
        ConfigurationError: If a value is malformed or the tolerances are
            inconsistent
    """
    try:
        return Settings(**overrides)
    except PydanticValidationError as e:
        errors = e.errors()
        # Model-level checks have an empty location
        location = errors[0]["loc"] if errors else ()
        config_key = ".".join(str(part) for part in location) or None
        raise ConfigurationError(
            f"Invalid ogutils configuration: {e.error_count()} error(s)",
            config_key=config_key,
            details={"errors": [error["msg"] for error in errors]},
        ) from e


# Global settings instance
settings = load_settings()
