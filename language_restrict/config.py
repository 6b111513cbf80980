"""
Selection service settings.

Extends the base settings with language restriction configuration.
"""

from common.config import BaseAppSettings


class Settings(BaseAppSettings):
    """Language restricted selection settings."""

    # ==========================================================================
    # API
    # ==========================================================================
    API_PREFIX: str = "/api/v1"
    APP_VERSION: str = "1.0.0"

    # ==========================================================================
    # Languages
    # ==========================================================================
    # "file" uses the built-in language list, "database" reads the languages collection
    LANGUAGE_SOURCE_MODE: str = "file"
    LOCALES_PATH: str = "locales"

    # ==========================================================================
    # Selection
    # ==========================================================================
    AUTOCOMPLETE_LIMIT: int = 10

    def validate_required(self) -> None:
        """
        Validate base settings plus selection-specific ones.

        Raises:
            ValueError: If required settings are missing
        """
        super().validate_required()

        if self.LANGUAGE_SOURCE_MODE not in ("file", "database"):
            raise ValueError(
                f"Configuration errors:\n- LANGUAGE_SOURCE_MODE must be 'file' or 'database', "
                f"got '{self.LANGUAGE_SOURCE_MODE}'"
            )


settings = Settings()
