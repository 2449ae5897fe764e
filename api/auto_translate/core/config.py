import logging
import os
from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Folder created under the user's home directory when no explicit paths are set
AUTO_TRANSLATE_USER_HOME_FOLDER = ".auto-translate"

# Default file names
AUTO_TRANSLATE_CONFIG_FILE = ".auto-translate-config.json"
GLOBAL_DICTIONARY_FILE = ".global-dictionary.json"
PROJECT_DICTIONARY_FILE = ".project-dictionary.json"


class Settings(BaseSettings):
    # API settings
    DEBUG: bool = False
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Auto Translate"
    LOG_LEVEL: str = "INFO"

    # Location of the per-user folder, empty means ~/.auto-translate
    AUTO_TRANSLATE_HOME: str = ""

    # Translator file locations (empty directories fall back to defaults)
    GLOBAL_CONFIG_DIR: str = ""  # Defaults to AUTO_TRANSLATE_HOME
    CONFIG_FILE_NAME: str = AUTO_TRANSLATE_CONFIG_FILE
    GLOBAL_DICTIONARY_DIR: str = ""  # Defaults to GLOBAL_CONFIG_DIR
    GLOBAL_DICTIONARY_FILE_NAME: str = GLOBAL_DICTIONARY_FILE
    PROJECT_DIR: str = ""  # Empty disables the project dictionary
    PROJECT_DICTIONARY_FILE_NAME: str = PROJECT_DICTIONARY_FILE

    # Provider endpoints
    GOOGLE_TRANSLATE_URL: str = (
        "https://translation.googleapis.com/language/translate/v2"
    )
    AZURE_TRANSLATOR_URL: str = "https://api.cognitive.microsofttranslator.com"
    AZURE_TRANSLATOR_REGION: str = ""  # Required only for regional Azure resources
    PROVIDER_TIMEOUT_SECONDS: float = 10.0

    # Persist newly learned translations when the application stops
    SAVE_DICTIONARY_ON_SHUTDOWN: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @property
    def USER_HOME_PATH(self) -> str:
        """Per-user folder holding the default config and global dictionary"""
        if self.AUTO_TRANSLATE_HOME:
            return os.path.abspath(self.AUTO_TRANSLATE_HOME)
        return os.path.join(os.path.expanduser("~"), AUTO_TRANSLATE_USER_HOME_FOLDER)

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize LOG_LEVEL to an upper-case stdlib logging level name.

        Raises:
            ValueError: If the level is not known to the logging module
        """
        level = v.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"LOG_LEVEL must be a logging level name, got {v!r}")
        return level

    @field_validator("GOOGLE_TRANSLATE_URL", "AZURE_TRANSLATOR_URL")
    @classmethod
    def validate_provider_url(cls, v: str) -> str:
        """Ensure provider URLs have a scheme and no trailing slash."""
        v = v.strip()
        if not v:
            raise ValueError("Provider URL must be non-empty")
        if "://" not in v:
            v = "https://" + v
        return v.rstrip("/")

    @field_validator("PROVIDER_TIMEOUT_SECONDS")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"PROVIDER_TIMEOUT_SECONDS must be positive, got {v}")
        return v

    def ensure_user_home(self) -> str:
        """Create the per-user folder if it does not exist and return its path.

        Called lazily by the translator bootstrap to avoid import-time I/O.
        """
        home = Path(self.USER_HOME_PATH)
        home.mkdir(parents=True, exist_ok=True)
        return str(home)


# Thread-safe lazy initialization using lru_cache
@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached application settings instance with lazy initialization.

    Settings are only created once on first access, then cached for subsequent calls.

    Returns:
        Settings: Application settings object
    """
    return Settings()


def reset_settings() -> None:
    """Reset the cached settings instance.

    Useful for testing when you need to reload settings with different values.
    """
    get_settings.cache_clear()
