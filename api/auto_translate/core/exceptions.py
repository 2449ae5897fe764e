"""
Custom exception hierarchy for the auto-translate service.

This module defines a standardized exception hierarchy for consistent
error handling across the translator and its HTTP surface.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class BaseAppException(HTTPException):
    """Base exception for all application errors."""

    def __init__(
        self,
        detail: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        headers: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code or self.__class__.__name__

    def __str__(self) -> str:
        return str(self.detail)


# Translation Exceptions


class AutomaticTranslationDisabledError(BaseAppException):
    """Raised on a dictionary miss when automatic translation is turned off."""

    def __init__(self, detail: str = "Automatic translation is not enabled"):
        super().__init__(
            detail,
            status.HTTP_409_CONFLICT,
            error_code="AUTOMATIC_TRANSLATION_DISABLED",
        )


class ProviderError(BaseAppException):
    """Raised when a translation provider request fails."""

    def __init__(
        self,
        provider: str,
        detail: str,
        status_code: int = status.HTTP_502_BAD_GATEWAY,
        error_code: str = "PROVIDER_ERROR",
    ):
        self.provider = provider
        super().__init__(
            f"{provider} translation failed: {detail}",
            status_code,
            error_code=error_code,
        )


class MissingCredentialsError(ProviderError):
    """Raised when the active provider has no API key configured."""

    def __init__(self, provider: str):
        super().__init__(
            provider,
            f"Please provide {provider} credentials",
            status.HTTP_424_FAILED_DEPENDENCY,
            error_code="MISSING_CREDENTIALS",
        )


# Dictionary Exceptions


class DictionaryWriteError(BaseAppException):
    """Raised when dictionary files cannot be saved. Pending entries are kept."""

    def __init__(self, detail: str = "Dictionary could not be saved"):
        super().__init__(
            detail,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code="DICTIONARY_WRITE_FAILED",
        )
