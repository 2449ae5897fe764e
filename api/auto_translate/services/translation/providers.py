"""Cloud translation providers.

Each provider exposes an async translate(text, from_lang, to_lang) that
returns the translated text or raises ProviderError. Requests are made
once: no retries and no fallback to another provider.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import httpx
from auto_translate.core.exceptions import MissingCredentialsError, ProviderError
from auto_translate.metrics.translation_metrics import (
    provider_request_duration_seconds,
    provider_requests_total,
)
from auto_translate.utils.logging import redact_secrets

logger = logging.getLogger(__name__)

GOOGLE = "google"
AZURE = "azure"
SUPPORTED_PROVIDERS = (GOOGLE, AZURE)


class TranslationProvider(ABC):
    """Base class for translation providers."""

    name: str = "none"

    @property
    def is_active(self) -> bool:
        return True

    @abstractmethod
    async def translate(
        self, text: str, from_lang: str, to_lang: str
    ) -> Optional[str]:
        """Translate text from from_lang to to_lang."""

    async def aclose(self) -> None:
        """Release network resources."""


class NoProvider(TranslationProvider):
    """Selected when no supported provider is configured.

    translate() resolves to None instead of failing.
    """

    name = "none"

    @property
    def is_active(self) -> bool:
        return False

    async def translate(
        self, text: str, from_lang: str, to_lang: str
    ) -> Optional[str]:
        return None


class HttpTranslationProvider(TranslationProvider):
    """Shared plumbing for providers reached over HTTPS."""

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize the provider.

        Args:
            api_key: Provider credential, passed through unvalidated.
            base_url: Provider endpoint.
            timeout: Request timeout in seconds.
            client: Optional pre-configured HTTP client (not closed by aclose()).
        """
        self.api_key = api_key or ""
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(self.timeout))
            self._owns_client = True
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        self._client = None

    def _redact(self, text: str) -> str:
        return redact_secrets(text, [self.api_key])

    @abstractmethod
    async def _request(self, text: str, from_lang: str, to_lang: str) -> str:
        """Perform one provider request and extract the translated text."""

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Best-effort extraction of the provider's error message."""
        try:
            body = response.json()
        except ValueError:
            return response.text[:200] or response.reason_phrase
        error = body.get("error") if isinstance(body, dict) else None
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        return response.reason_phrase

    async def translate(self, text: str, from_lang: str, to_lang: str) -> str:
        """Translate text with one provider request.

        Raises:
            MissingCredentialsError: If no API key is configured.
            ProviderError: On HTTP, network, timeout or response format errors.
        """
        if not self.api_key:
            provider_requests_total.labels(
                provider=self.name, outcome="missing_credentials"
            ).inc()
            raise MissingCredentialsError(self.name)

        start_time = time.perf_counter()
        try:
            result = await self._request(text, from_lang, to_lang)
        except ProviderError as e:
            provider_requests_total.labels(provider=self.name, outcome="error").inc()
            logger.warning(f"{self.name} translation {from_lang}->{to_lang} failed: {e}")
            raise
        except httpx.HTTPError as e:
            provider_requests_total.labels(provider=self.name, outcome="error").inc()
            detail = self._redact(f"{type(e).__name__}: {e}")
            logger.warning(
                f"{self.name} translation {from_lang}->{to_lang} failed: {detail}"
            )
            raise ProviderError(self.name, detail) from e
        finally:
            provider_request_duration_seconds.labels(provider=self.name).observe(
                max(0.0, time.perf_counter() - start_time)
            )

        provider_requests_total.labels(provider=self.name, outcome="success").inc()
        return result

    def _raise_for_status(self, response: httpx.Response) -> None:
        if response.is_success:
            return
        detail = self._redact(
            f"HTTP {response.status_code}: {self._error_message(response)}"
        )
        raise ProviderError(self.name, detail)


class GoogleTranslateProvider(HttpTranslationProvider):
    """Google Cloud Translation (v2 REST API)."""

    name = GOOGLE

    async def _request(self, text: str, from_lang: str, to_lang: str) -> str:
        client = await self._get_client()
        response = await client.post(
            self.base_url,
            params={"key": self.api_key},
            json={"q": text, "source": from_lang, "target": to_lang, "format": "text"},
        )
        self._raise_for_status(response)

        try:
            translations: List[Dict[str, Any]] = response.json()["data"]["translations"]
            return str(translations[0]["translatedText"])
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ProviderError(self.name, "Unexpected response format") from e


class AzureTranslatorProvider(HttpTranslationProvider):
    """Azure AI Translator (v3 REST API)."""

    name = AZURE
    API_VERSION = "3.0"

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
        region: str = "",
    ):
        super().__init__(api_key, base_url, timeout=timeout, client=client)
        self.region = region

    async def _request(self, text: str, from_lang: str, to_lang: str) -> str:
        client = await self._get_client()
        headers = {"Ocp-Apim-Subscription-Key": self.api_key}
        if self.region:
            headers["Ocp-Apim-Subscription-Region"] = self.region

        response = await client.post(
            f"{self.base_url}/translate",
            params={"api-version": self.API_VERSION, "from": from_lang, "to": to_lang},
            headers=headers,
            json=[{"Text": text}],
        )
        self._raise_for_status(response)

        try:
            return str(response.json()[0]["translations"][0]["text"])
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ProviderError(self.name, "Unexpected response format") from e


def create_provider(
    provider_name: Optional[str],
    google_key: Optional[str] = None,
    azure_key: Optional[str] = None,
    google_url: str = "https://translation.googleapis.com/language/translate/v2",
    azure_url: str = "https://api.cognitive.microsofttranslator.com",
    azure_region: str = "",
    timeout: float = 10.0,
    client: Optional[httpx.AsyncClient] = None,
) -> TranslationProvider:
    """Select the provider named in the translator configuration.

    Unknown or empty names select NoProvider.
    """
    name = (provider_name or "").strip().lower()

    if name == GOOGLE:
        return GoogleTranslateProvider(google_key, google_url, timeout=timeout, client=client)
    if name == AZURE:
        return AzureTranslatorProvider(
            azure_key, azure_url, timeout=timeout, client=client, region=azure_region
        )

    if name:
        logger.warning(
            f"Unsupported translator provider {provider_name!r}, "
            f"supported providers: {', '.join(SUPPORTED_PROVIDERS)}"
        )
    return NoProvider()
