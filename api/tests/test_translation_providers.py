"""Tests for the Google and Azure translation providers over a mocked transport."""

import json

import httpx
import pytest
from auto_translate.core.exceptions import MissingCredentialsError, ProviderError
from auto_translate.services.translation.providers import (
    AzureTranslatorProvider,
    GoogleTranslateProvider,
    NoProvider,
    create_provider,
)

GOOGLE_URL = "https://translation.example.test/language/translate/v2"
AZURE_URL = "https://translator.example.test"


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestGoogleTranslateProvider:
    @pytest.mark.asyncio
    async def test_translates(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = request.url
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200,
                json={"data": {"translations": [{"translatedText": "prijevod"}]}},
            )

        async with mock_client(handler) as client:
            provider = GoogleTranslateProvider("google-key", GOOGLE_URL, client=client)
            result = await provider.translate("translation", "en", "hr")

        assert result == "prijevod"
        assert seen["url"].params["key"] == "google-key"
        assert str(seen["url"]).startswith(GOOGLE_URL)
        assert seen["body"] == {
            "q": "translation",
            "source": "en",
            "target": "hr",
            "format": "text",
        }

    @pytest.mark.asyncio
    async def test_missing_key_fails_without_request(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        async with mock_client(handler) as client:
            provider = GoogleTranslateProvider(None, GOOGLE_URL, client=client)
            with pytest.raises(MissingCredentialsError) as exc_info:
                await provider.translate("translation", "en", "hr")

        assert exc_info.value.error_code == "MISSING_CREDENTIALS"
        assert exc_info.value.provider == "google"

    @pytest.mark.asyncio
    async def test_http_error_is_redacted(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                400,
                json={"error": {"message": "API key not valid: google-secret-key"}},
            )

        async with mock_client(handler) as client:
            provider = GoogleTranslateProvider(
                "google-secret-key", GOOGLE_URL, client=client
            )
            with pytest.raises(ProviderError) as exc_info:
                await provider.translate("translation", "en", "hr")

        message = str(exc_info.value)
        assert "HTTP 400" in message
        assert "API key not valid" in message
        assert "google-secret-key" not in message
        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_unexpected_payload(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"data": {}})

        async with mock_client(handler) as client:
            provider = GoogleTranslateProvider("google-key", GOOGLE_URL, client=client)
            with pytest.raises(ProviderError, match="Unexpected response format"):
                await provider.translate("translation", "en", "hr")

    @pytest.mark.asyncio
    async def test_timeout_becomes_provider_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        async with mock_client(handler) as client:
            provider = GoogleTranslateProvider("google-key", GOOGLE_URL, client=client)
            with pytest.raises(ProviderError, match="ReadTimeout"):
                await provider.translate("translation", "en", "hr")

    @pytest.mark.asyncio
    async def test_no_retry(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(503, text="unavailable")

        async with mock_client(handler) as client:
            provider = GoogleTranslateProvider("google-key", GOOGLE_URL, client=client)
            with pytest.raises(ProviderError):
                await provider.translate("translation", "en", "hr")

        assert len(calls) == 1


class TestAzureTranslatorProvider:
    @pytest.mark.asyncio
    async def test_translates(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["request"] = request
            return httpx.Response(
                200, json=[{"translations": [{"text": "prijevod", "to": "hr"}]}]
            )

        async with mock_client(handler) as client:
            provider = AzureTranslatorProvider(
                "azure-key", AZURE_URL, client=client, region="westeurope"
            )
            result = await provider.translate("translation", "en", "hr")

        request = seen["request"]
        assert result == "prijevod"
        assert request.url.path == "/translate"
        assert request.url.params["api-version"] == "3.0"
        assert request.url.params["from"] == "en"
        assert request.url.params["to"] == "hr"
        assert request.headers["Ocp-Apim-Subscription-Key"] == "azure-key"
        assert request.headers["Ocp-Apim-Subscription-Region"] == "westeurope"
        assert json.loads(request.content) == [{"Text": "translation"}]

    @pytest.mark.asyncio
    async def test_region_header_is_optional(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["headers"] = request.headers
            return httpx.Response(
                200, json=[{"translations": [{"text": "prijevod", "to": "hr"}]}]
            )

        async with mock_client(handler) as client:
            provider = AzureTranslatorProvider("azure-key", AZURE_URL, client=client)
            await provider.translate("translation", "en", "hr")

        assert "Ocp-Apim-Subscription-Region" not in seen["headers"]

    @pytest.mark.asyncio
    async def test_missing_key(self):
        provider = AzureTranslatorProvider("", AZURE_URL)

        with pytest.raises(MissingCredentialsError, match="azure"):
            await provider.translate("translation", "en", "hr")

    @pytest.mark.asyncio
    async def test_error_message_from_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                401,
                json={"error": {"code": 401000, "message": "Access denied"}},
            )

        async with mock_client(handler) as client:
            provider = AzureTranslatorProvider("azure-key", AZURE_URL, client=client)
            with pytest.raises(ProviderError, match="Access denied") as exc_info:
                await provider.translate("translation", "en", "hr")

        assert exc_info.value.provider == "azure"


class TestClientLifecycle:
    @pytest.mark.asyncio
    async def test_injected_client_is_not_closed(self):
        client = httpx.AsyncClient()
        provider = GoogleTranslateProvider("google-key", GOOGLE_URL, client=client)

        await provider.aclose()

        assert client.is_closed is False
        await client.aclose()

    @pytest.mark.asyncio
    async def test_owned_client_is_closed(self):
        provider = GoogleTranslateProvider("google-key", GOOGLE_URL)
        client = await provider._get_client()

        await provider.aclose()

        assert client.is_closed is True


class TestCreateProvider:
    def test_google(self):
        provider = create_provider("google", google_key="g", azure_key="a")

        assert isinstance(provider, GoogleTranslateProvider)
        assert provider.api_key == "g"

    def test_azure(self):
        provider = create_provider(
            "Azure", google_key="g", azure_key="a", azure_region="westeurope"
        )

        assert isinstance(provider, AzureTranslatorProvider)
        assert provider.api_key == "a"
        assert provider.region == "westeurope"

    @pytest.mark.parametrize("name", [None, "", "deepl"])
    def test_unknown_or_missing_selects_no_provider(self, name):
        provider = create_provider(name)

        assert isinstance(provider, NoProvider)
        assert provider.is_active is False

    @pytest.mark.asyncio
    async def test_no_provider_translates_to_none(self):
        assert await NoProvider().translate("translation", "en", "hr") is None
