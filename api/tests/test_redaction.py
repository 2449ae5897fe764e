"""Tests for credential redaction in log and error text."""

from auto_translate.utils.logging import redact_secrets


class TestRedactSecrets:
    """Test masking of provider credentials."""

    def test_redacts_known_secret(self):
        """Configured keys are replaced wherever they appear."""
        result = redact_secrets("Invalid key: my-azure-key", ["my-azure-key"])
        assert "my-azure-key" not in result
        assert "[KEY]" in result

    def test_ignores_empty_secrets(self):
        text = "nothing to hide"
        assert redact_secrets(text, [None, ""]) == text

    def test_redacts_query_parameter(self):
        """Should redact key=... in echoed URLs."""
        result = redact_secrets("POST https://example.test/v2?key=abc123&q=hi")
        assert "abc123" not in result
        assert "?key=[KEY]&q=hi" in result

    def test_redacts_subscription_header(self):
        result = redact_secrets('{"Ocp-Apim-Subscription-Key": "short-key"}')
        assert "short-key" not in result

    def test_redacts_long_tokens(self):
        """Long alphanumeric strings look like API keys."""
        token = "A" * 40
        result = redact_secrets(f"token {token} rejected")
        assert token not in result
        assert result == "token [KEY] rejected"

    def test_leaves_plain_text_alone(self):
        text = "HTTP 400: Invalid 'to' parameter"
        assert redact_secrets(text) == text
