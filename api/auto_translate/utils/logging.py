import re
from typing import Iterable, Optional


def redact_secrets(text: str, secrets: Optional[Iterable[Optional[str]]] = None) -> str:
    """
    Redact provider credentials from text before it is logged or returned.

    Known secret values are replaced verbatim, then anything that still looks
    like an API key is masked:
    - Configured API keys (exact match)
    - key=... query parameters
    - Subscription key headers echoed back by a provider
    - Long alphanumeric strings
    """
    for secret in secrets or ():
        if secret:
            text = text.replace(secret, "[KEY]")

    # Query string credentials, e.g. "...?key=abc123"
    text = re.sub(r"([?&]key=)[^&\s\"']+", r"\1[KEY]", text, flags=re.IGNORECASE)

    # Azure subscription key headers
    text = re.sub(
        r"(Ocp-Apim-Subscription-Key[\"']?\s*[:=]\s*[\"']?)[^\s\"',}]+",
        r"\1[KEY]",
        text,
        flags=re.IGNORECASE,
    )

    # Alphanumeric strings that look like API keys
    text = re.sub(r"\b[a-zA-Z0-9_-]{32,}\b", "[KEY]", text)

    return text
