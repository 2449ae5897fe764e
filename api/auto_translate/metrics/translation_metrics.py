"""Prometheus metrics for the dictionary cache and translation providers."""

from prometheus_client import Counter, Histogram

dictionary_lookups_total = Counter(
    "auto_translate_dictionary_lookups_total",
    "Dictionary lookups by tier and result",
    ["tier", "result"],
)

dictionary_inserts_total = Counter(
    "auto_translate_dictionary_inserts_total",
    "Dictionary inserts by tier and outcome (added/updated/suppressed)",
    ["tier", "outcome"],
)

dictionary_flushes_total = Counter(
    "auto_translate_dictionary_flushes_total",
    "Dictionary files written to disk",
    ["tier"],
)

translation_requests_total = Counter(
    "auto_translate_translation_requests_total",
    "translate_text outcomes",
    ["outcome"],
)

provider_requests_total = Counter(
    "auto_translate_provider_requests_total",
    "Translation provider requests by provider and outcome",
    ["provider", "outcome"],
)

provider_request_duration_seconds = Histogram(
    "auto_translate_provider_request_duration_seconds",
    "Duration of translation provider requests",
    ["provider"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10, 30),
)
