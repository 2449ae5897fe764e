"""Translation Service for dictionary-first translation.

Orchestrates dictionary lookup, provider dispatch and caching of provider
results. Recorded translations are preferred over paid provider calls.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from auto_translate.core.exceptions import AutomaticTranslationDisabledError
from auto_translate.metrics.translation_metrics import translation_requests_total
from auto_translate.services.translation.providers import NoProvider, TranslationProvider
from auto_translate.services.translation.resolver import TwoTierResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TranslatorSnapshot:
    """Read-only view of a translator's configuration and dictionaries."""

    conf_file: str
    global_dict_file: str
    use_project_dict: bool
    project_dict_file: str
    translator_provider: Optional[str]
    automatic_translation: bool
    global_dict: Dict[str, Dict[str, str]] = field(default_factory=dict)
    project_dict: Dict[str, Dict[str, str]] = field(default_factory=dict)

    def to_dict(self, include_dictionaries: bool = True) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "conf_file": self.conf_file,
            "global_dict_file": self.global_dict_file,
            "use_project_dict": self.use_project_dict,
            "project_dict_file": self.project_dict_file,
            "translator_provider": self.translator_provider,
            "automatic_translation": self.automatic_translation,
        }
        if include_dictionaries:
            data["global_dict"] = self.global_dict
            data["project_dict"] = self.project_dict
        return data


class TranslationService:
    """Main orchestrator for dictionary-first translation.

    Flow:
    1. Look the key up in the project dictionary, then the global dictionary
    2. On a miss, translate with the active provider if automatic translation is on
    3. Record the provider result in the dictionaries
    4. Persist new entries only when save_dictionary() is called

    Features:
    - Project dictionary precedence over the global dictionary
    - Provider error strings are never cached
    - Statistics tracking
    """

    def __init__(
        self,
        resolver: TwoTierResolver,
        provider: Optional[TranslationProvider] = None,
        automatic_translation: bool = False,
        conf_file: Optional[Path] = None,
        translator_provider: Optional[str] = None,
    ):
        """Initialize the TranslationService.

        Args:
            resolver: Two-tier dictionary resolver.
            provider: Active translation provider (NoProvider if None).
            automatic_translation: Whether dictionary misses may call the provider.
            conf_file: Translator configuration file, reported by get_config().
            translator_provider: Provider name as configured, reported by
                get_config() even when it names no supported provider.
        """
        self.resolver = resolver
        self.provider = provider or NoProvider()
        self.automatic_translation = automatic_translation
        self.conf_file = conf_file
        if translator_provider is None and self.provider.is_active:
            translator_provider = self.provider.name
        self.translator_provider = translator_provider

        # Statistics
        self.stats = {
            "requests": 0,
            "cache_hits": 0,
            "cache_misses": 0,
            "translations_performed": 0,
            "translation_errors": 0,
            "disabled_misses": 0,
        }

    def is_automatic_translation(self) -> bool:
        return self.automatic_translation

    def find_in_dictionary(
        self, text: str, from_lang: str, to_lang: str
    ) -> Optional[str]:
        """Find text in the local dictionaries (project first, then global)."""
        return self.resolver.resolve(from_lang, to_lang, text)

    def add_to_dictionary(
        self, text: str, translation: str, from_lang: str, to_lang: str
    ) -> None:
        """Add a translation to the global and, if used, the project dictionary."""
        self.resolver.record(from_lang, to_lang, text, translation)

    async def translate_text(
        self,
        key: str,
        text_to_translate: str,
        from_lang: str,
        to_lang: str,
    ) -> Optional[str]:
        """Translate text from one language to another.

        Args:
            key: Dictionary lookup key. Usually equal to text_to_translate,
                but may be any expression identifying the text.
            text_to_translate: Text sent to the provider on a dictionary miss.
            from_lang: Source language code.
            to_lang: Target language code.

        Returns:
            The recorded or freshly translated text. None when automatic
            translation is enabled but no provider is configured.

        Raises:
            AutomaticTranslationDisabledError: On a miss with automatic translation off.
            ProviderError: If the provider call fails.
        """
        self.stats["requests"] += 1

        cached = self.find_in_dictionary(key, from_lang, to_lang)
        if cached:
            self.stats["cache_hits"] += 1
            translation_requests_total.labels(outcome="hit").inc()
            logger.debug(f"Dictionary hit for {from_lang}->{to_lang}")
            return cached

        self.stats["cache_misses"] += 1

        if not self.is_automatic_translation():
            self.stats["disabled_misses"] += 1
            translation_requests_total.labels(outcome="disabled").inc()
            raise AutomaticTranslationDisabledError()

        if not self.provider.is_active:
            translation_requests_total.labels(outcome="no_provider").inc()
            logger.warning(
                "Automatic translation is enabled but no provider is configured"
            )
            return None

        try:
            result = await self.provider.translate(text_to_translate, from_lang, to_lang)
        except Exception:
            self.stats["translation_errors"] += 1
            translation_requests_total.labels(outcome="error").inc()
            raise

        self.stats["translations_performed"] += 1
        translation_requests_total.labels(outcome="translated").inc()
        self.add_to_dictionary(key, result, from_lang, to_lang)
        return result

    def save_dictionary(self) -> bool:
        """Save the global and project dictionaries if they have new entries.

        Returns:
            True if at least one dictionary file was written.

        Raises:
            OSError: If a dictionary file cannot be written.
        """
        return self.resolver.save()

    def get_config(self) -> TranslatorSnapshot:
        """Snapshot of file paths, provider selection and dictionaries."""
        project_store = self.resolver.project_store
        return TranslatorSnapshot(
            conf_file=str(self.conf_file) if self.conf_file else "",
            global_dict_file=str(self.resolver.global_store.path),
            use_project_dict=self.resolver.use_project_tier,
            project_dict_file=str(project_store.path) if project_store else "",
            translator_provider=self.translator_provider,
            automatic_translation=self.automatic_translation,
            global_dict=self.resolver.global_store.snapshot(),
            project_dict=project_store.snapshot() if project_store else {},
        )

    def get_stats(self) -> Dict[str, Any]:
        """Get translation service statistics.

        Returns:
            Dict with service counters, hit ratio and dictionary stats.
        """
        total_cache = self.stats["cache_hits"] + self.stats["cache_misses"]
        cache_hit_ratio = (
            self.stats["cache_hits"] / total_cache if total_cache > 0 else 0
        )

        return {
            **self.stats,
            "cache_hit_ratio": cache_hit_ratio,
            "dictionary_stats": self.resolver.get_stats(),
        }

    async def aclose(self) -> None:
        """Close the provider's network resources."""
        await self.provider.aclose()
