"""Translation package for dictionary-first translation.

This package provides:
- DictionaryStore: JSON-backed translation dictionary with dirty tracking
- TwoTierResolver: Project dictionary in front of the global dictionary
- TranslationProvider: Google, Azure and no-op provider implementations
- TranslationService: Main orchestrator for lookup, provider calls and saving
- init_translator: Builds a TranslationService from paths and the config file
"""

from auto_translate.services.translation.bootstrap import (
    TranslatorFileConfig,
    TranslatorOptions,
    init_translator,
)
from auto_translate.services.translation.dictionary_store import (
    ARGUMENT_EXCEPTION_PREFIX,
    DictionaryStore,
    make_lang_key,
)
from auto_translate.services.translation.providers import (
    AzureTranslatorProvider,
    GoogleTranslateProvider,
    NoProvider,
    TranslationProvider,
    create_provider,
)
from auto_translate.services.translation.resolver import TwoTierResolver
from auto_translate.services.translation.translation_service import (
    TranslationService,
    TranslatorSnapshot,
)

__all__ = [
    "ARGUMENT_EXCEPTION_PREFIX",
    "AzureTranslatorProvider",
    "DictionaryStore",
    "GoogleTranslateProvider",
    "NoProvider",
    "TranslationProvider",
    "TranslationService",
    "TranslatorFileConfig",
    "TranslatorOptions",
    "TranslatorSnapshot",
    "TwoTierResolver",
    "create_provider",
    "init_translator",
    "make_lang_key",
]
