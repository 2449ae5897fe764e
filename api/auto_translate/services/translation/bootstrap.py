"""Translator initialization.

Resolves file locations, creates missing config and dictionary files,
loads the dictionaries and selects the provider from the translator
configuration file.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import httpx
from auto_translate.core.config import Settings, get_settings
from auto_translate.services.translation.dictionary_store import DictionaryStore
from auto_translate.services.translation.providers import create_provider
from auto_translate.services.translation.resolver import TwoTierResolver
from auto_translate.services.translation.translation_service import TranslationService
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

PLACEHOLDER_KEY = "please-enter-the-key"


class TranslatorOptions(BaseModel):
    """Paths and file names used to initialize a translator.

    Accepts the camelCase option names (pathToGlobalConfig, ...) as well as
    their snake_case field names. Unset values fall back to defaults.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    path_to_global_config: Optional[str] = Field(None, alias="pathToGlobalConfig")
    config_file_name: Optional[str] = Field(None, alias="configFileName")
    path_to_global_dictionary: Optional[str] = Field(
        None, alias="pathToGlobalDictionary"
    )
    global_dict_file_name: Optional[str] = Field(None, alias="globalDictFileName")
    path_to_project: Optional[str] = Field(None, alias="pathToProject")
    project_dict_file_name: Optional[str] = Field(None, alias="projectDictFileName")


class TranslatorFileConfig(BaseModel):
    """Contents of the translator configuration file."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    automatic_translation: bool = Field(False, alias="automaticTranslation")
    translator_provider: Optional[str] = Field(None, alias="translatorProvider")
    azure_translate_key: Optional[str] = Field(None, alias="azureTranslateKey")
    google_translate_key: Optional[str] = Field(None, alias="googleTranslateKey")


DEFAULT_FILE_CONFIG: Dict[str, Any] = {
    "automaticTranslation": False,
    "translatorProvider": "google",
    "azureTranslateKey": PLACEHOLDER_KEY,
    "googleTranslateKey": PLACEHOLDER_KEY,
}


def _write_json(path: Path, content: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(content, f, indent=4)


def create_config_if_not_exist(conf_file: Path) -> bool:
    """Create the translator config file with default values if it is missing.

    Returns:
        True if the file was created.
    """
    if conf_file.is_file():
        return False
    logger.info(f"Creating translator config {conf_file}")
    _write_json(conf_file, DEFAULT_FILE_CONFIG)
    return True


def create_dictionary_if_not_exist(dict_file: Path) -> bool:
    """Create an empty dictionary file if it is missing.

    Returns:
        True if the file was created.
    """
    if dict_file.is_file():
        return False
    logger.info(f"Creating dictionary {dict_file}")
    _write_json(dict_file, {})
    return True


def load_translator_config(conf_file: Path) -> TranslatorFileConfig:
    """Read provider selection and credentials from the config file.

    A config file that cannot be read or validated yields the defaults,
    with automatic translation disabled.
    """
    try:
        with open(conf_file, "r", encoding="utf-8") as f:
            data = json.load(f)
        return TranslatorFileConfig.model_validate(data)
    except (OSError, ValueError) as e:
        # pydantic's ValidationError is a ValueError
        reason = (
            f"{e.error_count()} invalid field(s)"
            if isinstance(e, ValidationError)
            else str(e)
        )
        logger.error(
            f"Cannot read translator config {conf_file}: {reason}; "
            "automatic translation disabled"
        )
        return TranslatorFileConfig()


def options_from_settings(settings: Settings) -> TranslatorOptions:
    """Build translator options from environment settings."""
    return TranslatorOptions(
        path_to_global_config=settings.GLOBAL_CONFIG_DIR or None,
        config_file_name=settings.CONFIG_FILE_NAME,
        path_to_global_dictionary=settings.GLOBAL_DICTIONARY_DIR or None,
        global_dict_file_name=settings.GLOBAL_DICTIONARY_FILE_NAME,
        path_to_project=settings.PROJECT_DIR or None,
        project_dict_file_name=settings.PROJECT_DICTIONARY_FILE_NAME,
    )


def _normalized(*parts: str) -> Path:
    return Path(os.path.normpath(os.path.join(*parts)))


def init_translator(
    options: Optional[Union[TranslatorOptions, Mapping[str, Any]]] = None,
    settings: Optional[Settings] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> TranslationService:
    """Initialize a translator with paths and file names.

    Args:
        options: TranslatorOptions or a mapping with the same keys
            (pathToGlobalConfig, configFileName, pathToGlobalDictionary,
            globalDictFileName, pathToProject, projectDictFileName).
            Without pathToGlobalConfig the per-user folder is used; without
            pathToProject the project dictionary is disabled.
        settings: Settings for defaults and provider endpoints.
        http_client: Optional HTTP client shared with the provider.

    Returns:
        A ready TranslationService.
    """
    settings = settings or get_settings()
    if options is None:
        options = TranslatorOptions()
    elif not isinstance(options, TranslatorOptions):
        options = TranslatorOptions.model_validate(dict(options))

    path_to_global_config = options.path_to_global_config or settings.ensure_user_home()
    path_to_global_dictionary = options.path_to_global_dictionary or path_to_global_config
    conf_file = _normalized(
        path_to_global_config, options.config_file_name or settings.CONFIG_FILE_NAME
    )
    global_dict_file = _normalized(
        path_to_global_dictionary,
        options.global_dict_file_name or settings.GLOBAL_DICTIONARY_FILE_NAME,
    )

    create_config_if_not_exist(conf_file)
    create_dictionary_if_not_exist(global_dict_file)
    global_store = DictionaryStore.from_file(global_dict_file, tier="global")

    project_store = None
    if options.path_to_project:
        project_dict_file = _normalized(
            options.path_to_project,
            options.project_dict_file_name or settings.PROJECT_DICTIONARY_FILE_NAME,
        )
        create_dictionary_if_not_exist(project_dict_file)
        project_store = DictionaryStore.from_file(project_dict_file, tier="project")

    file_config = load_translator_config(conf_file)
    automatic_translation = file_config.automatic_translation

    unreadable = [
        store for store in (global_store, project_store) if store and not store.is_open
    ]
    if unreadable and automatic_translation:
        # A dictionary that failed to load disables provider calls for this translator
        logger.warning(
            "Automatic translation disabled: cannot open "
            + ", ".join(str(store.path) for store in unreadable)
        )
        automatic_translation = False

    provider = create_provider(
        file_config.translator_provider,
        google_key=file_config.google_translate_key,
        azure_key=file_config.azure_translate_key,
        google_url=settings.GOOGLE_TRANSLATE_URL,
        azure_url=settings.AZURE_TRANSLATOR_URL,
        azure_region=settings.AZURE_TRANSLATOR_REGION,
        timeout=settings.PROVIDER_TIMEOUT_SECONDS,
        client=http_client,
    )

    logger.info(
        f"Translator initialized (provider={provider.name}, "
        f"automatic_translation={automatic_translation}, "
        f"project_dictionary={project_store is not None})"
    )

    return TranslationService(
        resolver=TwoTierResolver(global_store, project_store),
        provider=provider,
        automatic_translation=automatic_translation,
        conf_file=conf_file,
        translator_provider=file_config.translator_provider,
    )
