"""
Pytest configuration and fixtures for the auto-translate API.

This module provides:
- Test settings with an isolated per-user folder
- Helpers to write translator config and dictionary files
- Translator fixtures with mocked providers
"""

import json
from pathlib import Path
from typing import Any, Callable, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from auto_translate.core.config import Settings
from auto_translate.services.translation import (
    DictionaryStore,
    TranslationService,
    TwoTierResolver,
)


@pytest.fixture
def write_json() -> Callable[[Path, Any], Path]:
    """Write content as JSON and return the path."""

    def _write(path: Path, content: Any) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(content, indent=4), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def read_json() -> Callable[[Path], Any]:
    def _read(path: Path) -> Any:
        return json.loads(path.read_text(encoding="utf-8"))

    return _read


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings whose per-user folder lives under tmp_path."""
    return Settings(
        AUTO_TRANSLATE_HOME=str(tmp_path / "home"),
        PROVIDER_TIMEOUT_SECONDS=2.0,
    )


@pytest.fixture
def global_store(tmp_path: Path, write_json) -> DictionaryStore:
    """Open global store containing en_hr.hello = bok."""
    path = write_json(tmp_path / ".global-dictionary.json", {"en_hr": {"hello": "bok"}})
    return DictionaryStore.from_file(path, tier="global")


@pytest.fixture
def project_store(tmp_path: Path, write_json) -> DictionaryStore:
    """Open, empty project store."""
    path = write_json(tmp_path / "project" / ".project-dictionary.json", {})
    return DictionaryStore.from_file(path, tier="project")


@pytest.fixture
def mock_provider() -> MagicMock:
    """Active provider returning 'prijevod'."""
    provider = MagicMock()
    provider.name = "google"
    provider.is_active = True
    provider.translate = AsyncMock(return_value="prijevod")
    provider.aclose = AsyncMock()
    return provider


@pytest.fixture
def make_service(global_store, project_store, mock_provider):
    """Factory for TranslationService instances over the fixture stores."""

    def _make(
        automatic_translation: bool = True,
        use_project: bool = True,
        provider: Optional[Any] = mock_provider,
    ) -> TranslationService:
        resolver = TwoTierResolver(
            global_store, project_store if use_project else None
        )
        return TranslationService(
            resolver=resolver,
            provider=provider,
            automatic_translation=automatic_translation,
        )

    return _make
