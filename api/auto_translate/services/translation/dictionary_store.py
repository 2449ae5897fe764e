"""JSON-backed translation dictionary.

A dictionary file maps a language pair key ("en_hr") to a mapping of
source text -> translated text:

    {"en_hr": {"translate": "prevedi"}}

Entries are kept in memory and written back as a full snapshot on flush.
"""

import copy
import json
import logging
import tempfile
from pathlib import Path
from typing import Dict, Optional, Union

from auto_translate.metrics.translation_metrics import (
    dictionary_flushes_total,
    dictionary_inserts_total,
)

logger = logging.getLogger(__name__)

# Provider error strings that come back in place of a translation
ARGUMENT_EXCEPTION_PREFIX = "ArgumentException:"


def make_lang_key(from_lang: str, to_lang: str) -> str:
    """Build the language pair key used at the top level of a dictionary."""
    return f"{from_lang}_{to_lang}"


class DictionaryStore:
    """In-memory translation dictionary loaded from and flushed to a JSON file.

    Tracks the number of new entries since the last flush so unchanged
    dictionaries are never rewritten.
    """

    def __init__(self, path: Union[str, Path], tier: str = "global"):
        """Initialize an empty, closed store.

        Args:
            path: Backing JSON file.
            tier: Tier name used in logs and metrics ("global" or "project").
        """
        self.path = Path(path)
        self.tier = tier
        self.entries: Dict[str, Dict[str, str]] = {}
        self.is_open = False
        self.pending_writes = 0

    @classmethod
    def from_file(cls, path: Union[str, Path], tier: str = "global") -> "DictionaryStore":
        """Create a store and load it from its backing file."""
        store = cls(path, tier=tier)
        store.load()
        return store

    def load(self) -> bool:
        """Read the backing file into memory.

        A missing, unreadable or malformed file leaves the store empty and
        closed. The pending-write counter is reset either way.

        Returns:
            True if the file was parsed and the store is open.
        """
        self.entries = {}
        self.pending_writes = 0
        self.is_open = False

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Cannot open {self.tier} dictionary {self.path}: {e}")
            return False

        if not isinstance(data, dict):
            logger.warning(
                f"Cannot open {self.tier} dictionary {self.path}: "
                f"expected a JSON object, got {type(data).__name__}"
            )
            return False

        self.entries = data
        self.is_open = True
        logger.debug(
            f"Loaded {self.tier} dictionary {self.path} "
            f"({len(self.entries)} language pairs)"
        )
        return True

    def lookup(self, lang_key: str, text: str) -> Optional[str]:
        """Return the translation of text for lang_key, or None.

        Closed stores never return a value. Values that are not strings
        (hand-edited files) are treated as missing.
        """
        if not self.is_open:
            return None
        translations = self.entries.get(lang_key)
        if not isinstance(translations, dict):
            return None
        value = translations.get(text)
        return value if isinstance(value, str) else None

    def insert(self, lang_key: str, text: str, translation: str) -> bool:
        """Add or overwrite a translation.

        New keys are counted as pending writes before the provider error
        check, so a suppressed insert of a new key still marks the store dirty.

        Returns:
            True if the translation was stored, False if it was suppressed.

        Raises:
            TypeError: If translation is not a string.
        """
        if not isinstance(translation, str):
            raise TypeError(
                f"Translation must be a string, got {type(translation).__name__}"
            )

        translations = self.entries.get(lang_key)
        if not isinstance(translations, dict):
            translations = {}
            self.entries[lang_key] = translations

        is_new = text not in translations
        if is_new:
            self.pending_writes += 1

        if translation.startswith(ARGUMENT_EXCEPTION_PREFIX):
            logger.warning(
                f"Not caching provider error for {lang_key} in {self.tier} "
                f"dictionary: {translation[:80]}"
            )
            dictionary_inserts_total.labels(tier=self.tier, outcome="suppressed").inc()
            return False

        translations[text] = translation
        dictionary_inserts_total.labels(
            tier=self.tier, outcome="added" if is_new else "updated"
        ).inc()
        return True

    def write(self) -> None:
        """Write the whole dictionary to the backing file.

        The snapshot goes to a temporary file in the same folder which then
        replaces the backing file.

        Raises:
            OSError: If the file cannot be written.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=self.path.parent,
            suffix=".tmp",
            delete=False,
        ) as tmp_file:
            tmp_path = Path(tmp_file.name)
            try:
                json.dump(self.entries, tmp_file, indent=4, ensure_ascii=False)
            except Exception:
                tmp_file.close()
                tmp_path.unlink(missing_ok=True)
                raise

        try:
            tmp_path.replace(self.path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise

        dictionary_flushes_total.labels(tier=self.tier).inc()
        logger.info(f"Saved {self.tier} dictionary to {self.path}")

    def mark_clean(self) -> None:
        self.pending_writes = 0

    def flush(self) -> bool:
        """Write the dictionary only if it has pending writes.

        Returns:
            True if the file was written.
        """
        if self.pending_writes <= 0:
            return False
        self.write()
        self.mark_clean()
        return True

    def snapshot(self) -> Dict[str, Dict[str, str]]:
        """Deep copy of the in-memory entries."""
        return copy.deepcopy(self.entries)

    def get_stats(self) -> dict:
        """Get store statistics.

        Returns:
            Dict with open flag, language pair count, entry count and pending writes.
        """
        return {
            "tier": self.tier,
            "path": str(self.path),
            "is_open": self.is_open,
            "language_pairs": len(self.entries),
            "entries": sum(
                len(v) for v in self.entries.values() if isinstance(v, dict)
            ),
            "pending_writes": self.pending_writes,
        }
