"""Two-tier dictionary lookup.

Project tier: optional, per-project dictionary consulted first
Global tier: per-user dictionary shared by every project
"""

import logging
from typing import List, Optional

from auto_translate.metrics.translation_metrics import dictionary_lookups_total
from auto_translate.services.translation.dictionary_store import (
    DictionaryStore,
    make_lang_key,
)

logger = logging.getLogger(__name__)


class TwoTierResolver:
    """Project dictionary in front of the global dictionary.

    On lookup, a project hit wins over the global tier even when the values differ.
    On record, writes to the global tier and, when enabled, the project tier.
    """

    def __init__(
        self,
        global_store: DictionaryStore,
        project_store: Optional[DictionaryStore] = None,
    ):
        """Initialize the resolver.

        Args:
            global_store: Global dictionary, always present.
            project_store: Project dictionary; None disables the project tier.
        """
        self.global_store = global_store
        self.project_store = project_store

    @property
    def use_project_tier(self) -> bool:
        return self.project_store is not None

    def resolve(self, from_lang: str, to_lang: str, text: str) -> Optional[str]:
        """Find a recorded translation.

        Returns:
            The project tier value if present, else the global tier value, else None.
        """
        lang_key = make_lang_key(from_lang, to_lang)

        if self.project_store is not None and self.project_store.is_open:
            result = self.project_store.lookup(lang_key, text)
            if result is not None:
                dictionary_lookups_total.labels(tier="project", result="hit").inc()
                return result
            dictionary_lookups_total.labels(tier="project", result="miss").inc()

        if self.global_store.is_open:
            result = self.global_store.lookup(lang_key, text)
            if result is not None:
                dictionary_lookups_total.labels(tier="global", result="hit").inc()
                return result
            dictionary_lookups_total.labels(tier="global", result="miss").inc()

        return None

    def record(self, from_lang: str, to_lang: str, text: str, translation: str) -> None:
        """Store a translation in the global tier and, if enabled, the project tier.

        The project tier is written even if its file failed to load.
        """
        lang_key = make_lang_key(from_lang, to_lang)
        self.global_store.insert(lang_key, text, translation)
        if self.project_store is not None:
            self.project_store.insert(lang_key, text, translation)

    def stores(self) -> List[DictionaryStore]:
        """Stores in flush order: global first, then project."""
        if self.project_store is None:
            return [self.global_store]
        return [self.global_store, self.project_store]

    def save(self) -> bool:
        """Write every configured tier to disk if any tier has new entries.

        A record() can overwrite a value in one tier while adding a new key in
        the other, so all tiers are written together. Pending-write counters are
        reset only after every tier has been written. A failed write propagates
        and leaves every counter untouched.

        Returns:
            True if the dictionary files were written.
        """
        stores = self.stores()
        if not any(store.pending_writes > 0 for store in stores):
            logger.debug("No new dictionary entries, nothing to save")
            return False

        for store in stores:
            store.write()
        for store in stores:
            store.mark_clean()
        return True

    def get_stats(self) -> dict:
        """Get per-tier store statistics."""
        return {
            "use_project_tier": self.use_project_tier,
            "global": self.global_store.get_stats(),
            "project": (
                self.project_store.get_stats() if self.project_store is not None else None
            ),
        }
