# smart_editor/core/suggestions.py
"""
TagSuggester - #tag autocompletion over a host supplied tag corpus.

The corpus is every tag text used elsewhere (duplicates included, they are the
popularity signal). For a scanned word like "#urg":
 - candidates: corpus tags whose lowercase form starts with "urg", except "urg" itself
 - ranking: occurrence count descending, then ascending string order
 - the suggestion is the top candidate; its unmatched tail is the shadow text
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from smart_editor.core.trie import TagTrie

logger = logging.getLogger(__name__)


class TagSuggester:

    def __init__(self, available_tags: Iterable[str] = ()):
        self._trie = TagTrie(available_tags)

    def update_tags(self, available_tags: Iterable[str]) -> None:
        self._trie = TagTrie(available_tags)
        logger.debug("tag corpus replaced (%d entries)", len(self._trie))

    def candidates(self, word: str) -> List[Tuple[str, int]]:
        """Ranked (tag, count) list for a scanned ``#partial`` word."""
        if not word.startswith("#") or len(word) < 2:
            return []
        partial = word[1:].lower()
        return [(t, n) for t, n in self._trie.search_prefix(partial) if t.lower() != partial]

    def suggest(self, word: str) -> Optional[str]:
        ranked = self.candidates(word)
        return ranked[0][0] if ranked else None

    def shadow_text(self, word: str) -> Optional[str]:
        """Unmatched tail of the suggestion for ``word`` ("#urg" -> "ent"), or None."""
        suggestion = self.suggest(word)
        if not suggestion:
            return None
        rest = suggestion[len(word) - 1:]
        return rest or None
