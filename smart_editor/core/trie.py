# trie.py
# Prefix tree over the tag corpus used for #tag autocompletion.
# Paths are case-insensitive, but each terminal node remembers the original
# spellings that ended there and how often each one occurred in the corpus.

from __future__ import annotations
from collections import Counter, defaultdict
from typing import Dict, Iterable, List, Tuple

Tag = str
Count = int
Candidate = Tuple[Tag, Count]


class TrieNode:
    """
    A single node in the Trie.
    children: char -> TrieNode
    spellings: original tag text -> occurrence count, for tags ending here
    """

    __slots__ = ("children", "spellings")

    def __init__(self) -> None:
        self.children: Dict[str, TrieNode] = defaultdict(TrieNode)
        self.spellings: Counter = Counter()


class TagTrie:
    """
    Tag corpus index. Used by TagSuggester for:
     - case-insensitive prefix lookup
     - frequency counts per exact spelling (duplicates in the corpus count up)
    """

    def __init__(self, tags: Iterable[str] = ()) -> None:
        self._root = TrieNode()
        self._total = 0
        for t in tags:
            self.insert(t)

    # insertion -----------------------------------------------------
    def insert(self, tag: str) -> None:
        """Add one corpus occurrence of ``tag``."""
        if not tag:
            return

        node = self._root
        for ch in tag.lower():
            node = node.children[ch]
        node.spellings[tag] += 1
        self._total += 1

    # search/traversal ---------------------------------------------------------
    def search_prefix(self, prefix: str) -> List[Candidate]:
        """
        Return every distinct tag whose lowercase form starts with ``prefix.lower()``.
        Returned: list[(tag, count)] sorted by
         - higher count first
         - ascending string order second
        """
        if not prefix:
            return []

        node = self._root
        for ch in prefix.lower():
            nxt = node.children.get(ch)
            if nxt is None:
                return []
            node = nxt

        out: List[Candidate] = []
        self._collect(node, out)
        out.sort(key=lambda t: (-t[1], t[0]))
        return out

    def _collect(self, node: TrieNode, results: List[Candidate]) -> None:
        """DFS collecting every spelling under a node (explicit stack, tags can be long)."""
        stack = [node]
        while stack:
            cur = stack.pop()
            results.extend(cur.spellings.items())
            stack.extend(cur.children.values())

    # convenience -----------------------------------------------------
    def __len__(self) -> int:
        """Number of corpus occurrences inserted (duplicates included)."""
        return self._total

    def __contains__(self, tag: str) -> bool:
        """Exact (case-sensitive) spelling membership."""
        node = self._root
        for ch in tag.lower():
            node = node.children.get(ch)
            if node is None:
                return False
        return tag in node.spellings
