# smart_editor/grammar/tags.py
import re
from typing import Optional

from smart_editor.core.document import TagResource
from .base import EntityRule

TAG_RE = re.compile(r"^#(\w+)$", re.ASCII)


class TagRule(EntityRule):
    name = "tag"
    priority = 0

    def match(self, word: str) -> Optional[TagResource]:
        m = TAG_RE.match(word)
        if not m:
            return None
        return TagResource(tag=m.group(1))
