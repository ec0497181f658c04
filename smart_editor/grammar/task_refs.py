# smart_editor/grammar/task_refs.py
import re
from typing import Callable, Optional

from smart_editor.core.document import TaskResource
from .base import EntityRule

TASK_REF_RE = re.compile(r"^#(\d+)$", re.ASCII)


class TaskRefRule(EntityRule):
    """
    ``#<number>`` -> task mention, when the host knows a task with that number.
    Runs ahead of the tag rule; unknown numbers fall through and become tags.
    """
    name = "task_ref"
    priority = 10

    def __init__(self, lookup: Callable[[str], Optional[str]], cfg=None):
        super().__init__(cfg)
        self.lookup = lookup

    def match(self, word: str) -> Optional[TaskResource]:
        m = TASK_REF_RE.match(word)
        if not m:
            return None
        task_id = self.lookup(m.group(1))
        if not task_id:
            return None
        return TaskResource(task_id=task_id)


def register(grammar, lookup):
    grammar.register(TaskRefRule(lookup))
