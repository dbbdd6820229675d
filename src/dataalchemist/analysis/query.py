"""Plain-English search over the loaded records.

Keyword matching only. Each supported question shape is tried in order and
the first one that applies decides which records are returned.
"""

import logging
import re
from collections.abc import Sequence

from pydantic import BaseModel, Field

from dataalchemist.models import Client, Task, Worker

logger = logging.getLogger(__name__)

SKILL_KEYWORDS = re.compile(r"(javascript|python|react|node\.js|java|css|html|aws|docker)")
GROUP_KEYWORDS = re.compile(r"(frontend|backend|design|devops|qa|mobile|development)")
CATEGORY_KEYWORDS = re.compile(r"(development|design|testing|security|integration|analytics)")
HIGH_PRIORITY = 4

FALLBACK_EXPLANATION = (
    "I couldn't understand your query. Try asking about priority levels, skills, "
    "duration, phases, groups, or categories."
)


class QueryResult(BaseModel):
    """Records matching a query plus a one-line explanation."""

    query: str
    clients: list[Client] = Field(default_factory=list)
    workers: list[Worker] = Field(default_factory=list)
    tasks: list[Task] = Field(default_factory=list)
    explanation: str = ""
    understood: bool = True

    @property
    def total(self) -> int:
        return len(self.clients) + len(self.workers) + len(self.tasks)


def _first_digit(text: str, default: int) -> int:
    match = re.search(r"(\d+)", text)
    return int(match.group(1)) if match else default


def run_query(
    query: str,
    clients: Sequence[Client],
    workers: Sequence[Worker],
    tasks: Sequence[Task],
) -> QueryResult:
    """Answer a natural-language question about the loaded data.

    Supported shapes (first match wins):
        - clients with priority greater than N
        - workers with a named skill
        - tasks with duration longer than N
        - workers available in phase N
        - workers in a named group/team
        - tasks in a named category
        - high priority clients (optionally requesting task X)
        - workers with more than N available slots
    """
    q = query.lower()
    result = QueryResult(query=query)

    if "priority" in q and any(w in q for w in ("greater", "higher", ">")) and "high priority" not in q:
        level = _first_digit(q, 3)
        result.clients = [c for c in clients if c.priority_level > level]
        result.explanation = f"Found clients with priority level greater than {level}"

    elif "skill" in q or SKILL_KEYWORDS.search(q):
        match = SKILL_KEYWORDS.search(q)
        if match:
            skill = match.group(1)
            result.workers = [w for w in workers if skill in w.skill_tags]
            result.explanation = f"Found workers with {skill} skills"
        else:
            result.explanation = "Name a skill to search for, e.g. 'workers with python skills'"

    elif "duration" in q and any(w in q for w in ("longer", "greater", ">")):
        duration = _first_digit(q, 1)
        result.tasks = [t for t in tasks if t.duration > duration]
        plural = "s" if duration > 1 else ""
        result.explanation = f"Found tasks with duration longer than {duration} phase{plural}"

    elif "phase" in q and "available" in q:
        match = re.search(r"phase (\d+)", q)
        phase = int(match.group(1)) if match else 2
        result.workers = [w for w in workers if w.slots.is_usable and phase in w.slots.values]
        result.explanation = f"Found workers available in phase {phase}"

    elif ("group" in q or "team" in q) and GROUP_KEYWORDS.search(q):
        group = GROUP_KEYWORDS.search(q).group(1)
        result.workers = [w for w in workers if group in w.worker_group.lower()]
        result.explanation = f"Found workers in {group} group"

    elif ("category" in q or "type" in q) and CATEGORY_KEYWORDS.search(q):
        category = CATEGORY_KEYWORDS.search(q).group(1)
        result.tasks = [t for t in tasks if category in t.category.lower()]
        result.explanation = f"Found tasks in {category} category"

    elif "high priority" in q:
        task_match = re.search(r"task (\w+)", q)
        high = [c for c in clients if c.priority_level >= HIGH_PRIORITY]
        if task_match:
            task_id = task_match.group(1).upper()
            result.clients = [c for c in high if task_id in c.requested_tasks]
            result.explanation = f"Found high priority clients who requested {task_id}"
        else:
            result.clients = high
            result.explanation = "Found high priority clients (priority level 4 or 5)"

    elif "available slots" in q or "more than" in q:
        min_slots = _first_digit(q, 3)
        result.workers = [
            w for w in workers if w.slots.is_usable and w.slots.length > min_slots
        ]
        result.explanation = f"Found workers with more than {min_slots} available slots"

    else:
        result.understood = False
        result.explanation = FALLBACK_EXPLANATION

    logger.info("Query %r matched %d records", query, result.total)
    return result
