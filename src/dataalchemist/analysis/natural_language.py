"""Keyword-driven conversion of plain-English rule requests into BusinessRules.

No language model is involved: each rule kind is recognised by trigger
words, and its parameters are pulled out with regular expressions.

Examples:
    "Run T1 and T3 together"                  -> co-run
    "Limit backend workload to 3 per phase"   -> load-limit
    "T5 should only run in phase 2 or phase 4" -> phase-window
    "Enterprise group needs 2 common slots"   -> slot-restriction
"""

import logging
import re
from collections.abc import Sequence

from pydantic import ValidationError as PydanticValidationError

from dataalchemist.config import settings
from dataalchemist.models import (
    BusinessRule,
    Client,
    CoRunParameters,
    CoRunRule,
    LoadLimitParameters,
    LoadLimitRule,
    PhaseWindowParameters,
    PhaseWindowRule,
    RuleSource,
    SlotRestrictionParameters,
    SlotRestrictionRule,
    Task,
    Worker,
)

logger = logging.getLogger(__name__)

_TASK_ID = re.compile(r"\bT\d+\b")
_NUMBER = re.compile(r"\d+")
_PHASE = re.compile(r"\bphase\s+(\d+)", re.IGNORECASE)

# Used when the uploaded data does not name the group
KNOWN_WORKER_GROUPS = [
    "frontend",
    "backend",
    "design",
    "devops",
    "qa",
    "mobile",
    "data-science",
    "management",
]
KNOWN_CLIENT_GROUPS = [
    "enterprise",
    "startup",
    "small-business",
    "research",
    "healthcare",
    "finance",
]


def _find_group(text: str, candidates: Sequence[str]) -> str | None:
    """Return the first candidate mentioned in text as a whole word (longest first)."""
    lowered = text.lower()
    for candidate in sorted({c for c in candidates if c}, key=len, reverse=True):
        if re.search(rf"(?<![\w-]){re.escape(candidate.lower())}(?![\w-])", lowered):
            return candidate
    return None


def _first_number(text: str) -> int | None:
    """First integer in text, ignoring digits that belong to task IDs or phases."""
    stripped = _PHASE.sub(" ", _TASK_ID.sub(" ", text))
    match = _NUMBER.search(stripped)
    return int(match.group()) if match else None


def parse_co_run(text: str, tasks: Sequence[Task]) -> CoRunRule | None:
    known = {t.task_id for t in tasks}
    task_ids = [tid for tid in dict.fromkeys(_TASK_ID.findall(text)) if tid in known]
    if len(task_ids) < 2:
        return None
    return CoRunRule(
        name=f"Co-run: {' & '.join(task_ids)}",
        description=f"Tasks {' and '.join(task_ids)} must run together",
        source=RuleSource.AI_GENERATED,
        parameters=CoRunParameters(task_ids=task_ids, must_run_together=True),
    )


def parse_load_limit(text: str, workers: Sequence[Worker]) -> LoadLimitRule | None:
    group = _find_group(text, [w.worker_group for w in workers] + KNOWN_WORKER_GROUPS)
    limit = _first_number(text)
    if group is None or limit is None or limit < 1:
        return None
    return LoadLimitRule(
        name=f"Load Limit: {group}",
        description=f"Limit {group} workers to {limit} slots per phase",
        source=RuleSource.AI_GENERATED,
        parameters=LoadLimitParameters(
            worker_group=group,
            max_slots_per_phase=limit,
            phases=list(settings.default_rule_phases),
        ),
    )


def parse_phase_window(text: str, tasks: Sequence[Task]) -> PhaseWindowRule | None:
    task_match = _TASK_ID.search(text)
    phases = [int(p) for p in dict.fromkeys(_PHASE.findall(text)) if int(p) >= 1]
    if task_match is None or not phases:
        return None
    task_id = task_match.group()
    if tasks and task_id not in {t.task_id for t in tasks}:
        logger.debug("Phase window references unknown task %s", task_id)
    return PhaseWindowRule(
        name=f"Phase Window: {task_id}",
        description=f"Restrict {task_id} to phases {', '.join(map(str, phases))}",
        source=RuleSource.AI_GENERATED,
        parameters=PhaseWindowParameters(task_id=task_id, allowed_phases=phases),
    )


def parse_slot_restriction(text: str, clients: Sequence[Client]) -> SlotRestrictionRule | None:
    group = _find_group(text, [c.group_tag for c in clients] + KNOWN_CLIENT_GROUPS)
    slots = _first_number(text)
    if group is None or slots is None or slots < 1:
        return None
    return SlotRestrictionRule(
        name=f"Slot Restriction: {group}",
        description=f"Require {group} clients to have {slots} common slots",
        source=RuleSource.AI_GENERATED,
        parameters=SlotRestrictionParameters(
            target_group=group,
            group_type="client",
            min_common_slots=slots,
            phases=list(settings.default_rule_phases),
        ),
    )


def parse_rule_text(
    text: str,
    clients: Sequence[Client],
    workers: Sequence[Worker],
    tasks: Sequence[Task],
) -> BusinessRule | None:
    """Turn a plain-English rule request into a rule, or None if not understood.

    Trigger words are checked in a fixed order; the first matching kind wins
    even if its parameters cannot be extracted.
    """
    lowered = text.lower()

    try:
        if any(word in lowered for word in ("together", "co-run", "same time")):
            rule = parse_co_run(text, tasks)
        elif "limit" in lowered and ("load" in lowered or "workload" in lowered):
            rule = parse_load_limit(text, workers)
        elif "phase" in lowered and ("only" in lowered or "restrict" in lowered):
            rule = parse_phase_window(text, tasks)
        elif "group" in lowered and "slot" in lowered:
            rule = parse_slot_restriction(text, clients)
        else:
            rule = None
    except PydanticValidationError as e:
        logger.warning("Rule text produced invalid parameters: %s", e)
        return None

    if rule is None:
        logger.info("Could not interpret rule text: %r", text)
    else:
        logger.info("Parsed %s rule from text", rule.type)
    return rule
