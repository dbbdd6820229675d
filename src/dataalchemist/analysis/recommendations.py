"""Heuristic rule recommendations.

Pure algorithmic logic - no I/O, no randomness beyond generated ids.
Four independent analyses each turn a pattern in the data into candidate
rules the user can accept:

- co-run:        task pairs frequently requested together by clients
- load-limit:    worker groups whose max load is high relative to availability
- pattern-match: tasks depending on a skill held by at most one worker
- phase-window:  phases where task demand approaches worker capacity

Records whose encoded fields do not decode are treated as having no data
here; reporting them is validation's job.
"""

import logging
import math
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from itertools import combinations

from dataalchemist.config import settings
from dataalchemist.models import (
    Client,
    CoRunParameters,
    CoRunRule,
    DataContext,
    EntityType,
    LoadLimitParameters,
    LoadLimitRule,
    PatternMatchParameters,
    PatternMatchRule,
    PhaseWindowParameters,
    PhaseWindowRule,
    RuleRecommendation,
    RuleSource,
    Task,
    Worker,
    new_id,
)

logger = logging.getLogger(__name__)

# Co-run: a pair must appear in at least this share of clients (and at least twice)
CO_RUN_MIN_SHARE = 0.3
CO_RUN_MIN_COUNT = 2
CO_RUN_MAX_CONFIDENCE = 0.95

# Workload: flag groups whose average max load exceeds this share of average slots
LOAD_PRESSURE_RATIO = 0.8
LOAD_CAP_RATIO = 0.7
LOAD_CONFIDENCE = 0.75

# Skill coverage: skills held by this many workers or fewer are critical
CRITICAL_COVERAGE = 1
SKILL_CONFIDENCE = 0.8

# Phase conflicts
PHASE_OVERLOAD_RATIO = 0.9
PHASE_SPARE_RATIO = 0.7
MAX_ALTERNATIVE_PHASES = 3
PHASE_CONFIDENCE = 0.7


@dataclass
class GroupWorkload:
    """Aggregated availability for one worker group."""

    group: str
    workers: list[str] = field(default_factory=list)
    total_slots: int = 0
    total_max_load: int = 0

    @property
    def avg_slots(self) -> float:
        return self.total_slots / len(self.workers) if self.workers else 0.0

    @property
    def avg_max_load(self) -> float:
        return self.total_max_load / len(self.workers) if self.workers else 0.0


@dataclass
class PhaseLoad:
    """Worker capacity against task demand in one phase."""

    phase: int
    capacity: int = 0
    demand: int = 0
    tasks: list[str] = field(default_factory=list)

    @property
    def utilization(self) -> float | None:
        """Demand as a share of capacity; None when the phase has no capacity."""
        if self.capacity == 0:
            return None
        return self.demand / self.capacity


def mine_recommendations(
    clients: Sequence[Client],
    workers: Sequence[Worker],
    tasks: Sequence[Task],
) -> list[RuleRecommendation]:
    """Run every analysis and return the combined recommendations.

    Order: co-run, load-limit, skill coverage, phase conflicts.
    """
    recommendations = (
        analyze_co_run_patterns(clients, tasks)
        + analyze_workload_distribution(workers)
        + analyze_skill_coverage(workers, tasks)
        + analyze_phase_conflicts(workers, tasks)
    )
    logger.info(
        "Mined %d rule recommendations from %d clients, %d workers, %d tasks",
        len(recommendations),
        len(clients),
        len(workers),
        len(tasks),
    )
    return recommendations


# ---------------------------------------------------------------------------
# Co-run
# ---------------------------------------------------------------------------


def count_task_pairs(clients: Sequence[Client]) -> dict[tuple[str, str], int]:
    """Count how many clients request each unordered pair of distinct tasks."""
    counts: dict[tuple[str, str], int] = {}
    for client in clients:
        requested = list(dict.fromkeys(client.requested_tasks))
        for a, b in combinations(requested, 2):
            pair = (a, b) if a <= b else (b, a)
            counts[pair] = counts.get(pair, 0) + 1
    return counts


def co_run_threshold(client_count: int) -> int:
    return max(CO_RUN_MIN_COUNT, math.floor(client_count * CO_RUN_MIN_SHARE))


def analyze_co_run_patterns(
    clients: Sequence[Client],
    tasks: Sequence[Task],
) -> list[RuleRecommendation]:
    """Recommend co-run rules for task pairs that clients keep requesting together."""
    if not clients:
        return []

    total = len(clients)
    threshold = co_run_threshold(total)
    tasks_by_id: dict[str, Task] = {}
    for task in tasks:
        tasks_by_id.setdefault(task.task_id, task)

    recommendations: list[RuleRecommendation] = []
    for (first_id, second_id), count in count_task_pairs(clients).items():
        if count < threshold:
            continue
        first, second = tasks_by_id.get(first_id), tasks_by_id.get(second_id)
        if first is None or second is None:
            # Unknown IDs are surfaced by validation
            continue

        share = count / total
        description = (
            f"Tasks {first.task_name} and {second.task_name} are frequently requested together"
        )
        recommendations.append(
            RuleRecommendation(
                id=new_id("corun"),
                confidence=min(CO_RUN_MAX_CONFIDENCE, share),
                description=description,
                reasoning=(
                    f"These tasks appear together in {count} out of {total} "
                    f"client requests ({share:.0%})"
                ),
                suggested_rule=CoRunRule(
                    name=f"Co-run: {first.task_name} & {second.task_name}",
                    description=description,
                    source=RuleSource.AI_SUGGESTED,
                    parameters=CoRunParameters(task_ids=[first_id, second_id]),
                ),
                data_context=DataContext(
                    affected_entities=[first_id, second_id],
                    patterns=[f"Frequency: {count}/{total}"],
                ),
            )
        )

    logger.debug("Co-run analysis: threshold %d, %d recommendations", threshold, len(recommendations))
    return recommendations


# ---------------------------------------------------------------------------
# Workload
# ---------------------------------------------------------------------------


def summarize_group_workloads(workers: Sequence[Worker]) -> dict[str, GroupWorkload]:
    """Aggregate slots and max load per worker group (first-seen group order)."""
    groups: dict[str, GroupWorkload] = {}
    for worker in workers:
        group = worker.worker_group.strip()
        slots = worker.slots
        if not group or (slots.provided and slots.error is not None):
            continue
        workload = groups.setdefault(group, GroupWorkload(group=group))
        workload.workers.append(worker.worker_id)
        workload.total_slots += slots.length
        workload.total_max_load += worker.max_load_per_phase
    return groups


def analyze_workload_distribution(workers: Sequence[Worker]) -> list[RuleRecommendation]:
    """Recommend load limits for groups whose max load crowds their availability."""
    recommendations: list[RuleRecommendation] = []

    for group, workload in summarize_group_workloads(workers).items():
        avg_slots, avg_load = workload.avg_slots, workload.avg_max_load
        if avg_load <= avg_slots * LOAD_PRESSURE_RATIO:
            continue

        cap = max(1, math.floor(avg_slots * LOAD_CAP_RATIO))
        description = f"{group} workers may be overloaded"
        recommendations.append(
            RuleRecommendation(
                id=new_id("loadlimit"),
                confidence=LOAD_CONFIDENCE,
                description=description,
                reasoning=(
                    f"Average max load ({avg_load:.1f}) is high relative to "
                    f"available slots ({avg_slots:.1f})"
                ),
                suggested_rule=LoadLimitRule(
                    name=f"Load Limit: {group}",
                    description=description,
                    source=RuleSource.AI_SUGGESTED,
                    parameters=LoadLimitParameters(
                        worker_group=group,
                        max_slots_per_phase=cap,
                        phases=list(settings.default_rule_phases),
                    ),
                ),
                data_context=DataContext(
                    affected_entities=[group],
                    patterns=[f"Avg load: {avg_load:.1f}", f"Avg slots: {avg_slots:.1f}"],
                ),
            )
        )

    return recommendations


# ---------------------------------------------------------------------------
# Skill coverage
# ---------------------------------------------------------------------------


def skill_coverage(workers: Sequence[Worker]) -> dict[str, int]:
    """Number of workers holding each (lowercased) skill."""
    coverage: dict[str, int] = {}
    for worker in workers:
        for skill in set(worker.skill_tags):
            coverage[skill] = coverage.get(skill, 0) + 1
    return coverage


def analyze_skill_coverage(
    workers: Sequence[Worker],
    tasks: Sequence[Task],
) -> list[RuleRecommendation]:
    """Flag tasks that depend on a skill held by at most one worker."""
    coverage = skill_coverage(workers)
    recommendations: list[RuleRecommendation] = []

    for task in tasks:
        required = list(dict.fromkeys(task.required_skill_tags))
        if not required or not task.task_id.strip():
            continue
        critical = [s for s in required if coverage.get(s, 0) <= CRITICAL_COVERAGE]
        if not critical:
            continue

        description = f"Task {task.task_name} has limited skill coverage"
        recommendations.append(
            RuleRecommendation(
                id=new_id("skill"),
                confidence=SKILL_CONFIDENCE,
                description=description,
                reasoning=f"Critical skills with <=1 worker: {', '.join(critical)}",
                suggested_rule=PatternMatchRule(
                    name=f"Skill Priority: {task.task_name}",
                    description=description,
                    source=RuleSource.AI_SUGGESTED,
                    parameters=PatternMatchParameters(
                        pattern=re.escape(task.task_id),
                        field="TaskID",
                        entity_type=EntityType.TASKS,
                        action="flag",
                    ),
                ),
                data_context=DataContext(
                    affected_entities=[task.task_id],
                    patterns=[f"Critical skills: {', '.join(critical)}"],
                ),
            )
        )

    return recommendations


# ---------------------------------------------------------------------------
# Phase conflicts
# ---------------------------------------------------------------------------


def compute_phase_loads(
    workers: Sequence[Worker],
    tasks: Sequence[Task],
) -> dict[int, PhaseLoad]:
    """Capacity (sum of MaxLoadPerPhase) and demand (Duration x MaxConcurrent) per phase."""
    loads: dict[int, PhaseLoad] = {}

    for worker in workers:
        slots = worker.slots
        if not slots.is_usable:
            continue
        for phase in set(slots.values):
            load = loads.setdefault(phase, PhaseLoad(phase=phase))
            load.capacity += max(worker.max_load_per_phase, 0)

    for task in tasks:
        phases = task.phases
        if not phases.is_usable:
            continue
        for phase in set(phases.values):
            load = loads.setdefault(phase, PhaseLoad(phase=phase))
            load.demand += max(task.duration, 0) * max(task.max_concurrent, 0)
            load.tasks.append(task.task_id)

    return dict(sorted(loads.items()))


def analyze_phase_conflicts(
    workers: Sequence[Worker],
    tasks: Sequence[Task],
) -> list[RuleRecommendation]:
    """Suggest moving work out of phases whose demand nears worker capacity."""
    loads = compute_phase_loads(workers, tasks)
    recommendations: list[RuleRecommendation] = []

    for phase, load in loads.items():
        if load.demand == 0 or load.demand <= load.capacity * PHASE_OVERLOAD_RATIO:
            continue

        alternatives = [
            other.phase
            for other in loads.values()
            if other.phase != phase
            and other.capacity > 0
            and other.demand < other.capacity * PHASE_SPARE_RATIO
        ][:MAX_ALTERNATIVE_PHASES]
        if not alternatives:
            continue

        description = f"Phase {phase} is overloaded"
        recommendations.append(
            RuleRecommendation(
                id=new_id("phase"),
                confidence=PHASE_CONFIDENCE,
                description=description,
                reasoning=(
                    f"Demand ({load.demand}) exceeds 90% of capacity ({load.capacity}). "
                    f"Consider redistributing tasks to phases {', '.join(map(str, alternatives))}."
                ),
                suggested_rule=PhaseWindowRule(
                    name=f"Phase Redistribution: Phase {phase}",
                    description=description,
                    source=RuleSource.AI_SUGGESTED,
                    parameters=PhaseWindowParameters(
                        allowed_phases=alternatives,
                        restricted_phases=[phase],
                    ),
                ),
                data_context=DataContext(
                    affected_entities=[f"phase_{phase}", *load.tasks],
                    patterns=[
                        f"Demand: {load.demand}",
                        f"Capacity: {load.capacity}",
                        f"Alternatives: {','.join(map(str, alternatives))}",
                    ],
                ),
            )
        )

    return recommendations
