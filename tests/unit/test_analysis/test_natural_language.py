"""Tests for dataalchemist.analysis.natural_language."""

from conftest import make_client, make_task, make_worker

from dataalchemist.analysis import parse_rule_text
from dataalchemist.models import (
    CoRunRule,
    LoadLimitRule,
    PhaseWindowRule,
    RuleSource,
    SlotRestrictionRule,
)

CLIENTS = [make_client("C1", GroupTag="enterprise"), make_client("C2", GroupTag="Acme-Partners")]
WORKERS = [make_worker("W1", WorkerGroup="backend"), make_worker("W2", WorkerGroup="ml-ops")]
TASKS = [make_task("T1"), make_task("T2"), make_task("T3")]


def _parse(text: str):
    return parse_rule_text(text, CLIENTS, WORKERS, TASKS)


class TestCoRun:
    def test_two_known_tasks(self):
        rule = _parse("Run T1 and T3 together")
        assert isinstance(rule, CoRunRule)
        assert rule.parameters.task_ids == ["T1", "T3"]
        assert rule.parameters.must_run_together
        assert rule.source == RuleSource.AI_GENERATED
        assert rule.name == "Co-run: T1 & T3"
        assert rule.enabled

    def test_repeated_ids_collapsed(self):
        rule = _parse("T2, T1 and T2 at the same time")
        assert rule.parameters.task_ids == ["T2", "T1"]

    def test_unknown_task_dropped(self):
        assert _parse("Run T1 and T99 together") is None

    def test_lowercase_ids_not_recognised(self):
        assert _parse("run t1 and t2 together") is None


class TestLoadLimit:
    def test_basic(self):
        rule = _parse("Limit backend workload to 3 per phase")
        assert isinstance(rule, LoadLimitRule)
        assert rule.parameters.worker_group == "backend"
        assert rule.parameters.max_slots_per_phase == 3
        assert rule.parameters.phases == [1, 2, 3, 4, 5, 6]

    def test_group_from_uploaded_workers(self):
        rule = _parse("Limit load for ml-ops to 2")
        assert rule.parameters.worker_group == "ml-ops"

    def test_phase_numbers_not_taken_as_limit(self):
        rule = _parse("Limit backend load in phase 5 to 2")
        assert rule.parameters.max_slots_per_phase == 2

    def test_missing_number(self):
        assert _parse("Limit the backend workload") is None

    def test_zero_rejected(self):
        assert _parse("Limit backend load to 0") is None

    def test_unknown_group(self):
        assert _parse("Limit sales workload to 3") is None


class TestPhaseWindow:
    def test_basic(self):
        rule = _parse("T3 should only run in phase 2 or phase 4")
        assert isinstance(rule, PhaseWindowRule)
        assert rule.parameters.task_id == "T3"
        assert rule.parameters.allowed_phases == [2, 4]

    def test_unknown_task_still_parsed(self):
        rule = _parse("Restrict T42 to phase 1")
        assert rule.parameters.task_id == "T42"

    def test_needs_phase_number(self):
        assert _parse("T1 only in the first phase") is None


class TestSlotRestriction:
    def test_known_group(self):
        rule = _parse("Enterprise group needs 2 common slots")
        assert isinstance(rule, SlotRestrictionRule)
        assert rule.parameters.target_group == "enterprise"
        assert rule.parameters.group_type == "client"
        assert rule.parameters.min_common_slots == 2

    def test_group_from_uploaded_clients(self):
        rule = _parse("acme-partners group needs 3 slots")
        assert rule.parameters.target_group == "Acme-Partners"

    def test_finance_default_group(self):
        rule = _parse("finance group should share 1 slot")
        assert rule.parameters.target_group == "finance"


class TestParseRuleText:
    def test_unrecognised(self):
        assert _parse("make everything faster") is None

    def test_first_trigger_wins(self):
        # Mentions a phase restriction, but "together" selects co-run first
        assert _parse("Only run T1 in phase 2, together with nothing") is None

    def test_empty_text(self):
        assert parse_rule_text("", [], [], []) is None
