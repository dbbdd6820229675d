"""Tests for dataalchemist.validation.fields."""

from conftest import make_client, make_task, make_worker

from dataalchemist.models import EntityType, Severity
from dataalchemist.validation import validate_client, validate_task, validate_worker


class TestValidateClient:
    def test_valid_client(self):
        assert validate_client(make_client(), 0) == []

    def test_priority_out_of_range_single_error(self):
        issues = validate_client(make_client(PriorityLevel=7), 4)
        assert len(issues) == 1
        issue = issues[0]
        assert issue.field == "PriorityLevel"
        assert issue.severity == Severity.ERROR
        assert issue.row_index == 4
        assert issue.entity_type == EntityType.CLIENTS
        assert "got 7" in issue.message
        assert issue.suggestion

    def test_priority_zero(self):
        issues = validate_client(make_client(PriorityLevel=0), 0)
        assert [i.field for i in issues] == ["PriorityLevel"]

    def test_priority_bounds_inclusive(self):
        assert validate_client(make_client(PriorityLevel=1), 0) == []
        assert validate_client(make_client(PriorityLevel=5), 0) == []

    def test_required_fields(self):
        issues = validate_client(make_client(ClientID=" ", ClientName=""), 0)
        assert [i.field for i in issues] == ["ClientID", "ClientName"]
        assert issues[0].message == "ClientID is required"

    def test_invalid_attributes_json(self):
        issues = validate_client(make_client(AttributesJSON="{budget: 1}"), 0)
        assert [i.field for i in issues] == ["AttributesJSON"]
        assert issues[0].severity == Severity.ERROR

    def test_empty_attributes_allowed(self):
        assert validate_client(make_client(AttributesJSON=""), 0) == []

    def test_deeply_nested_attributes_reported(self):
        issues = validate_client(make_client(AttributesJSON="[" * 100000), 0)
        assert [i.field for i in issues] == ["AttributesJSON"]
        assert issues[0].severity == Severity.ERROR

    def test_unknown_task_reference_not_checked_here(self):
        assert validate_client(make_client(RequestedTaskIDs="T404"), 0) == []


class TestValidateWorker:
    def test_valid_worker(self):
        assert validate_worker(make_worker(), 0) == []

    def test_slots_invalid_json(self):
        issues = validate_worker(make_worker(AvailableSlots="[1,2"), 1)
        assert len(issues) == 1
        assert issues[0].field == "AvailableSlots"
        assert issues[0].severity == Severity.ERROR
        assert "valid JSON array" in issues[0].message

    def test_slots_not_an_array(self):
        issues = validate_worker(make_worker(AvailableSlots='{"1": true}'), 0)
        assert [i.field for i in issues] == ["AvailableSlots"]

    def test_deeply_nested_slots_reported(self):
        issues = validate_worker(make_worker(AvailableSlots="[" * 100000), 0)
        assert [i.field for i in issues] == ["AvailableSlots"]
        assert issues[0].severity == Severity.ERROR

    def test_oversized_slot_number_reported(self):
        issues = validate_worker(make_worker(AvailableSlots="[" + "9" * 5000 + "]"), 0)
        assert [i.field for i in issues] == ["AvailableSlots"]

    def test_slots_negative_entry(self):
        issues = validate_worker(make_worker(AvailableSlots="[1,-2,3]"), 0)
        assert len(issues) == 1
        assert issues[0].field == "AvailableSlots"
        assert issues[0].severity == Severity.ERROR
        assert "-2" in issues[0].message

    def test_max_load_exceeds_slots_is_warning(self):
        issues = validate_worker(make_worker(AvailableSlots="[1,2]", MaxLoadPerPhase=3), 0)
        assert len(issues) == 1
        issue = issues[0]
        assert issue.field == "MaxLoadPerPhase"
        assert issue.severity == Severity.WARNING
        assert issue.suggestion.startswith("Reduce MaxLoadPerPhase to 2")

    def test_max_load_equal_to_slots_ok(self):
        assert validate_worker(make_worker(AvailableSlots="[1,2]", MaxLoadPerPhase=2), 0) == []

    def test_max_load_not_compared_when_slots_broken(self):
        issues = validate_worker(make_worker(AvailableSlots="oops", MaxLoadPerPhase=9), 0)
        assert [i.field for i in issues] == ["AvailableSlots"]

    def test_max_load_below_one(self):
        issues = validate_worker(make_worker(MaxLoadPerPhase=0), 0)
        assert [i.field for i in issues] == ["MaxLoadPerPhase"]
        assert issues[0].severity == Severity.ERROR

    def test_required_fields(self):
        issues = validate_worker(make_worker(WorkerID="", WorkerName=""), 0)
        assert [i.field for i in issues] == ["WorkerID", "WorkerName"]


class TestValidateTask:
    def test_valid_task(self):
        assert validate_task(make_task(), 0) == []

    def test_duration_and_concurrency(self):
        issues = validate_task(make_task(Duration=0, MaxConcurrent=-1), 2)
        assert [i.field for i in issues] == ["Duration", "MaxConcurrent"]
        assert all(i.severity == Severity.ERROR for i in issues)
        assert all(i.row_index == 2 for i in issues)

    def test_preferred_phases_invalid(self):
        issues = validate_task(make_task(PreferredPhases="1-3"), 0)
        assert [i.field for i in issues] == ["PreferredPhases"]

    def test_preferred_phases_empty_allowed(self):
        assert validate_task(make_task(PreferredPhases=""), 0) == []

    def test_skill_coverage_not_checked_here(self):
        assert validate_task(make_task(RequiredSkills="rust"), 0) == []
