"""Entity models for clients, workers and tasks.

Multi-valued fields arrive as encoded strings (comma-separated lists, JSON
arrays, JSON objects) and are stored verbatim so exports reproduce the
uploaded format. Logic never reads those strings directly: it goes through
the decoded accessors (``requested_tasks``, ``skill_tags``, ``slots``,
``phases``, ``attributes``).
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class EntityType(str, Enum):
    """The three uploadable collections."""

    CLIENTS = "clients"
    WORKERS = "workers"
    TASKS = "tasks"


@dataclass(frozen=True)
class DecodedPhases:
    """Result of decoding a JSON array of phase numbers.

    ``provided`` is False for an empty field, which is not an error.
    ``error`` is set when the text is not JSON or not an array; in that case
    ``values`` is empty. Entries that are not positive integers are kept in
    ``invalid_entries`` and left out of ``values``.
    """

    provided: bool
    values: list[int] = field(default_factory=list)
    invalid_entries: list[Any] = field(default_factory=list)
    error: str | None = None

    @property
    def is_usable(self) -> bool:
        return self.provided and self.error is None

    @property
    def length(self) -> int:
        """Number of entries in the decoded array, valid or not."""
        return len(self.values) + len(self.invalid_entries)


@dataclass(frozen=True)
class DecodedJson:
    """Result of decoding a free-form JSON field."""

    provided: bool
    value: Any = None
    error: str | None = None


def split_list(raw: str, lowercase: bool = False) -> list[str]:
    """Split a comma-separated field into trimmed, non-empty items."""
    items = [item.strip() for item in (raw or "").split(",")]
    items = [item for item in items if item]
    if lowercase:
        items = [item.lower() for item in items]
    return items


def _is_positive_int(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return value >= 1
    if isinstance(value, float):
        return value.is_integer() and value >= 1
    return False


def decode_phases(raw: str) -> DecodedPhases:
    """Decode a JSON array of positive integers such as ``[1,2,3]``."""
    text = (raw or "").strip()
    if not text:
        return DecodedPhases(provided=False)

    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        return DecodedPhases(provided=True, error=f"invalid JSON: {e.msg}")
    except (ValueError, RecursionError):
        return DecodedPhases(provided=True, error="invalid JSON: nested or sized beyond what can be read")

    if not isinstance(parsed, list):
        return DecodedPhases(provided=True, error="not a JSON array")

    values = [int(v) for v in parsed if _is_positive_int(v)]
    invalid = [v for v in parsed if not _is_positive_int(v)]
    return DecodedPhases(provided=True, values=values, invalid_entries=invalid)


def decode_json(raw: str) -> DecodedJson:
    """Decode a JSON document stored in a text field."""
    text = (raw or "").strip()
    if not text:
        return DecodedJson(provided=False)
    try:
        return DecodedJson(provided=True, value=json.loads(text))
    except json.JSONDecodeError as e:
        return DecodedJson(provided=True, error=f"invalid JSON: {e.msg}")
    except (ValueError, RecursionError):
        return DecodedJson(provided=True, error="invalid JSON: nested or sized beyond what can be read")


class _Entity(BaseModel):
    """Shared configuration: accept either column names or attribute names."""

    model_config = ConfigDict(populate_by_name=True)

    def to_row(self) -> dict[str, Any]:
        """Return the record keyed by its external column names."""
        return self.model_dump(by_alias=True)


class Client(_Entity):
    """A client requesting tasks."""

    client_id: str = Field(default="", alias="ClientID")
    client_name: str = Field(default="", alias="ClientName")
    priority_level: int = Field(default=1, alias="PriorityLevel")
    requested_task_ids: str = Field(default="", alias="RequestedTaskIDs")
    group_tag: str = Field(default="", alias="GroupTag")
    attributes_json: str = Field(default="", alias="AttributesJSON")

    @property
    def entity_id(self) -> str:
        return self.client_id

    @property
    def requested_tasks(self) -> list[str]:
        return split_list(self.requested_task_ids)

    @property
    def attributes(self) -> DecodedJson:
        return decode_json(self.attributes_json)


class Worker(_Entity):
    """A worker offering skills in a set of phases."""

    worker_id: str = Field(default="", alias="WorkerID")
    worker_name: str = Field(default="", alias="WorkerName")
    skills: str = Field(default="", alias="Skills")
    available_slots: str = Field(default="", alias="AvailableSlots")
    max_load_per_phase: int = Field(default=1, alias="MaxLoadPerPhase")
    worker_group: str = Field(default="", alias="WorkerGroup")
    qualification_level: str = Field(default="", alias="QualificationLevel")

    @property
    def entity_id(self) -> str:
        return self.worker_id

    @property
    def skill_tags(self) -> list[str]:
        return split_list(self.skills, lowercase=True)

    @property
    def slots(self) -> DecodedPhases:
        return decode_phases(self.available_slots)


class Task(_Entity):
    """A unit of work needing skills for a number of phases."""

    task_id: str = Field(default="", alias="TaskID")
    task_name: str = Field(default="", alias="TaskName")
    category: str = Field(default="", alias="Category")
    duration: int = Field(default=1, alias="Duration")
    required_skills: str = Field(default="", alias="RequiredSkills")
    preferred_phases: str = Field(default="", alias="PreferredPhases")
    max_concurrent: int = Field(default=1, alias="MaxConcurrent")

    @property
    def entity_id(self) -> str:
        return self.task_id

    @property
    def required_skill_tags(self) -> list[str]:
        return split_list(self.required_skills, lowercase=True)

    @property
    def phases(self) -> DecodedPhases:
        return decode_phases(self.preferred_phases)


Entity = Client | Worker | Task

ENTITY_MODELS: dict[EntityType, type[_Entity]] = {
    EntityType.CLIENTS: Client,
    EntityType.WORKERS: Worker,
    EntityType.TASKS: Task,
}

# External column holding each collection's identifier
ID_FIELDS: dict[EntityType, str] = {
    EntityType.CLIENTS: "ClientID",
    EntityType.WORKERS: "WorkerID",
    EntityType.TASKS: "TaskID",
}
