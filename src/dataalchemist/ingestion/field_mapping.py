"""Header mapping and cell cleaning shared by the CSV and Excel loaders.

Uploaded files rarely use the canonical column names. Columns are matched in
three passes, each column being used at most once:

1. exact match on the canonical name (case/spacing-insensitive)
2. exact match on a known alias
3. containment either way between the column and an alias
"""

import json
import logging
import re
from typing import Any

import pandas as pd

from dataalchemist.exceptions import SchemaError
from dataalchemist.models import ENTITY_MODELS, Entity, EntityType

logger = logging.getLogger(__name__)

FIELD_ALIASES: dict[EntityType, dict[str, list[str]]] = {
    EntityType.CLIENTS: {
        "ClientID": ["client_id", "clientid", "id", "client_identifier"],
        "ClientName": ["client_name", "clientname", "name", "client"],
        "PriorityLevel": ["priority_level", "prioritylevel", "priority", "importance"],
        "RequestedTaskIDs": ["requested_task_ids", "requestedtaskids", "tasks", "task_ids"],
        "GroupTag": ["group_tag", "grouptag", "group", "tag", "category"],
        "AttributesJSON": ["attributes_json", "attributesjson", "attributes", "metadata"],
    },
    EntityType.WORKERS: {
        "WorkerID": ["worker_id", "workerid", "id", "worker_identifier"],
        "WorkerName": ["worker_name", "workername", "name", "worker"],
        "Skills": ["skills", "skill_set", "skillset", "capabilities"],
        "AvailableSlots": ["available_slots", "availableslots", "slots", "availability"],
        "MaxLoadPerPhase": ["max_load_per_phase", "maxloadperphase", "max_load", "capacity"],
        "WorkerGroup": ["worker_group", "workergroup", "group", "team"],
        "QualificationLevel": ["qualification_level", "qualificationlevel", "qualification", "level"],
    },
    EntityType.TASKS: {
        "TaskID": ["task_id", "taskid", "id", "task_identifier"],
        "TaskName": ["task_name", "taskname", "name", "task"],
        "Category": ["category", "type", "task_type", "tasktype"],
        "Duration": ["duration", "length", "time_required", "phases"],
        "RequiredSkills": ["required_skills", "requiredskills", "skills", "skill_requirements"],
        "PreferredPhases": ["preferred_phases", "preferredphases", "phases", "timeline"],
        "MaxConcurrent": ["max_concurrent", "maxconcurrent", "concurrent_limit", "parallel"],
    },
}

# Values used when a canonical column is absent from the upload
FIELD_DEFAULTS: dict[EntityType, dict[str, Any]] = {
    EntityType.CLIENTS: {
        "ClientID": "",
        "ClientName": "",
        "PriorityLevel": 1,
        "RequestedTaskIDs": "",
        "GroupTag": "default",
        "AttributesJSON": "{}",
    },
    EntityType.WORKERS: {
        "WorkerID": "",
        "WorkerName": "",
        "Skills": "",
        "AvailableSlots": "[]",
        "MaxLoadPerPhase": 1,
        "WorkerGroup": "default",
        "QualificationLevel": "junior",
    },
    EntityType.TASKS: {
        "TaskID": "",
        "TaskName": "",
        "Category": "general",
        "Duration": 1,
        "RequiredSkills": "",
        "PreferredPhases": "[]",
        "MaxConcurrent": 1,
    },
}

INTEGER_FIELDS = {"PriorityLevel", "Duration", "MaxLoadPerPhase", "MaxConcurrent"}
LIST_FIELDS = {"RequestedTaskIDs", "Skills", "RequiredSkills"}
PHASE_FIELDS = {"AvailableSlots", "PreferredPhases"}

_PHASE_LIST = re.compile(r"^\s*\d+\s*(-\s*\d+\s*)?(,\s*\d+\s*(-\s*\d+\s*)?)*$")

# Widest "a-b" range a single cell may expand to
MAX_PHASE_SPAN = 1000

# Integer cells beyond this magnitude count as unparsable
MAX_INTEGER_CELL = 2**53


def _normalize_column_name(col: str) -> str:
    """Normalize column name for matching (lowercase, strip, underscores).

    Also removes parenthetical suffixes like (json) or (1-5).
    """
    normalized = str(col).lower().strip()
    normalized = re.sub(r"\s*\([^)]*\)\s*$", "", normalized)
    normalized = normalized.replace(" ", "_").replace("-", "_")
    return normalized.strip("_")


def _squash(name: str) -> str:
    return _normalize_column_name(name).replace("_", "")


def resolve_columns(columns: list[str], entity_type: EntityType) -> dict[str, str]:
    """Map canonical field names to the upload's column names.

    Returns:
        Dict of canonical field -> original column, for the fields that matched.
    """
    aliases = FIELD_ALIASES[entity_type]
    mapping: dict[str, str] = {}
    used: set[str] = set()

    def claim(canonical: str, column: str) -> None:
        mapping[canonical] = column
        used.add(column)
        if column != canonical:
            logger.debug("Mapped column '%s' -> '%s'", column, canonical)

    # Pass 1: canonical name
    for canonical in aliases:
        for column in columns:
            if column not in used and _squash(column) == _squash(canonical):
                claim(canonical, column)
                break

    # Pass 2: exact alias
    for canonical, names in aliases.items():
        if canonical in mapping:
            continue
        for column in columns:
            if column not in used and _normalize_column_name(column) in names:
                claim(canonical, column)
                break

    # Pass 3: containment
    for canonical, names in aliases.items():
        if canonical in mapping:
            continue
        for column in columns:
            if column in used:
                continue
            normalized = _normalize_column_name(column)
            if any(alias in normalized or normalized in alias for alias in names if normalized):
                claim(canonical, column)
                break

    return mapping


def _expand_phase_list(text: str) -> list[int] | None:
    """Turn "1,2,4-6" into [1, 2, 4, 5, 6].

    Returns None for reversed ranges ("5-1"), ranges wider than
    MAX_PHASE_SPAN and numbers too long to convert.
    """
    phases: list[int] = []
    for part in text.split(","):
        try:
            bounds = [int(b) for b in part.split("-")]
        except ValueError:
            return None
        lower, upper = bounds[0], bounds[-1]
        if lower > upper or upper - lower >= MAX_PHASE_SPAN:
            return None
        phases.extend(range(lower, upper + 1))
    return phases


def clean_integer_column(series: pd.Series) -> pd.Series:
    """Parse integer cells; anything not a finite whole number becomes 0."""
    numeric = pd.to_numeric(series.astype(str).str.strip(), errors="coerce")
    finite = numeric.abs() <= MAX_INTEGER_CELL
    whole = finite & (numeric.where(finite, 0) % 1 == 0)
    return numeric.where(whole, 0).astype(int)


def clean_phase_field(value: str) -> str:
    """Normalize slot/phase cells to a JSON array where the intent is unambiguous.

    JSON arrays are re-serialized compactly; "1,2,3", "[1-3]" and "2-4" are
    expanded. Anything else is returned untouched so validation reports it.
    """
    text = value.strip()
    if not text:
        return text
    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError):
        inner = text.strip("[]")
        phases = _expand_phase_list(inner) if _PHASE_LIST.match(inner) else None
        if phases is None:
            return text
        return json.dumps(phases, separators=(",", ":"))
    if isinstance(parsed, list):
        return json.dumps(parsed, separators=(",", ":"))
    if isinstance(parsed, int) and not isinstance(parsed, bool):
        return json.dumps([parsed])
    return text


def clean_list_field(value: str) -> str:
    """Normalize ';' and '|' separators and spacing to "a,b,c"."""
    return re.sub(r"\s*,\s*", ",", re.sub(r"[;|]", ",", value)).strip(",").strip()


def frame_to_entities(df: pd.DataFrame, entity_type: EntityType) -> list[Entity]:
    """Convert a raw (all-string) DataFrame into entity models.

    Raises:
        SchemaError: If none of the entity's fields can be found in the columns.
    """
    columns = [str(c) for c in df.columns]
    mapping = resolve_columns(columns, entity_type)
    defaults = FIELD_DEFAULTS[entity_type]

    if not mapping:
        raise SchemaError(
            message=f"No {entity_type.value} columns recognized in {columns}",
            entity_type=entity_type.value,
            missing_fields=list(defaults),
            user_message=f"None of the columns look like {entity_type.value} data. "
            f"Expected columns such as: {', '.join(defaults)}",
        )

    missing = [f for f in defaults if f not in mapping]
    if missing:
        logger.warning("Upload for %s is missing columns %s; using defaults", entity_type.value, missing)

    frame = pd.DataFrame(index=df.index)
    for canonical, default in defaults.items():
        if canonical not in mapping:
            frame[canonical] = default
            continue
        series = df[mapping[canonical]]
        if canonical in INTEGER_FIELDS:
            frame[canonical] = clean_integer_column(series)
        else:
            text = series.fillna("").astype(str).str.strip()
            if canonical in LIST_FIELDS:
                text = text.map(clean_list_field)
            elif canonical in PHASE_FIELDS:
                text = text.map(clean_phase_field)
            frame[canonical] = text

    model = ENTITY_MODELS[entity_type]
    records = [model.model_validate(row) for row in frame.to_dict(orient="records")]
    logger.info("Mapped %d columns into %d %s", len(mapping), len(records), entity_type.value)
    return records
