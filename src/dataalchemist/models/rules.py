"""Business rule and rule recommendation models.

A BusinessRule is a discriminated union over six rule kinds, each with its
own typed parameter model. Serialized form uses camelCase keys so exported
rules.json files keep the layout downstream allocators already read.
"""

import re
import uuid
from datetime import UTC, datetime
from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PositiveInt,
    TypeAdapter,
    computed_field,
    field_validator,
)
from pydantic.alias_generators import to_camel

from dataalchemist.models.entities import EntityType


class RuleType(str, Enum):
    """Supported rule kinds."""

    CO_RUN = "co-run"
    SLOT_RESTRICTION = "slot-restriction"
    LOAD_LIMIT = "load-limit"
    PHASE_WINDOW = "phase-window"
    PATTERN_MATCH = "pattern-match"
    PRECEDENCE_OVERRIDE = "precedence-override"


class RuleSource(str, Enum):
    """Where a rule came from."""

    MANUAL = "manual"
    AI_GENERATED = "ai-generated"
    AI_SUGGESTED = "ai-suggested"


def new_id(prefix: str) -> str:
    """Generate a short unique id such as ``rule_3f2a9c1d0b4e``."""
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Parameters per rule kind
# ---------------------------------------------------------------------------


class CoRunParameters(_CamelModel):
    task_ids: list[str] = Field(..., min_length=2, description="Tasks that co-occur")
    must_run_together: bool = True

    @field_validator("task_ids")
    @classmethod
    def distinct_task_ids(cls, v: list[str]) -> list[str]:
        if len(set(v)) < 2:
            raise ValueError("co-run needs at least two distinct task ids")
        return v


class SlotRestrictionParameters(_CamelModel):
    target_group: str = Field(..., min_length=1)
    group_type: Literal["client", "worker"] = "client"
    min_common_slots: PositiveInt = 1
    phases: list[PositiveInt] = Field(default_factory=list)


class LoadLimitParameters(_CamelModel):
    worker_group: str = Field(..., min_length=1)
    max_slots_per_phase: PositiveInt
    phases: list[PositiveInt] = Field(default_factory=list)


class PhaseWindowParameters(_CamelModel):
    # None applies the window to every task preferring a restricted phase
    task_id: str | None = None
    allowed_phases: list[PositiveInt] = Field(default_factory=list)
    restricted_phases: list[PositiveInt] = Field(default_factory=list)


class PatternMatchParameters(_CamelModel):
    pattern: str = Field(..., min_length=1, description="Regular expression")
    field: str = Field(..., min_length=1, description="Column the pattern applies to")
    entity_type: EntityType
    action: Literal["allow", "deny", "flag"] = "flag"

    @field_validator("pattern")
    @classmethod
    def pattern_compiles(cls, v: str) -> str:
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"invalid regular expression: {e}") from e
        return v


class PrecedenceOverrideParameters(_CamelModel):
    global_rule_id: str = Field(..., min_length=1)
    specific_rule_id: str = Field(..., min_length=1)
    priority: int = Field(default=1, ge=1)


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


class _RuleBase(_CamelModel):
    id: str = Field(default_factory=lambda: new_id("rule"))
    name: str = Field(..., min_length=1)
    description: str = ""
    enabled: bool = True
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    source: RuleSource = RuleSource.MANUAL


class CoRunRule(_RuleBase):
    type: Literal["co-run"] = "co-run"
    parameters: CoRunParameters


class SlotRestrictionRule(_RuleBase):
    type: Literal["slot-restriction"] = "slot-restriction"
    parameters: SlotRestrictionParameters


class LoadLimitRule(_RuleBase):
    type: Literal["load-limit"] = "load-limit"
    parameters: LoadLimitParameters


class PhaseWindowRule(_RuleBase):
    type: Literal["phase-window"] = "phase-window"
    parameters: PhaseWindowParameters


class PatternMatchRule(_RuleBase):
    type: Literal["pattern-match"] = "pattern-match"
    parameters: PatternMatchParameters


class PrecedenceOverrideRule(_RuleBase):
    type: Literal["precedence-override"] = "precedence-override"
    parameters: PrecedenceOverrideParameters


BusinessRule = Annotated[
    CoRunRule
    | SlotRestrictionRule
    | LoadLimitRule
    | PhaseWindowRule
    | PatternMatchRule
    | PrecedenceOverrideRule,
    Field(discriminator="type"),
]

_rule_adapter = TypeAdapter(BusinessRule)


def parse_rule(data: dict[str, Any]) -> BusinessRule:
    """Build the right rule variant from a plain dict (e.g. a form or rules.json).

    Raises:
        pydantic.ValidationError: If the type is unknown or parameters are invalid.
    """
    return _rule_adapter.validate_python(data)


# ---------------------------------------------------------------------------
# Recommendations
# ---------------------------------------------------------------------------


class DataContext(_CamelModel):
    """Evidence behind a recommendation."""

    affected_entities: list[str] = Field(default_factory=list)
    patterns: list[str] = Field(default_factory=list)


class RuleRecommendation(_CamelModel):
    """A mined candidate rule awaiting user acceptance."""

    id: str = Field(default_factory=lambda: new_id("rec"))
    confidence: float = Field(..., ge=0, le=1)
    description: str
    reasoning: str
    suggested_rule: BusinessRule
    data_context: DataContext = Field(default_factory=DataContext)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def type(self) -> str:
        return self.suggested_rule.type

    def to_rule(self) -> BusinessRule:
        """Promote to an accepted rule: fresh id and timestamp, ai-generated source."""
        return self.suggested_rule.model_copy(
            update={
                "id": new_id("rule"),
                "description": self.suggested_rule.description or self.description,
                "enabled": True,
                "created_at": datetime.now(UTC),
                "source": RuleSource.AI_GENERATED,
            },
            deep=True,
        )
