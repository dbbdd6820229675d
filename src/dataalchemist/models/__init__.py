"""Data Alchemist domain models."""

from dataalchemist.models.entities import (
    ENTITY_MODELS,
    ID_FIELDS,
    Client,
    DecodedJson,
    DecodedPhases,
    Entity,
    EntityType,
    Task,
    Worker,
    decode_json,
    decode_phases,
    split_list,
)
from dataalchemist.models.prioritization import (
    CriteriaCategory,
    PrioritizationCriteria,
    PrioritizationProfile,
)
from dataalchemist.models.rules import (
    BusinessRule,
    CoRunParameters,
    CoRunRule,
    DataContext,
    LoadLimitParameters,
    LoadLimitRule,
    PatternMatchParameters,
    PatternMatchRule,
    PhaseWindowParameters,
    PhaseWindowRule,
    PrecedenceOverrideParameters,
    PrecedenceOverrideRule,
    RuleRecommendation,
    RuleSource,
    RuleType,
    SlotRestrictionParameters,
    SlotRestrictionRule,
    new_id,
    parse_rule,
)
from dataalchemist.models.validation import (
    DATASET_ROW,
    Severity,
    ValidationIssue,
    ValidationSummary,
)

__all__ = [
    "DATASET_ROW",
    "ENTITY_MODELS",
    "ID_FIELDS",
    # Rules
    "BusinessRule",
    # Entities
    "Client",
    "CoRunParameters",
    "CoRunRule",
    # Prioritization
    "CriteriaCategory",
    "DataContext",
    "DecodedJson",
    "DecodedPhases",
    "Entity",
    "EntityType",
    "LoadLimitParameters",
    "LoadLimitRule",
    "PatternMatchParameters",
    "PatternMatchRule",
    "PhaseWindowParameters",
    "PhaseWindowRule",
    "PrecedenceOverrideParameters",
    "PrecedenceOverrideRule",
    "PrioritizationCriteria",
    "PrioritizationProfile",
    "RuleRecommendation",
    "RuleSource",
    "RuleType",
    # Validation
    "Severity",
    "SlotRestrictionParameters",
    "SlotRestrictionRule",
    "Task",
    "ValidationIssue",
    "ValidationSummary",
    "Worker",
    "decode_json",
    "decode_phases",
    "new_id",
    "parse_rule",
    "split_list",
]
