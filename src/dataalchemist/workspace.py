"""Workspace: everything one user session holds.

The caller owns the Workspace and passes it around explicitly; validation and
mining stay pure functions over the collections it holds. The Streamlit UI
keeps one instance in st.session_state.
"""

import logging
from dataclasses import dataclass, field
from typing import Literal

from dataalchemist.analysis import mine_recommendations
from dataalchemist.config import settings
from dataalchemist.exceptions import ProfileNotFoundError, RuleNotFoundError
from dataalchemist.models import (
    BusinessRule,
    Client,
    EntityType,
    PrioritizationProfile,
    RuleRecommendation,
    Task,
    ValidationIssue,
    Worker,
    parse_rule,
)
from dataalchemist.profile_presets import get_default_profiles
from dataalchemist.validation import summarize_issues, validate

logger = logging.getLogger(__name__)

FileFormat = Literal["csv", "xlsx"]


@dataclass
class Workspace:
    """Datasets, validation results, rules and prioritization for one session."""

    clients: list[Client] = field(default_factory=list)
    workers: list[Worker] = field(default_factory=list)
    tasks: list[Task] = field(default_factory=list)
    original_formats: dict[EntityType, FileFormat] = field(default_factory=dict)

    issues: list[ValidationIssue] = field(default_factory=list)
    rules: list[BusinessRule] = field(default_factory=list)
    recommendations: list[RuleRecommendation] = field(default_factory=list)

    profiles: list[PrioritizationProfile] = field(default_factory=get_default_profiles)
    active_profile_id: str = field(default_factory=lambda: settings.default_profile_id)

    # --- Datasets ---

    def set_clients(self, clients: list[Client], file_format: FileFormat | None = None) -> None:
        self.clients = list(clients)
        self._record_format(EntityType.CLIENTS, file_format)

    def set_workers(self, workers: list[Worker], file_format: FileFormat | None = None) -> None:
        self.workers = list(workers)
        self._record_format(EntityType.WORKERS, file_format)

    def set_tasks(self, tasks: list[Task], file_format: FileFormat | None = None) -> None:
        self.tasks = list(tasks)
        self._record_format(EntityType.TASKS, file_format)

    def _record_format(self, entity_type: EntityType, file_format: FileFormat | None) -> None:
        if file_format is not None:
            self.original_formats[entity_type] = file_format
        logger.info("Loaded %s (format: %s)", entity_type.value, file_format or "unchanged")

    def records(self, entity_type: EntityType) -> list[Client] | list[Worker] | list[Task]:
        return {
            EntityType.CLIENTS: self.clients,
            EntityType.WORKERS: self.workers,
            EntityType.TASKS: self.tasks,
        }[entity_type]

    @property
    def has_data(self) -> bool:
        return bool(self.clients or self.workers or self.tasks)

    # --- Validation & recommendations ---

    def run_validation(self) -> list[ValidationIssue]:
        self.issues = validate(self.clients, self.workers, self.tasks)
        return self.issues

    def is_allocation_ready(self) -> bool:
        """True once data is loaded and the latest validation found no errors."""
        return self.has_data and summarize_issues(self.issues).is_allocation_ready

    def refresh_recommendations(self) -> list[RuleRecommendation]:
        """Replace pending recommendations with a fresh mining pass."""
        self.recommendations = mine_recommendations(self.clients, self.workers, self.tasks)
        return self.recommendations

    def _find_recommendation(self, recommendation_id: str) -> RuleRecommendation:
        for rec in self.recommendations:
            if rec.id == recommendation_id:
                return rec
        raise RuleNotFoundError(
            message=f"Recommendation not pending: {recommendation_id}",
            rule_id=recommendation_id,
            user_message="That recommendation is no longer available.",
        )

    def accept_recommendation(self, recommendation_id: str) -> BusinessRule:
        """Promote a pending recommendation to a rule and drop it from the pending list.

        Raises:
            RuleNotFoundError: If the recommendation is not pending (e.g. already accepted).
        """
        rec = self._find_recommendation(recommendation_id)
        rule = rec.to_rule()
        self.recommendations = [r for r in self.recommendations if r.id != recommendation_id]
        self.rules.append(rule)
        logger.info("Accepted %s recommendation as rule %s", rec.type, rule.id)
        return rule

    def dismiss_recommendation(self, recommendation_id: str) -> None:
        """Discard a pending recommendation.

        Raises:
            RuleNotFoundError: If the recommendation is not pending.
        """
        self._find_recommendation(recommendation_id)
        self.recommendations = [r for r in self.recommendations if r.id != recommendation_id]

    # --- Rules ---

    def get_rule(self, rule_id: str) -> BusinessRule:
        for rule in self.rules:
            if rule.id == rule_id:
                return rule
        raise RuleNotFoundError(
            message=f"Rule not found: {rule_id}",
            rule_id=rule_id,
            user_message="That rule no longer exists.",
        )

    def add_rule(self, rule: BusinessRule) -> BusinessRule:
        self.rules.append(rule)
        logger.info("Added %s rule %s (%s)", rule.type, rule.id, rule.source.value)
        return rule

    def update_rule(self, rule_id: str, **updates) -> BusinessRule:
        """Apply field updates to a rule, re-validating the result.

        Raises:
            RuleNotFoundError: If the rule does not exist.
            pydantic.ValidationError: If the updates produce an invalid rule.
        """
        current = self.get_rule(rule_id)
        data = current.model_dump()
        data.update(updates)
        data["id"] = rule_id
        updated = parse_rule(data)
        self.rules = [updated if r.id == rule_id else r for r in self.rules]
        return updated

    def remove_rule(self, rule_id: str) -> None:
        self.get_rule(rule_id)
        self.rules = [r for r in self.rules if r.id != rule_id]

    def toggle_rule(self, rule_id: str) -> BusinessRule:
        rule = self.get_rule(rule_id)
        return self.update_rule(rule_id, enabled=not rule.enabled)

    @property
    def enabled_rules(self) -> list[BusinessRule]:
        return [r for r in self.rules if r.enabled]

    # --- Prioritization ---

    def get_profile(self, profile_id: str) -> PrioritizationProfile:
        for profile in self.profiles:
            if profile.id == profile_id:
                return profile
        raise ProfileNotFoundError(
            message=f"Profile not found: {profile_id}",
            profile_id=profile_id,
            user_message="That prioritization profile no longer exists.",
        )

    @property
    def active_profile(self) -> PrioritizationProfile:
        return self.get_profile(self.active_profile_id)

    def set_active_profile(self, profile_id: str) -> None:
        self.get_profile(profile_id)
        self.active_profile_id = profile_id

    def update_criterion_weight(
        self, criterion_id: str, weight: float, profile_id: str | None = None
    ) -> PrioritizationProfile:
        """Reweight one criterion of a profile (the active one by default)."""
        target = profile_id or self.active_profile_id
        updated = self.get_profile(target).with_weight(criterion_id, weight)
        self.profiles = [updated if p.id == target else p for p in self.profiles]
        return updated
