"""Prioritization criteria and profile models."""

from enum import Enum

from pydantic import BaseModel, Field

from dataalchemist.exceptions import ProfileNotFoundError


class CriteriaCategory(str, Enum):
    """What a criterion optimizes for."""

    FULFILLMENT = "fulfillment"
    DISTRIBUTION = "distribution"
    WORKLOAD = "workload"
    EFFICIENCY = "efficiency"


class PrioritizationCriteria(BaseModel):
    """A single weighted scoring criterion."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    weight: float = Field(..., ge=0, le=1, description="Relative importance (0-1)")
    description: str = ""
    category: CriteriaCategory


class PrioritizationProfile(BaseModel):
    """A named set of criteria weights."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    description: str = ""
    criteria: list[PrioritizationCriteria] = Field(default_factory=list)
    is_default: bool = False

    @property
    def weight_sum(self) -> float:
        return sum(c.weight for c in self.criteria)

    def weights_by_category(self) -> dict[CriteriaCategory, float]:
        """Total weight per category (categories without criteria are omitted)."""
        totals: dict[CriteriaCategory, float] = {}
        for c in self.criteria:
            totals[c.category] = totals.get(c.category, 0.0) + c.weight
        return totals

    def get_criterion(self, criterion_id: str) -> PrioritizationCriteria | None:
        for c in self.criteria:
            if c.id == criterion_id:
                return c
        return None

    def with_weight(self, criterion_id: str, weight: float) -> "PrioritizationProfile":
        """Return a copy with one criterion reweighted.

        Raises:
            ProfileNotFoundError: If the criterion is not part of this profile.
        """
        if self.get_criterion(criterion_id) is None:
            raise ProfileNotFoundError(
                message=f"Criterion {criterion_id} not in profile {self.id}",
                profile_id=self.id,
                criterion_id=criterion_id,
                user_message="That criterion is not part of the selected profile.",
            )
        criteria = [
            c.model_copy(update={"weight": weight}) if c.id == criterion_id else c
            for c in self.criteria
        ]
        # Revalidate so out-of-range weights are rejected
        return PrioritizationProfile.model_validate(
            {**self.model_dump(), "criteria": [c.model_dump() for c in criteria]}
        )

    def score(self, scores: dict[str, float]) -> float:
        """Weighted sum of per-criterion scores (0-1); missing criteria score 0."""
        return sum(scores.get(c.id, 0.0) * c.weight for c in self.criteria)

    def normalized(self) -> "PrioritizationProfile":
        """Return a copy whose weights sum to 1 (unchanged if all weights are 0)."""
        total = self.weight_sum
        if total == 0:
            return self.model_copy(deep=True)
        criteria = [c.model_copy(update={"weight": c.weight / total}) for c in self.criteria]
        return self.model_copy(update={"criteria": criteria})
