"""Prioritization profile presets.

Edit this file to change the base criteria or how each preset biases them.

Structure: every preset starts from BASE_CRITERIA and multiplies each weight
by PROFILE_PRESETS[profile_id]["boost"] when the criterion's category is in
"categories", otherwise by "damp". Resulting weights are clamped to [0, 1].
"""

from dataalchemist.exceptions import ConfigurationError
from dataalchemist.models import (
    CriteriaCategory,
    PrioritizationCriteria,
    PrioritizationProfile,
)

BASE_CRITERIA: list[dict[str, str | float]] = [
    {
        "id": "priority-level",
        "name": "Client Priority Level",
        "weight": 0.3,
        "description": "Weight given to client priority levels (1-5)",
        "category": "fulfillment",
    },
    {
        "id": "task-urgency",
        "name": "Task Urgency",
        "weight": 0.25,
        "description": "Priority based on task deadlines and duration",
        "category": "fulfillment",
    },
    {
        "id": "worker-utilization",
        "name": "Worker Utilization",
        "weight": 0.2,
        "description": "Balance workload across available workers",
        "category": "distribution",
    },
    {
        "id": "skill-matching",
        "name": "Skill Matching",
        "weight": 0.15,
        "description": "Quality of skill match between workers and tasks",
        "category": "efficiency",
    },
    {
        "id": "phase-optimization",
        "name": "Phase Optimization",
        "weight": 0.1,
        "description": "Optimize task scheduling across phases",
        "category": "efficiency",
    },
]

PROFILE_PRESETS: dict[str, dict] = {
    "maximize-fulfillment": {
        "name": "Maximize Fulfillment",
        "description": "Prioritize completing as many high-priority client requests as possible",
        "categories": {CriteriaCategory.FULFILLMENT},
        "boost": 1.5,
        "damp": 0.7,
    },
    "balanced": {
        "name": "Balanced Approach",
        "description": "Balance between fulfillment, fair distribution, and efficiency",
        "categories": set(),
        "boost": 1.0,
        "damp": 1.0,
    },
    "fair-distribution": {
        "name": "Fair Distribution",
        "description": "Ensure equitable workload distribution across all workers",
        "categories": {CriteriaCategory.DISTRIBUTION},
        "boost": 1.8,
        "damp": 0.8,
    },
    "minimize-workload": {
        "name": "Minimize Workload",
        "description": "Optimize for minimal overall workload and maximum efficiency",
        "categories": {CriteriaCategory.WORKLOAD, CriteriaCategory.EFFICIENCY},
        "boost": 1.4,
        "damp": 0.9,
    },
}

DEFAULT_PROFILE_ID = "balanced"

# Example requests scored by the prioritization tab so weight changes have a
# visible effect. Scores are per criterion id, 0-1.
PREVIEW_SCENARIOS: list[dict] = [
    {
        "name": "High priority client request",
        "description": "Enterprise client with priority level 5 requesting urgent tasks",
        "scores": {
            "priority-level": 0.95,
            "task-urgency": 0.85,
            "worker-utilization": 0.6,
            "skill-matching": 0.8,
            "phase-optimization": 0.7,
        },
    },
    {
        "name": "Balanced workload distribution",
        "description": "Multiple medium priority requests with good skill coverage",
        "scores": {
            "priority-level": 0.6,
            "task-urgency": 0.7,
            "worker-utilization": 0.9,
            "skill-matching": 0.85,
            "phase-optimization": 0.8,
        },
    },
    {
        "name": "Efficiency optimization",
        "description": "Tasks with perfect skill matches and optimal phase alignment",
        "scores": {
            "priority-level": 0.5,
            "task-urgency": 0.6,
            "worker-utilization": 0.7,
            "skill-matching": 0.95,
            "phase-optimization": 0.9,
        },
    },
]


def build_profile(profile_id: str) -> PrioritizationProfile:
    """Build one preset profile from the base criteria.

    Raises:
        ConfigurationError: If the preset id is unknown.
    """
    preset = PROFILE_PRESETS.get(profile_id)
    if preset is None:
        raise ConfigurationError(
            message=f"Unknown prioritization profile: {profile_id}",
            config_key="default_profile_id",
            user_message=f"'{profile_id}' is not a known prioritization profile. "
            f"Choose one of: {', '.join(PROFILE_PRESETS)}",
        )

    criteria = []
    for base in BASE_CRITERIA:
        category = CriteriaCategory(base["category"])
        factor = preset["boost"] if category in preset["categories"] else preset["damp"]
        weight = min(1.0, max(0.0, float(base["weight"]) * factor))
        criteria.append(
            PrioritizationCriteria(**{**base, "weight": weight, "category": category})
        )

    return PrioritizationProfile(
        id=profile_id,
        name=preset["name"],
        description=preset["description"],
        criteria=criteria,
        is_default=profile_id == DEFAULT_PROFILE_ID,
    )


def get_default_profiles() -> list[PrioritizationProfile]:
    """All preset profiles, in display order."""
    return [build_profile(profile_id) for profile_id in PROFILE_PRESETS]
