"""JSON export for rule sets and prioritization profiles.

Both documents carry a metadata block so downstream allocators can check
what they received without walking the payload.
"""

import json
import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any

from dataalchemist.config import settings
from dataalchemist.models import BusinessRule, Entity, PrioritizationProfile

logger = logging.getLogger(__name__)


def _dumps(document: dict[str, Any] | list[Any]) -> bytes:
    return json.dumps(document, indent=settings.export_json_indent or None).encode("utf-8")


def _now() -> str:
    return datetime.now(UTC).isoformat()


def build_rules_document(rules: Sequence[BusinessRule]) -> dict[str, Any]:
    """Enabled rules plus metadata describing the full rule set."""
    enabled = [r for r in rules if r.enabled]
    return {
        "rules": [r.model_dump(mode="json", by_alias=True) for r in enabled],
        "metadata": {
            "exportedAt": _now(),
            "totalRules": len(rules),
            "enabledRules": len(enabled),
            "ruleTypes": list(dict.fromkeys(r.type for r in rules)),
        },
    }


def export_rules_json(rules: Sequence[BusinessRule]) -> bytes:
    """Export the enabled rules as rules.json content."""
    document = build_rules_document(rules)
    logger.info(
        "Exported %d of %d rules to JSON",
        document["metadata"]["enabledRules"],
        document["metadata"]["totalRules"],
    )
    return _dumps(document)


def build_profile_document(profile: PrioritizationProfile) -> dict[str, Any]:
    return {
        "profile": profile.model_dump(mode="json"),
        "metadata": {
            "exportedAt": _now(),
            "totalCriteria": len(profile.criteria),
            "weightSum": profile.weight_sum,
        },
    }


def export_profile_json(profile: PrioritizationProfile) -> bytes:
    """Export a prioritization profile as prioritization.json content."""
    logger.info("Exported prioritization profile '%s' to JSON", profile.id)
    return _dumps(build_profile_document(profile))


def export_entities_json(records: Sequence[Entity]) -> bytes:
    """Export records as a JSON array of row objects."""
    return _dumps([r.to_row() for r in records])
