"""Tests for dataalchemist.profile_presets."""

import pytest

from dataalchemist.exceptions import ConfigurationError
from dataalchemist.models import CriteriaCategory
from dataalchemist.profile_presets import (
    BASE_CRITERIA,
    PREVIEW_SCENARIOS,
    PROFILE_PRESETS,
    build_profile,
    get_default_profiles,
)


def _weights(profile_id: str) -> dict[str, float]:
    return {c.id: c.weight for c in build_profile(profile_id).criteria}


class TestBuildProfile:
    def test_balanced_matches_base(self):
        assert _weights("balanced") == {c["id"]: c["weight"] for c in BASE_CRITERIA}

    def test_balanced_is_default(self):
        assert build_profile("balanced").is_default
        assert not build_profile("fair-distribution").is_default

    def test_fulfillment_boosted(self):
        weights = _weights("maximize-fulfillment")
        assert weights["priority-level"] == pytest.approx(0.45)
        assert weights["task-urgency"] == pytest.approx(0.375)
        assert weights["worker-utilization"] == pytest.approx(0.14)

    def test_fair_distribution(self):
        weights = _weights("fair-distribution")
        assert weights["worker-utilization"] == pytest.approx(0.36)
        assert weights["priority-level"] == pytest.approx(0.24)

    def test_minimize_workload_boosts_efficiency(self):
        profile = build_profile("minimize-workload")
        totals = profile.weights_by_category()
        assert totals[CriteriaCategory.EFFICIENCY] == pytest.approx(0.35)
        assert CriteriaCategory.WORKLOAD not in totals

    def test_weights_within_bounds(self):
        for profile in get_default_profiles():
            assert all(0 <= c.weight <= 1 for c in profile.criteria)

    def test_unknown_profile(self):
        with pytest.raises(ConfigurationError) as exc_info:
            build_profile("aggressive")
        assert exc_info.value.config_key == "default_profile_id"


class TestGetDefaultProfiles:
    def test_all_presets_in_order(self):
        assert [p.id for p in get_default_profiles()] == list(PROFILE_PRESETS)

    def test_fresh_instances(self):
        first, second = get_default_profiles(), get_default_profiles()
        assert first == second
        assert first[0] is not second[0]


class TestPreviewScenarios:
    def test_scores_use_known_criteria(self):
        known = {c["id"] for c in BASE_CRITERIA}
        for scenario in PREVIEW_SCENARIOS:
            assert set(scenario["scores"]) == known
            assert all(0 <= s <= 1 for s in scenario["scores"].values())

    def test_balanced_score(self):
        scores = PREVIEW_SCENARIOS[0]["scores"]
        assert build_profile("balanced").score(scores) == pytest.approx(0.8075)

    def _top_scenario(self, profile_id: str) -> str:
        profile = build_profile(profile_id)
        return max(PREVIEW_SCENARIOS, key=lambda s: profile.score(s["scores"]))["name"]

    def test_profiles_rank_scenarios_differently(self):
        assert self._top_scenario("maximize-fulfillment") == "High priority client request"
        assert self._top_scenario("fair-distribution") == "Balanced workload distribution"
