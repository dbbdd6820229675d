"""Tests for dataalchemist.ui.handlers (button/slider callbacks)."""

import pytest
from conftest import make_client, make_task, make_worker

from dataalchemist.models import CoRunParameters, CoRunRule
from dataalchemist.ui import handlers
from dataalchemist.workspace import Workspace


@pytest.fixture
def workspace(monkeypatch) -> Workspace:
    ws = Workspace()
    monkeypatch.setattr(handlers, "get_workspace", lambda: ws)
    return ws


@pytest.fixture
def shown(monkeypatch) -> list[str]:
    """Messages the callbacks left for the next run."""
    messages: list[str] = []
    monkeypatch.setattr(handlers, "set_action_message", messages.append)
    return messages


def _co_run_rule() -> CoRunRule:
    return CoRunRule(name="Pair", parameters=CoRunParameters(task_ids=["T1", "T2"]))


class TestRuleCallbacks:
    def test_toggle(self, workspace, shown):
        rule = workspace.add_rule(_co_run_rule())
        assert handlers.handle_toggle_rule(rule.id) is None
        assert not workspace.get_rule(rule.id).enabled
        assert shown == []

    def test_toggle_stale_rule(self, workspace, shown):
        assert handlers.handle_toggle_rule("rule_gone") == "That rule no longer exists."
        assert shown == ["That rule no longer exists."]

    def test_remove_stale_rule(self, workspace, shown):
        rule = workspace.add_rule(_co_run_rule())
        assert handlers.handle_remove_rule(rule.id) is None
        assert handlers.handle_remove_rule(rule.id) == "That rule no longer exists."
        assert workspace.rules == []
        assert len(shown) == 1


class TestRecommendationCallbacks:
    def test_double_accept(self, workspace, shown):
        workspace.set_clients([make_client(f"C{i}", RequestedTaskIDs="T1,T2") for i in range(3)])
        workspace.set_workers([make_worker()])
        workspace.set_tasks([make_task("T1"), make_task("T2")])
        rec_id = workspace.refresh_recommendations()[0].id

        assert handlers.handle_accept_recommendation(rec_id) is None
        assert handlers.handle_accept_recommendation(rec_id) == (
            "That recommendation is no longer available."
        )
        assert len(workspace.rules) == 1
        assert shown == ["That recommendation is no longer available."]

    def test_dismiss_unknown(self, workspace, shown):
        assert handlers.handle_dismiss_recommendation("rec_gone") is not None
        assert len(shown) == 1


class TestProfileCallbacks:
    def test_profile_change(self, workspace, shown):
        assert handlers.handle_profile_change("fair-distribution") is None
        assert workspace.active_profile_id == "fair-distribution"

    def test_unknown_profile(self, workspace, shown):
        message = handlers.handle_profile_change("gone")
        assert message == "That prioritization profile no longer exists."
        assert workspace.active_profile_id == "balanced"
        assert shown == [message]

    def test_unknown_criterion(self, workspace, shown):
        message = handlers.handle_weight_change("gone", 0.5)
        assert message == "That criterion is not part of the selected profile."
        assert shown == [message]
