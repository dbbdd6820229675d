"""Tests for dataalchemist.export.bundle."""

import json

import pytest
from conftest import make_client, make_worker

from dataalchemist.exceptions import ExportError
from dataalchemist.export import ExportConfiguration, build_export, export_entities
from dataalchemist.models import CoRunParameters, CoRunRule
from dataalchemist.workspace import Workspace


@pytest.fixture
def workspace():
    ws = Workspace()
    ws.set_clients([make_client("C1"), make_client("C2")], "csv")
    ws.set_workers([make_worker("W1")], "xlsx")
    ws.add_rule(CoRunRule(name="Pair", parameters=CoRunParameters(task_ids=["T1", "T2"])))
    return ws


def _by_name(files):
    return {f.filename: f for f in files}


class TestBuildExport:
    def test_default_configuration(self, workspace):
        files = build_export(ExportConfiguration(), workspace)
        assert [f.filename for f in files] == [
            "clients_cleaned.csv",
            "workers_cleaned.xlsx",
            "rules.json",
            "prioritization.json",
        ]
        by_name = _by_name(files)
        assert by_name["clients_cleaned.csv"].mime_type == "text/csv"
        assert by_name["rules.json"].mime_type == "application/json"

    def test_format_override(self, workspace):
        files = build_export(ExportConfiguration(format="json"), workspace)
        names = [f.filename for f in files]
        assert "clients_cleaned.json" in names
        assert "workers_cleaned.json" in names

    def test_datasets_without_format_default_to_csv(self):
        ws = Workspace()
        ws.set_tasks([])
        ws.set_clients([make_client()])
        files = build_export(ExportConfiguration(include_rules=False, include_prioritization=False), ws)
        assert [f.filename for f in files] == ["clients_cleaned.csv"]

    def test_exclusions(self, workspace):
        config = ExportConfiguration(
            include_cleaned_data=False,
            include_rules=False,
            include_prioritization=False,
        )
        assert build_export(config, workspace) == []

    def test_prioritization_uses_active_profile(self, workspace):
        workspace.set_active_profile("fair-distribution")
        files = _by_name(build_export(ExportConfiguration(include_cleaned_data=False), workspace))
        document = json.loads(files["prioritization.json"].content)
        assert document["profile"]["id"] == "fair-distribution"

    def test_rules_file_contents(self, workspace):
        files = _by_name(build_export(ExportConfiguration(), workspace))
        document = json.loads(files["rules.json"].content)
        assert document["metadata"]["enabledRules"] == 1

    def test_unsupported_format(self, workspace):
        with pytest.raises(ExportError):
            build_export(ExportConfiguration(format="pdf"), workspace)


class TestExportEntities:
    def test_unsupported(self):
        with pytest.raises(ExportError) as exc_info:
            export_entities([make_client()], "xml")
        assert exc_info.value.format == "xml"
