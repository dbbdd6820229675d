"""Tests for dataalchemist.export.csv_export."""

import csv
import io

from conftest import make_client, make_task

from dataalchemist.export import export_entities_csv, export_issues_csv
from dataalchemist.ingestion import load_csv
from dataalchemist.models import DATASET_ROW, EntityType, Severity, ValidationIssue


def _rows(content: bytes) -> list[list[str]]:
    return list(csv.reader(io.StringIO(content.decode("utf-8"))))


class TestExportEntitiesCsv:
    def test_returns_bytes(self):
        assert isinstance(export_entities_csv([make_task()]), bytes)

    def test_header_uses_column_names(self):
        rows = _rows(export_entities_csv([make_client()]))
        assert rows[0] == [
            "ClientID",
            "ClientName",
            "PriorityLevel",
            "RequestedTaskIDs",
            "GroupTag",
            "AttributesJSON",
        ]

    def test_commas_and_quotes_escaped(self):
        client = make_client(RequestedTaskIDs="T1,T2", AttributesJSON='{"budget": 100}')
        rows = _rows(export_entities_csv([client]))
        assert rows[1][3] == "T1,T2"
        assert rows[1][5] == '{"budget": 100}'

    def test_reloads_to_same_records(self):
        clients = [
            make_client("C1", RequestedTaskIDs="T1,T2", AttributesJSON='{"vip": true}'),
            make_client("C2", PriorityLevel=1),
        ]
        reloaded = load_csv(export_entities_csv(clients), EntityType.CLIENTS)
        assert reloaded == clients

    def test_empty(self):
        assert export_entities_csv([]) == b""


class TestExportIssuesCsv:
    def test_rows(self):
        issues = [
            ValidationIssue(
                id="issue_1",
                entity_type=EntityType.WORKERS,
                row_index=0,
                field="AvailableSlots",
                message="AvailableSlots must be a valid JSON array",
                severity=Severity.ERROR,
                suggestion="Use [1,2,3]",
            ),
            ValidationIssue(
                id="issue_2",
                entity_type=EntityType.CLIENTS,
                row_index=DATASET_ROW,
                field="ClientID",
                message="Duplicate ClientIDs found: C1",
                severity=Severity.ERROR,
            ),
        ]
        rows = _rows(export_issues_csv(issues))
        assert rows[0] == ["ID", "Entity", "Row", "Field", "Severity", "Message", "Suggestion"]
        assert rows[1] == [
            "issue_1",
            "workers",
            "1",
            "AvailableSlots",
            "error",
            "AvailableSlots must be a valid JSON array",
            "Use [1,2,3]",
        ]
        # Dataset-level issues have no row number
        assert rows[2][2] == ""
        assert rows[2][6] == ""

    def test_header_only_when_no_issues(self):
        assert len(_rows(export_issues_csv([]))) == 1
