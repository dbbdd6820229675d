"""Tests for dataalchemist.ingestion.excel_loader."""

from io import BytesIO

import pytest
from openpyxl import Workbook

from dataalchemist.exceptions import ExtractionError
from dataalchemist.ingestion import list_sheets, load_excel, load_excel_from_bytes
from dataalchemist.models import EntityType


def _create_xlsx(rows: list[list], sheet_name: str = "Sheet1") -> bytes:
    """Create a minimal xlsx file in memory from row data."""
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name
    for row in rows:
        ws.append(row)
    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()


TASK_ROWS = [
    ["TaskID", "TaskName", "Category", "Duration", "RequiredSkills", "PreferredPhases", "MaxConcurrent"],
    ["T1", "Build API", "development", 2, "python", "1-3", 1],
    [None, None, None, None, None, None, None],
    ["T2", "Design UI", "design", 1, "figma", 4, 2],
]


class TestLoadExcel:
    def test_load_from_bytes(self):
        tasks = load_excel(_create_xlsx(TASK_ROWS), EntityType.TASKS)
        assert [t.task_id for t in tasks] == ["T1", "T2"]
        assert tasks[0].duration == 2
        assert tasks[0].preferred_phases == "[1,2,3]"
        assert tasks[1].preferred_phases == "[4]"
        assert tasks[1].max_concurrent == 2

    def test_named_sheet(self):
        xlsx = _create_xlsx(TASK_ROWS, sheet_name="Tasks")
        assert len(load_excel(xlsx, EntityType.TASKS, sheet_name="Tasks")) == 2

    def test_missing_sheet(self):
        with pytest.raises(ExtractionError):
            load_excel(_create_xlsx(TASK_ROWS), EntityType.TASKS, sheet_name="Nope")

    def test_file_not_found(self):
        with pytest.raises(ExtractionError):
            load_excel("/nonexistent/path/tasks.xlsx", EntityType.TASKS)

    def test_not_a_workbook(self):
        with pytest.raises(ExtractionError):
            load_excel(b"TaskID,TaskName\nT1,x\n", EntityType.TASKS)

    def test_empty_sheet(self):
        with pytest.raises(ExtractionError):
            load_excel(_create_xlsx([]), EntityType.TASKS)

    def test_header_aliases(self):
        rows = [["id", "name", "priority"], ["C1", "Acme", 4]]
        client = load_excel(_create_xlsx(rows), EntityType.CLIENTS)[0]
        assert client.client_id == "C1"
        assert client.priority_level == 4
        assert client.group_tag == "default"

    def test_convenience_function(self):
        assert len(load_excel_from_bytes(_create_xlsx(TASK_ROWS), EntityType.TASKS)) == 2


class TestListSheets:
    def test_returns_sheet_names(self):
        wb = Workbook()
        wb.active.title = "Clients"
        wb.create_sheet("Workers")
        wb.create_sheet("Tasks")
        buf = BytesIO()
        wb.save(buf)
        assert list_sheets(buf.getvalue()) == ["Clients", "Workers", "Tasks"]

    def test_invalid_file(self):
        with pytest.raises(ExtractionError):
            list_sheets(b"not a workbook")
