"""Tests for dataalchemist.ingestion.uploads."""

import pytest

from dataalchemist.exceptions import ExtractionError
from dataalchemist.ingestion import detect_format, load_file
from dataalchemist.models import EntityType


class TestDetectFormat:
    @pytest.mark.parametrize(
        ("filename", "expected"),
        [("clients.csv", "csv"), ("Workers.XLSX", "xlsx"), ("my.tasks.csv", "csv")],
    )
    def test_supported(self, filename, expected):
        assert detect_format(filename) == expected

    @pytest.mark.parametrize("filename", ["legacy.xls", "data.json", "README"])
    def test_unsupported(self, filename):
        with pytest.raises(ExtractionError) as exc_info:
            detect_format(filename)
        assert filename in exc_info.value.user_message


class TestLoadFile:
    def test_csv(self):
        records, file_format = load_file(
            "tasks.csv", b"TaskID,TaskName\nT1,Build\n", EntityType.TASKS
        )
        assert file_format == "csv"
        assert records[0].task_id == "T1"

    def test_unsupported_not_parsed(self):
        with pytest.raises(ExtractionError):
            load_file("tasks.txt", b"TaskID\nT1\n", EntityType.TASKS)
