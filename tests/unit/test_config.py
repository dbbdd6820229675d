"""Tests for dataalchemist.config."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from dataalchemist.config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for var in (
            "LOG_LEVEL",
            "DEFAULT_PROFILE_ID",
            "DEFAULT_RULE_PHASES",
            "MAX_UPLOAD_ROWS",
            "EXPORT_JSON_INDENT",
        ):
            monkeypatch.delenv(var, raising=False)
        s = Settings(_env_file=None)
        assert s.log_level == "INFO"
        assert s.default_profile_id == "balanced"
        assert s.default_rule_phases == [1, 2, 3, 4, 5, 6]
        assert s.max_upload_rows == 10_000
        assert s.export_json_indent == 2

    def test_env_override_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("max_upload_rows", "50")
        monkeypatch.setenv("DEFAULT_PROFILE_ID", "fair-distribution")
        s = Settings(_env_file=None)
        assert s.max_upload_rows == 50
        assert s.default_profile_id == "fair-distribution"

    def test_list_from_env(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_RULE_PHASES", "[1,2,3]")
        assert Settings(_env_file=None).default_rule_phases == [1, 2, 3]

    def test_rejects_zero_row_limit(self):
        with pytest.raises(PydanticValidationError):
            Settings(_env_file=None, max_upload_rows=0)

    def test_rejects_large_indent(self):
        with pytest.raises(PydanticValidationError):
            Settings(_env_file=None, export_json_indent=20)
