# Tests for report rows, files and console output

import pandas as pd
import pytest

from conftest import make_keywords, make_metadata
from microstock_studio.report import (
    REPORT_COLUMNS,
    build_report_rows,
    format_keywords,
    format_result,
    write_report,
)
from microstock_studio.state import MetadataRecord
from microstock_studio.validators import validate_metadata


@pytest.fixture
def records() -> list[MetadataRecord]:
    return [
        MetadataRecord("clean.json#0", make_metadata()),
        MetadataRecord(
            "weak.json#0",
            make_metadata(keywords=make_keywords(25), is_ai=False, author="Studio"),
        ),
    ]


class TestFormatKeywords:
    def test_comma_separated(self):
        assert format_keywords(["lake", "mountain", "forest"]) == "lake, mountain, forest"

    def test_empty(self):
        assert format_keywords([]) == ""


class TestBuildReportRows:
    """One flat row per record"""

    def test_rows(self, records):
        results = [validate_metadata(r.metadata) for r in records]
        rows = build_report_rows(records, results)
        assert len(rows) == 2
        assert set(rows[0]) == set(REPORT_COLUMNS)

        clean, weak = rows
        assert clean["score"] == 100
        assert clean["band"] == "good"
        assert clean["passed"] is True
        assert clean["issues"] == ""

        # 100 - 7.5 - 10 = 82.5 -> 83
        assert weak["score"] == 83
        assert weak["band"] == "fair"
        assert weak["passed"] is False
        assert weak["keyword_count"] == 25
        assert weak["keywords"] == format_keywords(records[1].metadata.keywords)
        assert weak["keywords"].startswith("mountain scene 0, mountain scene 1, ")
        assert (weak["errors"], weak["warnings"], weak["infos"]) == (1, 1, 1)
        assert weak["issues"].startswith("[error] Found only 25 keywords")
        assert "Add 5 more keywords" in weak["recommendations"]

    def test_length_mismatch(self, records):
        with pytest.raises(ValueError):
            build_report_rows(records, [])


class TestWriteReport:
    """CSV and Excel output"""

    def test_csv(self, tmp_path, records):
        rows = build_report_rows(records, [validate_metadata(r.metadata) for r in records])
        path = write_report(rows, tmp_path / "report.csv")
        df = pd.read_csv(path)
        assert list(df.columns) == REPORT_COLUMNS
        assert df["score"].tolist() == [100, 83]

    def test_xlsx(self, tmp_path, records):
        rows = build_report_rows(records, [validate_metadata(r.metadata) for r in records])
        path = write_report(rows, tmp_path / "report.xlsx")
        df = pd.read_excel(path, engine="openpyxl")
        assert df["source"].tolist() == ["clean.json#0", "weak.json#0"]

    def test_unsupported_suffix(self, tmp_path):
        with pytest.raises(ValueError, match="Unsupported"):
            write_report([], tmp_path / "report.txt")

    def test_unwritable_path(self, tmp_path):
        with pytest.raises(ValueError, match="Cannot write report"):
            write_report([], tmp_path / "missing" / "report.xlsx")


class TestFormatResult:
    def test_pass(self, records):
        text = format_result("clean.json#0", validate_metadata(records[0].metadata))
        assert text == "clean.json#0: 100/100 (good) PASS"

    def test_fail_lists_issues_and_recommendations(self, records):
        text = format_result("weak.json#0", validate_metadata(records[1].metadata))
        lines = text.splitlines()
        assert lines[0] == "weak.json#0: 83/100 (fair) FAIL"
        assert any("[warning] isAI flag is false" in line for line in lines)
        assert lines[-1].endswith("Add 5 more keywords to reach the minimum of 30.")
