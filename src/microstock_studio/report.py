"""Validation report output: console text, CSV and Excel."""

import logging
from pathlib import Path
from typing import Any, Iterable, Sequence

import pandas as pd

from microstock_studio.state import MetadataRecord, Severity, ValidationResult

logger = logging.getLogger(__name__)

REPORT_COLUMNS = [
    "source",
    "title",
    "keyword_count",
    "keywords",
    "score",
    "band",
    "passed",
    "errors",
    "warnings",
    "infos",
    "issues",
    "recommendations",
]

_SEVERITY_MARKS = {
    Severity.ERROR: "✗",
    Severity.WARNING: "!",
    Severity.INFO: "i",
}


def format_keywords(keywords: Iterable[str]) -> str:
    """Keywords in the comma-separated form stock sites accept on paste."""
    return ", ".join(keywords)


def build_report_rows(
    records: Sequence[MetadataRecord], results: Sequence[ValidationResult]
) -> list[dict[str, Any]]:
    """Flatten records and their results into one row per record.

    Raises:
        ValueError: If records and results differ in length
    """
    if len(records) != len(results):
        raise ValueError(
            f"Got {len(records)} records but {len(results)} results"
        )

    rows = []
    for record, result in zip(records, results):
        counts = {severity: 0 for severity in Severity}
        for issue in result.issues:
            counts[issue.severity] += 1
        rows.append(
            {
                "source": record.source,
                "title": record.metadata.title,
                "keyword_count": len(record.metadata.keywords),
                "keywords": format_keywords(record.metadata.keywords),
                "score": result.score,
                "band": result.band.value,
                "passed": result.passed,
                "errors": counts[Severity.ERROR],
                "warnings": counts[Severity.WARNING],
                "infos": counts[Severity.INFO],
                "issues": " | ".join(
                    f"[{i.severity.value}] {i.message}" for i in result.issues
                ),
                "recommendations": " | ".join(result.recommendations),
            }
        )
    return rows


def write_report(rows: list[dict[str, Any]], path: str | Path) -> Path:
    """Write report rows to a .csv or .xlsx file.

    Raises:
        ValueError: If the suffix is not .csv or .xlsx, or the file cannot be written
    """
    path = Path(path)
    suffix = path.suffix.lower()
    df = pd.DataFrame(rows, columns=REPORT_COLUMNS)

    if suffix not in (".csv", ".xlsx"):
        raise ValueError(f"Unsupported report type: {path.suffix!r}. Use .csv or .xlsx")

    try:
        if suffix == ".csv":
            df.to_csv(path, index=False)
        else:
            df.to_excel(path, index=False, engine="openpyxl")
    except OSError as e:
        raise ValueError(f"Cannot write report to {path}: {e}") from e

    logger.info("Wrote report with %d rows to %s", len(rows), path)
    return path


def format_result(source: str, result: ValidationResult) -> str:
    """Render one result for the console."""
    status = "PASS" if result.passed else "FAIL"
    lines = [f"{source}: {result.score}/100 ({result.band.value}) {status}"]
    for issue in result.issues:
        mark = _SEVERITY_MARKS[issue.severity]
        lines.append(f"  {mark} [{issue.severity.value}] {issue.message}")
    for rec in result.recommendations:
        lines.append(f"  → {rec}")
    return "\n".join(lines)
