"""Metadata loader for Microstock Studio.

Turns raw metadata (the JSON shape returned by the metadata pass, or rows of
a CSV/Excel sheet) into ImageMetadata records.

Missing optional fields become empty defaults here, once, so the validator
never sees None. A field of the wrong type fails fast with MetadataParseError.
"""

import json
import logging
import zipfile
from pathlib import Path
from typing import Any, Optional

import pandas as pd
from openpyxl.utils.exceptions import InvalidFileException
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from microstock_studio.state import (
    QUALITY_PASS_THRESHOLD,
    ContentType,
    ImageMetadata,
    KeywordAnalysis,
    MetadataRecord,
    QualityAssessment,
)

logger = logging.getLogger(__name__)

SHEET_SUFFIXES = {".csv", ".xlsx"}


class MetadataParseError(ValueError):
    """Raw metadata does not have the expected shape"""

    pass


def _split_keywords(value: Any) -> Any:
    """Accept keyword lists or a comma-separated string"""
    if value is None:
        return []
    if isinstance(value, str):
        return [k.strip() for k in value.split(",") if k.strip()]
    return value


class KeywordAnalysisPayload(BaseModel):
    broad: list[str] = Field(default_factory=list)
    medium: list[str] = Field(default_factory=list)
    niche: list[str] = Field(default_factory=list)
    trending: list[str] = Field(default_factory=list)

    @field_validator("broad", "medium", "niche", "trending", mode="before")
    @classmethod
    def _split_buckets(cls, value: Any) -> Any:
        return _split_keywords(value)


class MetadataPayload(BaseModel):
    """JSON shape produced by the metadata pass"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str = ""
    description: str = ""
    keywords: list[str] = Field(default_factory=list)
    keyword_analysis: Optional[KeywordAnalysisPayload] = Field(
        default=None, alias="keywordAnalysis"
    )
    category: str = ""
    content_type: ContentType = Field(
        default=ContentType.PHOTOGRAPHY, alias="contentType"
    )
    is_ai: bool = Field(default=False, alias="isAI")
    author: str = ""

    @field_validator("title", "description", "category", "author", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("content_type", mode="before")
    @classmethod
    def _default_content_type(cls, value: Any) -> Any:
        return ContentType.PHOTOGRAPHY if value is None or value == "" else value

    @field_validator("is_ai", mode="before")
    @classmethod
    def _default_is_ai(cls, value: Any) -> Any:
        return False if value is None or value == "" else value

    @field_validator("keywords", mode="before")
    @classmethod
    def _split_keyword_string(cls, value: Any) -> Any:
        return _split_keywords(value)

    def to_metadata(self) -> ImageMetadata:
        analysis = None
        if self.keyword_analysis is not None:
            analysis = KeywordAnalysis(
                broad=tuple(self.keyword_analysis.broad),
                medium=tuple(self.keyword_analysis.medium),
                niche=tuple(self.keyword_analysis.niche),
                trending=tuple(self.keyword_analysis.trending),
            )
        return ImageMetadata(
            title=self.title,
            description=self.description,
            keywords=tuple(self.keywords),
            category=self.category,
            content_type=self.content_type,
            is_ai=self.is_ai,
            author=self.author,
            keyword_analysis=analysis,
        )


class QualityAssessmentPayload(BaseModel):
    """JSON shape produced by the vision quality pass"""

    model_config = ConfigDict(extra="ignore")

    score: int = Field(ge=0, le=100)
    issues: list[str] = Field(default_factory=list)
    explanation: str = ""
    microstock_pass: Optional[bool] = None

    def to_assessment(self) -> QualityAssessment:
        passed = self.microstock_pass
        if passed is None:
            passed = self.score >= QUALITY_PASS_THRESHOLD
        return QualityAssessment(
            score=self.score,
            issues=tuple(self.issues),
            explanation=self.explanation,
            microstock_pass=passed,
        )


def parse_metadata(raw: dict[str, Any]) -> ImageMetadata:
    """Parse one raw metadata object.

    Args:
        raw: Dictionary using the metadata pass field names
            (title, description, keywords, keywordAnalysis, category,
            contentType, isAI, author)

    Returns:
        ImageMetadata with empty defaults for missing fields

    Raises:
        MetadataParseError: If raw is not an object or a field has the wrong type
    """
    if not isinstance(raw, dict):
        raise MetadataParseError(
            f"Metadata must be an object, got {type(raw).__name__}"
        )
    try:
        return MetadataPayload.model_validate(raw).to_metadata()
    except ValidationError as e:
        raise MetadataParseError(f"Invalid metadata: {e}") from e


def parse_quality_assessment(raw: dict[str, Any]) -> QualityAssessment:
    """Parse the quality pass output; microstock_pass defaults to score >= 80"""
    if not isinstance(raw, dict):
        raise MetadataParseError(
            f"Quality assessment must be an object, got {type(raw).__name__}"
        )
    try:
        return QualityAssessmentPayload.model_validate(raw).to_assessment()
    except ValidationError as e:
        raise MetadataParseError(f"Invalid quality assessment: {e}") from e


def _clean_cell(value: Any) -> Any:
    """Convert NaN to None and numpy scalars to Python values"""
    if pd.isna(value):
        return None
    if hasattr(value, "item"):
        return value.item()
    return value


def _read_sheet(path: Path) -> pd.DataFrame:
    try:
        if path.suffix.lower() == ".csv":
            return pd.read_csv(path, dtype=str)
        return pd.read_excel(path, engine="openpyxl", dtype=str)
    except (OSError, zipfile.BadZipFile, InvalidFileException) as e:
        raise ValueError(f"Cannot read {path.name}: {e}") from e


def load_metadata_file(path: str | Path) -> list[MetadataRecord]:
    """Load every metadata record from a JSON, CSV or Excel file.

    JSON files hold one metadata object or a list of them. Sheets hold one
    record per row, with keywords as a comma-separated string.

    Args:
        path: Path to a .json, .csv or .xlsx file

    Returns:
        List of MetadataRecord, in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the suffix is unsupported or the file cannot be read
        MetadataParseError: If a record has the wrong shape
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Metadata file not found: {path}")

    suffix = path.suffix.lower()
    records: list[MetadataRecord] = []

    if suffix == ".json":
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path.name}: {e}") from e
        except OSError as e:
            raise ValueError(f"Cannot read {path.name}: {e}") from e
        items = data if isinstance(data, list) else [data]
        for i, item in enumerate(items):
            source = f"{path.name}#{i}"
            try:
                records.append(MetadataRecord(source, parse_metadata(item)))
            except MetadataParseError as e:
                raise MetadataParseError(f"{source}: {e}") from e
    elif suffix in SHEET_SUFFIXES:
        df = _read_sheet(path)
        for i, row in enumerate(df.to_dict(orient="records")):
            # +2: header is row 1
            source = f"{path.name}:row {i + 2}"
            cleaned = {k: _clean_cell(v) for k, v in row.items()}
            try:
                records.append(MetadataRecord(source, parse_metadata(cleaned)))
            except MetadataParseError as e:
                raise MetadataParseError(f"{source}: {e}") from e
    else:
        raise ValueError(
            f"Unsupported metadata file type: {path.suffix!r}. "
            f"Use .json, .csv or .xlsx"
        )

    logger.info("Loaded %d metadata records from %s", len(records), path.name)
    return records
