# ImageMetadata, ValidationIssue and ValidationResult definitions
# Data structures shared by the loader, the validator and the report

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

# Presentation thresholds: score >= 90 is good, >= 70 is fair
GOOD_SCORE_THRESHOLD = 90
FAIR_SCORE_THRESHOLD = 70

# Vision quality pass: score >= 80 passes microstock review
QUALITY_PASS_THRESHOLD = 80


class ContentType(str, Enum):
    """Content classification of a generated image"""

    PHOTOGRAPHY = "Photography"
    ILLUSTRATION = "Illustration"
    RENDER_3D = "3D Render"
    VECTOR = "Vector"


class Severity(str, Enum):
    """Issue severity: error blocks submission, warning is advisory, info is cosmetic"""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ScoreBand(str, Enum):
    """Coarse rating of a validation score, as shown next to it"""

    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"

    @classmethod
    def from_score(cls, score: int) -> "ScoreBand":
        if score >= GOOD_SCORE_THRESHOLD:
            return cls.GOOD
        if score >= FAIR_SCORE_THRESHOLD:
            return cls.FAIR
        return cls.POOR


@dataclass(frozen=True)
class KeywordAnalysis:
    """Keyword buckets proposed by the metadata pass (never scored)"""

    broad: tuple[str, ...] = ()
    medium: tuple[str, ...] = ()
    niche: tuple[str, ...] = ()
    trending: tuple[str, ...] = ()


@dataclass(frozen=True)
class ImageMetadata:
    """Candidate listing metadata for one image.

    Produced by the external metadata pass or by a user edit. The validator
    never mutates it; keywords are stored as a tuple to keep it that way.
    """

    title: str
    description: str
    keywords: tuple[str, ...]
    category: str = ""
    content_type: ContentType = ContentType.PHOTOGRAPHY
    is_ai: bool = False
    author: str = ""
    keyword_analysis: Optional[KeywordAnalysis] = None


@dataclass(frozen=True)
class ValidationIssue:
    """One compliance finding"""

    severity: Severity
    message: str
    # Public JSON field name, not the attribute: "isAI" for ImageMetadata.is_ai
    field: Optional[str] = None

    def to_dict(self) -> dict:
        data = {"severity": self.severity.value, "message": self.message}
        if self.field is not None:
            data["field"] = self.field
        return data


@dataclass
class ValidationResult:
    """Validation result for one metadata record"""

    score: int
    issues: list[ValidationIssue] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.WARNING]

    @property
    def passed(self) -> bool:
        """True when nothing blocks submission"""
        return not self.errors

    @property
    def band(self) -> ScoreBand:
        return ScoreBand.from_score(self.score)

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "issues": [i.to_dict() for i in self.issues],
            "recommendations": list(self.recommendations),
        }


@dataclass(frozen=True)
class QualityAssessment:
    """Result of the vision quality pass, as consumed by the studio"""

    score: int
    issues: tuple[str, ...] = ()
    explanation: str = ""
    microstock_pass: bool = False


@dataclass(frozen=True)
class MetadataRecord:
    """A metadata record together with where it was loaded from"""

    source: str
    metadata: ImageMetadata
