# Rule-based microstock metadata validator
# Scores a metadata record against Shutterstock / Adobe Stock / iStock requirements
#
# Each rule is an independent check returning a RuleOutcome; the validator
# folds them in order (title -> description -> keywords -> compliance ->
# technical) and rounds the score once at the end.

import logging
import math
from dataclasses import dataclass, field
from functools import partial
from typing import Callable, Iterable, Optional, Sequence

from microstock_studio.compliance_rules import (
    AI_DISCLOSURE_PENALTY,
    AUTHOR_PLACEHOLDER,
    BANNED_KEYWORDS,
    BANNED_TERM_PENALTY,
    DESCRIPTION_MIN_WORDS,
    DESCRIPTION_SPARSE_PENALTY,
    DUPLICATE_KEYWORD_PENALTY,
    KEYWORD_EXCESS_PENALTY,
    KEYWORD_SHORTFALL_PENALTY,
    KEYWORDS_MAX,
    KEYWORDS_MIN,
    SHORT_KEYWORD_CHARS,
    SHORT_KEYWORD_TOLERANCE,
    TITLE_FEW_WORDS_PENALTY,
    TITLE_MAX_CHARS,
    TITLE_MIN_CHARS,
    TITLE_MIN_WORDS,
    TITLE_TOO_LONG_PENALTY,
    TITLE_TOO_SHORT_PENALTY,
)
from microstock_studio.state import (
    ImageMetadata,
    Severity,
    ValidationIssue,
    ValidationResult,
)

logger = logging.getLogger(__name__)

MAX_SCORE = 100
MIN_SCORE = 0


class ValidationError(Exception):
    """Validation error"""

    pass


@dataclass
class RuleOutcome:
    """What a single rule found: issues, score penalty and recommendations"""

    issues: list[ValidationIssue] = field(default_factory=list)
    penalty: float = 0
    recommendations: list[str] = field(default_factory=list)


Rule = Callable[[ImageMetadata], RuleOutcome]


# ===== Title / Description Rules =====


def check_title_length(metadata: ImageMetadata) -> RuleOutcome:
    """Title must be 20-70 characters"""
    outcome = RuleOutcome()
    title_len = len(metadata.title.strip())

    if title_len > TITLE_MAX_CHARS:
        outcome.issues.append(
            ValidationIssue(
                Severity.ERROR,
                f"Title is too long ({title_len}/{TITLE_MAX_CHARS} chars). "
                f"It will be truncated on Adobe Stock.",
                "title",
            )
        )
        outcome.penalty += TITLE_TOO_LONG_PENALTY
    elif title_len < TITLE_MIN_CHARS:
        outcome.issues.append(
            ValidationIssue(
                Severity.WARNING,
                "Title is too short. Use descriptive phrases for better SEO.",
                "title",
            )
        )
        outcome.penalty += TITLE_TOO_SHORT_PENALTY

    return outcome


def check_title_word_count(metadata: ImageMetadata) -> RuleOutcome:
    outcome = RuleOutcome()
    if len(metadata.title.split()) < TITLE_MIN_WORDS:
        outcome.issues.append(
            ValidationIssue(
                Severity.WARNING,
                f"Title word count is low (< {TITLE_MIN_WORDS} words).",
                "title",
            )
        )
        outcome.penalty += TITLE_FEW_WORDS_PENALTY
    return outcome


def check_description(metadata: ImageMetadata) -> RuleOutcome:
    outcome = RuleOutcome()
    if len(metadata.description.split()) < DESCRIPTION_MIN_WORDS:
        outcome.issues.append(
            ValidationIssue(
                Severity.WARNING,
                "Description is very sparse. Aim for 2-3 complete sentences.",
                "description",
            )
        )
        outcome.penalty += DESCRIPTION_SPARSE_PENALTY
    return outcome


# ===== Keyword Rules =====


def check_keyword_count(metadata: ImageMetadata) -> RuleOutcome:
    """Keyword count must be 30-50"""
    outcome = RuleOutcome()
    keyword_count = len(metadata.keywords)

    if keyword_count < KEYWORDS_MIN:
        missing = KEYWORDS_MIN - keyword_count
        outcome.issues.append(
            ValidationIssue(
                Severity.ERROR,
                f"Found only {keyword_count} keywords ({missing} missing). "
                f"Minimum {KEYWORDS_MIN} required for optimal visibility.",
                "keywords",
            )
        )
        outcome.penalty += missing * KEYWORD_SHORTFALL_PENALTY
        outcome.recommendations.append(
            f"Add {missing} more keywords to reach the minimum of {KEYWORDS_MIN}."
        )
    elif keyword_count > KEYWORDS_MAX:
        extra = keyword_count - KEYWORDS_MAX
        outcome.issues.append(
            ValidationIssue(
                Severity.ERROR,
                f"Found {keyword_count} keywords ({extra} too many). "
                f"Max {KEYWORDS_MAX} allowed on most platforms.",
                "keywords",
            )
        )
        outcome.penalty += extra * KEYWORD_EXCESS_PENALTY
        outcome.recommendations.append(f"Remove {extra} least relevant keywords.")

    return outcome


def check_duplicate_keywords(metadata: ImageMetadata) -> RuleOutcome:
    """Duplicates are compared case-insensitively after trimming"""
    outcome = RuleOutcome()
    unique_keywords = {k.strip().lower() for k in metadata.keywords}
    duplicates = len(metadata.keywords) - len(unique_keywords)

    if duplicates > 0:
        outcome.issues.append(
            ValidationIssue(
                Severity.WARNING,
                f"Found {duplicates} duplicate keywords.",
                "keywords",
            )
        )
        outcome.penalty += duplicates * DUPLICATE_KEYWORD_PENALTY
        outcome.recommendations.append(
            "Remove duplicate keywords to save space for unique terms."
        )

    return outcome


def check_short_keywords(metadata: ImageMetadata) -> RuleOutcome:
    """Flag very short keywords as too generic (no penalty)"""
    outcome = RuleOutcome()
    too_short = [
        k.strip() for k in metadata.keywords if len(k.strip()) < SHORT_KEYWORD_CHARS
    ]

    if len(too_short) > SHORT_KEYWORD_TOLERANCE:
        outcome.issues.append(
            ValidationIssue(
                Severity.INFO,
                f'{len(too_short)} keywords are very short/generic (e.g. "{too_short[0]}").',
                "keywords",
            )
        )
        outcome.recommendations.append(
            "Replace short 2-letter keywords with more specific terms."
        )

    return outcome


# ===== Compliance Rules =====


def find_banned_terms(
    metadata: ImageMetadata, banned_terms: Iterable[str] = BANNED_KEYWORDS
) -> list[str]:
    """Return denylisted terms found in title, description or keywords.

    Matching is a plain substring test on lower-cased text, so "ford" also
    hits "afford". Terms are returned once each, in denylist order.
    """
    lower_title = metadata.title.lower()
    lower_desc = metadata.description.lower()
    lower_keywords = [k.lower() for k in metadata.keywords]

    found: list[str] = []
    for term in banned_terms:
        banned = term.lower()
        if banned in found:
            continue
        if (
            any(banned in k for k in lower_keywords)
            or banned in lower_title
            or banned in lower_desc
        ):
            found.append(banned)
    return found


def check_banned_terms(
    metadata: ImageMetadata, banned_terms: Sequence[str] = BANNED_KEYWORDS
) -> RuleOutcome:
    """Brand / trademark terms disqualify commercial stock"""
    outcome = RuleOutcome()
    found = find_banned_terms(metadata, banned_terms)

    if found:
        listed = ", ".join(found)
        outcome.issues.append(
            ValidationIssue(
                Severity.ERROR,
                f"Potential Trademark/Brand Violation: {listed}. "
                f"Commercial stock must be free of brands.",
                "keywords",
            )
        )
        outcome.penalty += BANNED_TERM_PENALTY * len(found)
        outcome.recommendations.append(f"Remove all instances of: {listed}.")

    return outcome


# ===== Technical / Format Rules =====


def check_ai_disclosure(metadata: ImageMetadata) -> RuleOutcome:
    outcome = RuleOutcome()
    if not metadata.is_ai:
        outcome.issues.append(
            ValidationIssue(
                Severity.WARNING,
                "isAI flag is false. Most platforms now require marking AI content explicitly.",
                "isAI",
            )
        )
        outcome.penalty += AI_DISCLOSURE_PENALTY
    return outcome


def check_author_placeholder(metadata: ImageMetadata) -> RuleOutcome:
    outcome = RuleOutcome()
    if AUTHOR_PLACEHOLDER not in metadata.author:
        outcome.issues.append(
            ValidationIssue(
                Severity.INFO,
                "Author field does not contain dynamic placeholder.",
                "author",
            )
        )
    return outcome


def default_rules(banned_terms: Sequence[str] = BANNED_KEYWORDS) -> list[Rule]:
    """Rules in evaluation order"""
    return [
        check_title_length,
        check_title_word_count,
        check_description,
        check_keyword_count,
        check_duplicate_keywords,
        check_short_keywords,
        partial(check_banned_terms, banned_terms=banned_terms),
        check_ai_disclosure,
        check_author_placeholder,
    ]


def _final_score(total_penalty: float) -> int:
    """Clamp to [0, 100], then round half up (98.5 -> 99)"""
    clamped = max(MIN_SCORE, min(MAX_SCORE, MAX_SCORE - total_penalty))
    return int(math.floor(clamped + 0.5))


class MetadataValidator:
    """Scores metadata records against a fixed rule list.

    Holds no per-call state, so one instance can be shared freely.

    Args:
        banned_terms: Brand/trademark denylist (default: built-in list)
        rules: Full rule list, overriding the defaults and ``banned_terms``
    """

    def __init__(
        self,
        banned_terms: Optional[Iterable[str]] = None,
        rules: Optional[Sequence[Rule]] = None,
    ):
        self.banned_terms: tuple[str, ...] = (
            BANNED_KEYWORDS
            if banned_terms is None
            else tuple(t.lower() for t in banned_terms)
        )
        self.rules: tuple[Rule, ...] = tuple(
            rules if rules is not None else default_rules(self.banned_terms)
        )

    def validate(self, metadata: ImageMetadata) -> ValidationResult:
        """Validate one metadata record.

        Raises:
            ValidationError: If ``metadata`` is not an ImageMetadata
        """
        if not isinstance(metadata, ImageMetadata):
            raise ValidationError(
                f"Expected ImageMetadata, got {type(metadata).__name__}"
            )

        issues: list[ValidationIssue] = []
        recommendations: list[str] = []
        total_penalty: float = 0

        for rule in self.rules:
            outcome = rule(metadata)
            issues.extend(outcome.issues)
            recommendations.extend(outcome.recommendations)
            total_penalty += outcome.penalty

        score = _final_score(total_penalty)
        logger.debug(
            "Validated metadata: score=%d issues=%d penalty=%.1f",
            score,
            len(issues),
            total_penalty,
        )
        return ValidationResult(
            score=score, issues=issues, recommendations=recommendations
        )


_default_validator = MetadataValidator()


def validate_metadata(metadata: ImageMetadata) -> ValidationResult:
    """Validate metadata against standard microstock requirements"""
    return _default_validator.validate(metadata)
