# Shared fixtures: metadata that passes every rule

import pytest

from microstock_studio.state import ContentType, ImageMetadata

CLEAN_TITLE = "Misty mountain lake at sunrise with pine forest"
CLEAN_DESCRIPTION = (
    "A calm mountain lake reflects the pine forest and the soft morning light at sunrise."
)


def make_keywords(n: int) -> list[str]:
    """n unique keywords, none on the brand denylist"""
    return [f"mountain scene {i}" for i in range(n)]


def make_metadata(**overrides) -> ImageMetadata:
    fields = dict(
        title=CLEAN_TITLE,
        description=CLEAN_DESCRIPTION,
        keywords=tuple(make_keywords(35)),
        category="Nature",
        content_type=ContentType.PHOTOGRAPHY,
        is_ai=True,
        author="{{author}}",
    )
    fields.update(overrides)
    if not isinstance(fields["keywords"], tuple):
        fields["keywords"] = tuple(fields["keywords"])
    return ImageMetadata(**fields)


@pytest.fixture
def clean_metadata() -> ImageMetadata:
    return make_metadata()


@pytest.fixture
def clean_metadata_dict() -> dict:
    return {
        "title": CLEAN_TITLE,
        "description": CLEAN_DESCRIPTION,
        "keywords": make_keywords(35),
        "category": "Nature",
        "contentType": "Photography",
        "isAI": True,
        "author": "{{author}}",
    }
