"""
Pydantic settings for the article reader.

Every threshold and weight used by the scorer and the assembler lives here
with its default, so a caller can tune extraction without touching code.

Environment variables override defaults using the pattern
ARTICLE_READER_{FIELD}, e.g. ARTICLE_READER_MIN_TEXT_LENGTH=40.
List fields take a comma-separated value.
"""

import os
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "ARTICLE_READER_"

DEFAULT_TAGS_TO_SCORE = ["section", "h2", "h3", "h4", "h5", "h6", "p", "td", "pre", "div"]


class ReaderSettings(BaseModel):
    """Thresholds and weights for candidate scoring and article assembly."""

    tags_to_score: list[str] = Field(
        default_factory=lambda: list(DEFAULT_TAGS_TO_SCORE),
        description="Elements whose text feeds their parent/grandparent scores",
    )
    min_text_length: int = Field(
        default=25,
        ge=0,
        description=(
            "Elements with less text than this are not scored; counted in "
            "characters, so CJK text needs a lower value than a byte count would"
        ),
    )
    max_length_bonus: int = Field(
        default=3,
        ge=0,
        description="Cap on the one-point-per-100-characters bonus",
    )
    class_weight: float = Field(
        default=25,
        ge=0,
        description="Bonus/penalty for a positive/negative class or id",
    )
    sibling_min_score: float = Field(
        default=10,
        ge=0,
        description="Floor of the sibling inclusion threshold",
    )
    sibling_score_divisor: float = Field(
        default=5,
        gt=0,
        description="Sibling threshold is top score divided by this",
    )
    paragraph_min_length: int = Field(
        default=80,
        ge=0,
        description="Paragraph siblings at least this long are gated on link density only",
    )
    paragraph_max_link_density: float = Field(
        default=0.25,
        ge=0.0,
        le=1.0,
        description="Long paragraph siblings must stay below this link density",
    )

    @field_validator("tags_to_score", mode="before")
    @classmethod
    def split_tags(cls, v: Any) -> Any:
        if isinstance(v, str):
            return [t.strip().lower() for t in v.split(",") if t.strip()]
        return v

    def sibling_threshold(self, top_score: float) -> float:
        """Minimum candidate score for a sibling to join the article."""
        return max(self.sibling_min_score, top_score / self.sibling_score_divisor)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ReaderSettings":
        """
        Build settings from defaults plus ARTICLE_READER_* overrides.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            Validated ReaderSettings
        """
        environ = os.environ if environ is None else environ
        overrides = {}
        for name in cls.model_fields:
            key = f"{ENV_PREFIX}{name.upper()}"
            if key in environ:
                overrides[name] = environ[key]
        return cls(**overrides)
