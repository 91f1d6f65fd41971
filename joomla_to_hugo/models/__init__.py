"""
Typed values passed between the pipeline stages.

All models are immutable once built; every run recomputes them from the
source document.
"""

from .article import (
    Article,
    ArticleLayout,
    ImageTarget,
    MigrationSettings,
    YearBundle,
    YearLayout,
    YearResult,
)

__all__ = [
    "Article",
    "ArticleLayout",
    "ImageTarget",
    "MigrationSettings",
    "YearBundle",
    "YearLayout",
    "YearResult",
]
