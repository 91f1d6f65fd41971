from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Article(BaseModel):
    """One normalized source record."""

    model_config = ConfigDict(frozen=True)

    title: str
    date: str
    body: str
    images: tuple[str, ...] = ()


class YearBundle(BaseModel):
    """Articles of one year, sorted ascending by ``date``."""

    model_config = ConfigDict(frozen=True)

    year: int
    articles: tuple[Article, ...] = ()


class ImageTarget(BaseModel):
    model_config = ConfigDict(frozen=True)

    source: str
    resource_name: str
    filename: str
    path: str


class ArticleLayout(BaseModel):
    """Target paths of one article, relative to the output root."""

    model_config = ConfigDict(frozen=True)

    year: int
    number: str
    article_dir: str
    markdown_path: str
    image_dir: str
    images: tuple[ImageTarget, ...] = ()
    thumbnail_source: Optional[str] = None
    thumbnail_path: Optional[str] = None


class YearLayout(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    content_dir: str
    thumbnail_dir: str
    index_path: str
    articles: tuple[ArticleLayout, ...] = ()


class YearResult(BaseModel):
    """Outcome of migrating one year."""

    year: int
    skipped: bool = False
    written: list[str] = Field(default_factory=list)
    already_present: list[str] = Field(default_factory=list)
    assets_copied: int = 0


class MigrationSettings(BaseModel):
    """Run parameters, built from the ``migration`` config section."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    input_file: str = "input.json"
    years: tuple[int, ...] = (2021,)
    category_id: int = 5
    output_root: str = "site"
    legacy_asset_root: str = "legacy"
    skip_existing_years: bool = True
    dry_run: bool = False
    default_thumbnail: str = "/thumbnail/default.jpg"
    year_title: str = "Articles {year}"
    report_dir: str = "reports/migration"
    download_timeout: float = 15.0

    @field_validator("years", mode="before")
    @classmethod
    def _dedup_years(cls, v):
        if isinstance(v, int):
            return (v,)
        seen = set()
        deduped = []
        for item in v or ():
            if item not in seen:
                seen.add(item)
                deduped.append(item)
        return tuple(deduped)
