"""
Deterministic output layout of a migrated year.

Every path is derived from the position of an article in its sorted
:class:`~joomla_to_hugo.models.YearBundle` and from the position of an
image in the article, so that re-running against an unchanged source
document reproduces the same names::

    content/{year}/_index.md
    content/{year}/{0000}/index.md
    content/{year}/{0000}/img/{year}-{0000}-{00}.jpg
    thumbnail/{year}/{0000}.jpg

Paths are POSIX strings relative to the output root.
"""

from __future__ import annotations

from typing import List

from ..models import Article, ArticleLayout, ImageTarget, YearBundle, YearLayout

CONTENT_DIR = "content"
THUMBNAIL_DIR = "thumbnail"
IMAGE_DIR = "img"
IMAGE_EXTENSION = ".jpg"


def article_number(index: int) -> str:
    return f"{index:04d}"


def image_number(index: int) -> str:
    return f"{index:02d}"


def resource_name(image_index: int) -> str:
    return f"img-{image_number(image_index)}"


def image_filename(year: int, article_index: int, image_index: int) -> str:
    """Renamed image file; the extension is always ``.jpg``."""
    return f"{year}-{article_number(article_index)}-{image_number(image_index)}{IMAGE_EXTENSION}"


def year_content_dir(year: int) -> str:
    return f"{CONTENT_DIR}/{year}"


def year_index_path(year: int) -> str:
    return f"{year_content_dir(year)}/_index.md"


def plan_article(article: Article, year: int, index: int) -> ArticleLayout:
    number = article_number(index)
    article_dir = f"{year_content_dir(year)}/{number}"
    image_dir = f"{article_dir}/{IMAGE_DIR}"

    images: List[ImageTarget] = []
    for image_index, source in enumerate(article.images):
        filename = image_filename(year, index, image_index)
        images.append(
            ImageTarget(
                source=source,
                resource_name=resource_name(image_index),
                filename=filename,
                path=f"{image_dir}/{filename}",
            )
        )

    thumbnail_source = article.images[0] if article.images else None
    thumbnail_path = f"{THUMBNAIL_DIR}/{year}/{number}{IMAGE_EXTENSION}" if article.images else None

    return ArticleLayout(
        year=year,
        number=number,
        article_dir=article_dir,
        markdown_path=f"{article_dir}/index.md",
        image_dir=image_dir,
        images=tuple(images),
        thumbnail_source=thumbnail_source,
        thumbnail_path=thumbnail_path,
    )


def plan_year(bundle: YearBundle) -> YearLayout:
    """Compute every target path of ``bundle``."""
    return YearLayout(
        year=bundle.year,
        content_dir=year_content_dir(bundle.year),
        thumbnail_dir=f"{THUMBNAIL_DIR}/{bundle.year}",
        index_path=year_index_path(bundle.year),
        articles=tuple(
            plan_article(article, bundle.year, index)
            for index, article in enumerate(bundle.articles)
        ),
    )
