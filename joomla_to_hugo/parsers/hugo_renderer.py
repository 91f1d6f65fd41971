"""
Hugo page rendering.

An article page is a YAML front-matter block between ``---`` fences,
followed by the normalized body and one ``img`` shortcode per image.  The
shortcodes reference the page resources declared in front matter by
name, so the renamed files inside the bundle's ``img/`` directory are
resolved by Hugo at build time.
"""

from __future__ import annotations

from typing import Any, Dict

import yaml

from ..migrators.hugo_layout import plan_article
from ..models import Article

__all__ = ["DEFAULT_THUMBNAIL", "image_marker", "render_article", "render_year_index"]

DEFAULT_THUMBNAIL = "/thumbnail/default.jpg"
DEFAULT_YEAR_TITLE = "Articles {year}"


def _front_matter(data: Dict[str, Any]) -> str:
    dumped = yaml.safe_dump(data, sort_keys=False, allow_unicode=True, default_flow_style=False)
    return f"---\n{dumped}---\n"


def image_marker(name: str) -> str:
    return '{{< img name="%s" >}}' % name


def render_article(
    article: Article,
    year: int,
    article_index: int,
    *,
    default_thumbnail: str = DEFAULT_THUMBNAIL,
) -> str:
    """Render the ``index.md`` of one article."""
    layout = plan_article(article, year, article_index)

    front: Dict[str, Any] = {
        "title": article.title,
        "date": article.date,
        "description": article.title,
        "thumbnail": f"/{layout.thumbnail_path}" if layout.thumbnail_path else default_thumbnail,
    }
    if layout.images:
        # src is relative to the page bundle
        front["resources"] = [
            {"name": image.resource_name, "src": f"img/{image.filename}"}
            for image in layout.images
        ]

    document = _front_matter(front) + "\n" + article.body
    for image in layout.images:
        if not document.endswith("\n"):
            document += "\n"
        document += image_marker(image.resource_name) + "\n"
    return document


def render_year_index(year: int, *, title_format: str = DEFAULT_YEAR_TITLE) -> str:
    """Render the ``_index.md`` section page of a year."""
    return _front_matter({"title": title_format.format(year=year), "nested": False})
