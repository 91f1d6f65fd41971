"""
Filesystem side of the migration.

:func:`migrate_year` walks the :class:`~joomla_to_hugo.models.YearLayout`
of a bundle and performs, in order:

* the year-level check: an existing ``content/{year}`` directory means the
  year was already migrated and nothing else happens (unless the fast path
  is disabled)
* creation of the year content and thumbnail directories
* for each article whose ``index.md`` does not exist yet: the page, its
  renamed images and its thumbnail
* the year ``_index.md``, rewritten on every pass

Any directory, write, copy or download failure is raised as
:class:`~joomla_to_hugo.utils.errors.FileSystemError`.  Files written before
the failure stay on disk.
"""

from __future__ import annotations

import os
import shutil
import time
from pathlib import Path
from typing import Callable, Optional, Union

import requests

from ..models import ArticleLayout, YearBundle, YearResult
from ..parsers.hugo_renderer import DEFAULT_THUMBNAIL, DEFAULT_YEAR_TITLE, render_article, render_year_index
from ..utils.errors import FileSystemError, report_ok
from .hugo_layout import plan_year

LogFn = Callable[..., None]


def _print_log(message: str, level: str = "INFO") -> None:
    print(f"[{level}] {message}")


###############################################################################
# Filesystem primitives
###############################################################################

def _ensure_dir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FileSystemError(f"Could not create directory {path}: {e}") from e


def _write_text(path: Path, text: str) -> None:
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        raise FileSystemError(f"Could not write {path}: {e}") from e


def _copy_file(source: Path, destination: Path) -> None:
    try:
        shutil.copyfile(source, destination)
    except OSError as e:
        raise FileSystemError(f"Could not copy {source} to {destination}: {e}") from e


def is_remote(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def with_retries(fn: Callable[[], requests.Response], *, max_attempts: int = 3, base_delay: float = 0.7) -> requests.Response:
    """
    Execute a function returning a ``requests.Response``, retrying on
    429 and 5xx responses and on connection errors with exponential backoff.

    :raises requests.RequestException: if all attempts fail.
    """
    attempt = 0
    while True:
        try:
            resp = fn()
            resp.raise_for_status()
            return resp
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            if status not in (429, 500, 502, 503, 504) or attempt >= max_attempts - 1:
                raise
            time.sleep(base_delay * (2 ** attempt))
            attempt += 1
        except requests.RequestException:
            if attempt >= max_attempts - 1:
                raise
            time.sleep(base_delay * (2 ** attempt))
            attempt += 1


def fetch_asset(source: str, destination: Path, asset_root: Path, *, timeout: float = 15.0) -> None:
    """Copy one legacy image to ``destination``.

    Remote sources are downloaded; anything else is a path below
    ``asset_root`` (a leading ``/`` is ignored).
    """
    if is_remote(source):
        try:
            resp = with_retries(lambda: requests.get(source, timeout=timeout))
        except requests.RequestException as e:
            raise FileSystemError(f"Could not download {source}: {e}") from e
        try:
            destination.write_bytes(resp.content)
        except OSError as e:
            raise FileSystemError(f"Could not write {destination}: {e}") from e
        return
    _copy_file(asset_root / source.lstrip("/"), destination)


###############################################################################
# Year migration
###############################################################################

def _write_article_assets(
    layout: ArticleLayout,
    output_root: Path,
    asset_root: Path,
    *,
    timeout: float,
    log: LogFn,
) -> int:
    copied = 0
    if layout.images:
        _ensure_dir(output_root / layout.image_dir)
    for image in layout.images:
        fetch_asset(image.source, output_root / image.path, asset_root, timeout=timeout)
        log(f"Copied {image.source} -> {image.path}", level="DEBUG")
        copied += 1
    if layout.thumbnail_path:
        # The first image is already on disk under its new name.
        _copy_file(output_root / layout.images[0].path, output_root / layout.thumbnail_path)
        log(f"Thumbnail {layout.thumbnail_path}", level="DEBUG")
        copied += 1
    return copied


def migrate_year(
    bundle: YearBundle,
    output_root: Union[str, os.PathLike],
    legacy_asset_root: Union[str, os.PathLike],
    *,
    skip_existing_year: bool = True,
    dry_run: bool = False,
    default_thumbnail: str = DEFAULT_THUMBNAIL,
    year_title: str = DEFAULT_YEAR_TITLE,
    download_timeout: float = 15.0,
    report_dir: Optional[str] = None,
    log: Optional[LogFn] = None,
) -> YearResult:
    """Write the Hugo content of one year below ``output_root``.

    :param bundle: Sorted articles of the year.
    :param output_root: Destination directory holding ``content/`` and
        ``thumbnail/``.
    :param legacy_asset_root: Read-only directory the images are copied from.
    :param skip_existing_year: Skip the whole year when its content
        directory already exists.
    :param dry_run: Log the planned writes without touching the filesystem.
    :return: What was written or skipped.
    :raises FileSystemError: on the first failing filesystem operation.
    """
    log = log or _print_log
    root = Path(output_root)
    asset_root = Path(legacy_asset_root)
    layout = plan_year(bundle)
    result = YearResult(year=bundle.year)
    subject = {"year": bundle.year}

    if skip_existing_year and (root / layout.content_dir).exists():
        log(f"Year {bundle.year} already migrated ({layout.content_dir} exists), skipping.")
        report_ok("YEAR_SKIPPED", subject, report_dir=report_dir)
        result.skipped = True
        return result

    if dry_run:
        for article, article_layout in zip(bundle.articles, layout.articles):
            if (root / article_layout.markdown_path).exists():
                log(f"Dry-run: {article_layout.markdown_path} exists, would skip")
                result.already_present.append(article_layout.number)
                continue
            log(f"Dry-run: would write {article_layout.markdown_path} ({len(article_layout.images)} images)")
            result.written.append(article_layout.number)
        log(f"Dry-run: would write {layout.index_path}")
        return result

    _ensure_dir(root / layout.content_dir)
    _ensure_dir(root / layout.thumbnail_dir)

    for index, (article, article_layout) in enumerate(zip(bundle.articles, layout.articles)):
        markdown = root / article_layout.markdown_path
        article_subject = {"year": bundle.year, "article": article_layout.number, "title": article.title}
        if markdown.exists():
            log(f"{article_layout.markdown_path} already exists, not overwriting.")
            report_ok("ARTICLE_SKIPPED", article_subject, report_dir=report_dir)
            result.already_present.append(article_layout.number)
            continue

        _ensure_dir(root / article_layout.article_dir)
        _write_text(markdown, render_article(article, bundle.year, index, default_thumbnail=default_thumbnail))
        log(f"Wrote {article_layout.markdown_path}")
        result.assets_copied += _write_article_assets(
            article_layout, root, asset_root, timeout=download_timeout, log=log
        )
        report_ok(
            "ARTICLE_WRITTEN",
            article_subject,
            {"path": article_layout.markdown_path, "images": len(article_layout.images)},
            report_dir=report_dir,
        )
        result.written.append(article_layout.number)

    _write_text(root / layout.index_path, render_year_index(bundle.year, title_format=year_title))
    log(f"Wrote {layout.index_path}")
    report_ok("YEAR_INDEX_WRITTEN", subject, {"path": layout.index_path}, report_dir=report_dir)
    return result
