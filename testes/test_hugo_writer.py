import os
import sys

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import json

import pytest
import requests

from joomla_to_hugo.migrators import hugo_writer
from joomla_to_hugo.migrators.hugo_writer import migrate_year
from joomla_to_hugo.models import Article, YearBundle
from joomla_to_hugo.utils.errors import FileSystemError


@pytest.fixture
def assets(tmp_path):
    root = tmp_path / "legacy"
    (root / "images").mkdir(parents=True)
    (root / "images" / "a.png").write_bytes(b"image-a")
    (root / "images" / "b.jpg").write_bytes(b"image-b")
    return root


@pytest.fixture
def bundle():
    return YearBundle(
        year=2021,
        articles=(
            Article(title="First", date="2021-01-01 00:00:00", body="One.\n", images=("images/a.png", "/images/b.jpg")),
            Article(title="Second", date="2021-02-01 00:00:00", body="Two.\n"),
        ),
    )


def snapshot(root):
    return {
        str(p.relative_to(root)): (p.read_bytes(), p.stat().st_mtime_ns)
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


def run(bundle, out, assets, reports, **kwargs):
    return migrate_year(bundle, out, assets, report_dir=str(reports), log=lambda *a, **k: None, **kwargs)


def test_writes_full_year(tmp_path, assets, bundle):
    out = tmp_path / "site"
    result = run(bundle, out, assets, tmp_path / "reports")

    assert result.written == ["0000", "0001"]
    assert result.assets_copied == 3
    assert (out / "content/2021/_index.md").is_file()
    assert (out / "content/2021/0000/index.md").is_file()
    assert (out / "content/2021/0000/img/2021-0000-00.jpg").read_bytes() == b"image-a"
    assert (out / "content/2021/0000/img/2021-0000-01.jpg").read_bytes() == b"image-b"
    assert (out / "thumbnail/2021/0000.jpg").read_bytes() == b"image-a"
    assert (out / "content/2021/0001/index.md").is_file()
    assert not (out / "content/2021/0001/img").exists()
    assert not (out / "thumbnail/2021/0001.jpg").exists()


def test_second_run_skips_existing_year(tmp_path, assets, bundle):
    out = tmp_path / "site"
    run(bundle, out, assets, tmp_path / "reports")
    before = snapshot(out)

    result = run(bundle, out, assets, tmp_path / "reports")

    assert result.skipped
    assert snapshot(out) == before


def test_rerun_recreates_only_missing_article(tmp_path, assets, bundle):
    out = tmp_path / "site"
    run(bundle, out, assets, tmp_path / "reports")
    first = out / "content/2021/0000/index.md"
    first.write_text("edited by hand", encoding="utf-8")
    (out / "content/2021/0001/index.md").unlink()

    result = run(bundle, out, assets, tmp_path / "reports", skip_existing_year=False)

    assert result.written == ["0001"]
    assert result.already_present == ["0000"]
    assert first.read_text(encoding="utf-8") == "edited by hand"
    assert (out / "content/2021/0001/index.md").is_file()


def test_skip_and_write_events_are_reported(tmp_path, assets, bundle):
    out = tmp_path / "site"
    reports = tmp_path / "reports"
    run(bundle, out, assets, reports)
    run(bundle, out, assets, reports)

    lines = (reports / "success.jsonl").read_text(encoding="utf-8").splitlines()
    codes = [json.loads(line)["code"] for line in lines]
    assert codes == ["ARTICLE_WRITTEN", "ARTICLE_WRITTEN", "YEAR_INDEX_WRITTEN", "YEAR_SKIPPED"]


def test_missing_asset_is_fatal(tmp_path, assets):
    bundle = YearBundle(
        year=2021,
        articles=(Article(title="t", date="2021-01-01 00:00:00", body="", images=("images/missing.jpg",)),),
    )
    out = tmp_path / "site"
    with pytest.raises(FileSystemError):
        run(bundle, out, assets, tmp_path / "reports")
    # The page written before the failure stays on disk.
    assert (out / "content/2021/0000/index.md").is_file()
    assert not (out / "content/2021/_index.md").exists()


def test_remote_image_is_downloaded(tmp_path, assets, monkeypatch):
    class FakeResponse:
        content = b"remote-bytes"

        def raise_for_status(self):
            pass

    calls = []

    def fake_get(url, timeout):
        calls.append(url)
        return FakeResponse()

    monkeypatch.setattr(hugo_writer.requests, "get", fake_get)
    bundle = YearBundle(
        year=2021,
        articles=(Article(title="t", date="2021-01-01 00:00:00", body="", images=("https://old.example.com/p.jpg",)),),
    )
    out = tmp_path / "site"
    run(bundle, out, assets, tmp_path / "reports")

    assert calls == ["https://old.example.com/p.jpg"]
    assert (out / "content/2021/0000/img/2021-0000-00.jpg").read_bytes() == b"remote-bytes"
    assert (out / "thumbnail/2021/0000.jpg").read_bytes() == b"remote-bytes"


def test_failed_download_is_fatal(tmp_path, assets, monkeypatch):
    def fake_get(url, timeout):
        raise requests.ConnectionError("unreachable")

    monkeypatch.setattr(hugo_writer.requests, "get", fake_get)
    monkeypatch.setattr(hugo_writer.time, "sleep", lambda s: None)
    bundle = YearBundle(
        year=2021,
        articles=(Article(title="t", date="2021-01-01 00:00:00", body="", images=("http://old.example.com/p.jpg",)),),
    )
    with pytest.raises(FileSystemError):
        run(bundle, tmp_path / "site", assets, tmp_path / "reports")


def test_dry_run_touches_nothing(tmp_path, assets, bundle):
    out = tmp_path / "site"
    result = run(bundle, out, assets, tmp_path / "reports", dry_run=True)
    assert result.written == ["0000", "0001"]
    assert not out.exists()
