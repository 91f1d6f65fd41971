import os
import sys

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from joomla_to_hugo.migrators.hugo_layout import image_filename, plan_year
from joomla_to_hugo.models import Article, YearBundle


def make_bundle(year, count, images_at=None):
    images_at = images_at or {}
    articles = tuple(
        Article(title=f"t{i}", date=f"{year}-01-01 00:00:{i:02d}", body="", images=images_at.get(i, ()))
        for i in range(count)
    )
    return YearBundle(year=year, articles=articles)


def test_third_article_paths():
    layout = plan_year(make_bundle(2021, 12, {2: ("images/photo.png",)}))
    third = layout.articles[2]
    assert third.markdown_path == "content/2021/0002/index.md"
    assert third.image_dir == "content/2021/0002/img"
    assert [i.path for i in third.images] == ["content/2021/0002/img/2021-0002-00.jpg"]
    assert third.thumbnail_path == "thumbnail/2021/0002.jpg"
    assert third.thumbnail_source == "images/photo.png"


def test_year_paths():
    layout = plan_year(make_bundle(2019, 1))
    assert layout.content_dir == "content/2019"
    assert layout.thumbnail_dir == "thumbnail/2019"
    assert layout.index_path == "content/2019/_index.md"


def test_article_without_images_has_no_thumbnail():
    article = plan_year(make_bundle(2021, 1)).articles[0]
    assert article.images == ()
    assert article.thumbnail_path is None


def test_image_names_follow_position_and_keep_repeats():
    layout = plan_year(make_bundle(2021, 1, {0: ("a.gif", "b.jpg", "a.gif")}))
    images = layout.articles[0].images
    assert [i.filename for i in images] == ["2021-0000-00.jpg", "2021-0000-01.jpg", "2021-0000-02.jpg"]
    assert [i.resource_name for i in images] == ["img-00", "img-01", "img-02"]
    assert [i.source for i in images] == ["a.gif", "b.jpg", "a.gif"]


def test_plan_is_deterministic():
    bundle = make_bundle(2021, 5, {1: ("x.jpg",)})
    assert plan_year(bundle) == plan_year(bundle)


def test_image_filename_padding():
    assert image_filename(2021, 123, 7) == "2021-0123-07.jpg"
