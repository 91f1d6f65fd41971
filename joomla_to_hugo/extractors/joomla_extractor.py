import json
import re
from datetime import datetime

from ..models import YearBundle
from ..utils.errors import SchemaViolation

DATE_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
_CREATED_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2}")
_CATID_RE = re.compile(r"[+-]?[0-9]+")
INT32_MIN, INT32_MAX = -(2 ** 31), 2 ** 31 - 1


def load_records(file_path):
    """Read the exported Joomla JSON document and return its ``data`` array.

    The whole document is loaded into memory at once.

    Args:
        file_path (str): Path to the exported JSON document.

    Returns:
        list: The raw records (dicts), in source order.

    Raises:
        FileNotFoundError: If the document does not exist.
        SchemaViolation: If the document is not valid JSON or has no ``data`` array.
    """
    with open(file_path, mode="r", encoding="utf-8") as f:
        try:
            document = json.load(f)
        except json.JSONDecodeError as e:
            raise SchemaViolation(f"{file_path} is not valid JSON: {e}") from e
    data = document.get("data") if isinstance(document, dict) else None
    if not isinstance(data, list):
        raise SchemaViolation(f"{file_path} has no 'data' array")
    return data


def parse_created(value):
    if not _CREATED_RE.fullmatch(value):
        raise SchemaViolation(f"Invalid 'created' value {value!r}")
    try:
        return datetime.strptime(value, DATE_TIME_FORMAT)
    except ValueError as e:
        raise SchemaViolation(f"Invalid 'created' value {value!r}: {e}") from e


def parse_catid(value):
    if not _CATID_RE.fullmatch(value):
        raise SchemaViolation(f"Invalid 'catid' value {value!r}")
    category = int(value)
    if not INT32_MIN <= category <= INT32_MAX:
        raise SchemaViolation(f"'catid' value {value!r} out of range")
    return category


def _matches(record, year, category_id):
    if not isinstance(record, dict):
        return False
    created = record.get("created")
    catid = record.get("catid")
    # Records without both string fields are not candidates.
    if not isinstance(created, str) or not isinstance(catid, str):
        return False
    # Both values are parsed even when the year already differs.
    created_at = parse_created(created)
    category = parse_catid(catid)
    return created_at.year == year and category == category_id


def select_articles(records, year, category_id, normalizer):
    """Select the articles of one year and category.

    Every record holding both ``created`` and ``catid`` is parsed; a
    malformed value aborts the selection.  Included records are normalized
    and sorted by date, keeping source order for equal dates.

    Args:
        records (list): Raw records from :func:`load_records`.
        year (int): Publication year to keep.
        category_id (int): Category to keep.
        normalizer (TextNormalizer): Builds the articles.

    Returns:
        YearBundle: The sorted articles of ``year``.

    Raises:
        SchemaViolation: On a malformed ``created``/``catid`` or a selected
            record without ``title``/``introtext``.
    """
    articles = [
        normalizer.normalize_record(record)
        for record in records
        if _matches(record, year, category_id)
    ]
    articles.sort(key=lambda article: article.date)
    return YearBundle(year=year, articles=tuple(articles))
