"""
Text normalization helpers shared by job schemas and the apply pipeline.
"""

import re
from typing import Any, Iterable, List

_TAG_RE = re.compile(r"<[^>]+>")


def strip_tags(value: Any) -> str:
    """Remove HTML tags and surrounding whitespace. None becomes ''."""
    if value is None:
        return ""
    return _TAG_RE.sub("", str(value)).strip()


def unique(values: Iterable[str]) -> List[str]:
    """De-duplicate while keeping first-seen order; blanks are dropped."""
    seen = set()
    result = []
    for value in values:
        if value and value not in seen:
            seen.add(value)
            result.append(value)
    return result


def to_list(value: Any) -> List[str]:
    """
    Normalize a bullet field into a clean list.

    Accepts a list (each item stripped) or a newline separated string,
    which is what the job form textarea sends. Anything else gives [].
    """
    if isinstance(value, (list, tuple)):
        items = value
    elif isinstance(value, str):
        items = value.split("\n")
    else:
        return []
    return unique(strip_tags(item) for item in items)


def merge_tags(tags: Any, required_skills: Any) -> List[str]:
    """Tag cloud = tags followed by required skills, de-duplicated."""
    return unique(to_list(tags) + to_list(required_skills))


def sanitize_filename(filename: str) -> str:
    """Basename only, whitespace to underscores, and [A-Za-z0-9._-] kept."""
    base = re.split(r"[\\/]", filename or "")[-1]
    base = re.sub(r"\s+", "_", base)
    return re.sub(r"[^a-zA-Z0-9._-]", "", base)
