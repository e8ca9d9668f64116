"""Output filename planning."""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from .areas import COUNTRY_CODE, AreaInfo, AreaRegistry

COUNTRY_FILENAME = "china.json"


def resolve(code: str, info: AreaInfo | None, name_format: str, level_tag: str = "") -> str:
    """Filename for ``code``; the caller picks the directory.

    ``level_tag`` is appended to the name in ``chinese`` mode to keep
    same-named siblings apart.
    """
    if code == COUNTRY_CODE:
        return COUNTRY_FILENAME
    if name_format == "chinese" and info is not None:
        return f"{info.name}{level_tag}.json"
    return f"{code}.json"


def sibling_tags(registry: AreaRegistry, codes: Iterable[str], name_format: str,
                 enabled: bool) -> dict[str, str]:
    """Map each code whose name repeats among ``codes`` to a ``_{code}`` tag."""
    codes = list(codes)
    if not enabled or name_format != "chinese":
        return {}
    counts = Counter(registry.name_of(code) for code in codes)
    return {code: f"_{code}" for code in codes if counts[registry.name_of(code)] > 1}
