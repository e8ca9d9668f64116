"""Administrative area registry built from the DataV ``infos.json`` index.

The index is a flat ``{adcode: {"name": ..., ...}}`` object. Hierarchy is not
stored anywhere; it is implied by the trailing zero groups of each code:

    100000  the whole country
    xx0000  province
    xxyy00  city (prefecture)
    xxyyzz  county / district
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, Mapping

from .config import DownloadConfig
from .data import Fetcher, ParseError, dump_compact, write_text

COUNTRY_CODE = "100000"


class AreaLevel(Enum):
    COUNTRY = "country"
    PROVINCE = "province"
    CITY = "city"
    COUNTY = "county"


def classify(code: str) -> AreaLevel:
    if code == COUNTRY_CODE:
        return AreaLevel.COUNTRY
    if code.endswith("0000"):
        return AreaLevel.PROVINCE
    if code.endswith("00"):
        return AreaLevel.CITY
    return AreaLevel.COUNTY


@dataclass(frozen=True)
class AreaInfo:
    code: str
    name: str
    level: AreaLevel


class AreaRegistry:
    """Read-only code -> AreaInfo mapping in source document order.

    Relations are answered with a linear scan per query; the index holds a
    few thousand entries.
    """

    def __init__(self, areas: list[AreaInfo]):
        self._areas = {area.code: area for area in areas}

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any], source: str = "<mapping>") -> AreaRegistry:
        """Build from a decoded index document. Fields other than ``name`` are ignored."""
        if not isinstance(mapping, Mapping):
            raise ParseError(source, f"expected a JSON object, got {type(mapping).__name__}")
        areas = []
        for code, entry in mapping.items():
            if not isinstance(entry, Mapping) or "name" not in entry:
                raise ParseError(source, f"entry {code!r} has no name")
            areas.append(AreaInfo(code=str(code), name=str(entry["name"]), level=classify(str(code))))
        return cls(areas)

    def __len__(self) -> int:
        return len(self._areas)

    def __iter__(self) -> Iterator[str]:
        return iter(self._areas)

    def __contains__(self, code: object) -> bool:
        return code in self._areas

    def get(self, code: str) -> AreaInfo | None:
        return self._areas.get(code)

    def name_of(self, code: str) -> str:
        area = self._areas.get(code)
        return area.name if area is not None else code

    def provinces(self) -> list[str]:
        return [code for code in self._areas
                if code.endswith("0000") and code != COUNTRY_CODE]

    def cities_of(self, province_code: str) -> list[str]:
        prefix = province_code[:2]
        return [code for code in self._areas
                if code.startswith(prefix) and code.endswith("00") and code != province_code]

    def counties_of(self, city_code: str) -> list[str]:
        prefix = city_code[:4]
        return [code for code in self._areas
                if code.startswith(prefix) and not code.endswith("00")]

    def province_total(self, province_code: str) -> int:
        """Work units for one province: itself, its cities, and their counties."""
        cities = self.cities_of(province_code)
        return 1 + len(cities) + sum(len(self.counties_of(city)) for city in cities)

    def total_work_units(self) -> int:
        return 1 + sum(self.province_total(code) for code in self.provinces())


def load_registry(fetcher: Fetcher, config: DownloadConfig) -> AreaRegistry:
    """Fetch the index, save it to ``info.json``, and build the registry.

    ``info.json`` is written before the document is validated, so it is
    kept even when later steps fail.
    """
    url = config.info_url
    data = fetcher.fetch_json(url)
    write_text(config.info_path, dump_compact(data), url)
    return AreaRegistry.from_mapping(data, source=url)
