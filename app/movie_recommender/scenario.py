from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from utils.errors import InvalidEnumValueError, MissingFieldError

WITH_WHOM = [
    "Один",
    "С партнером (романтика)",
    "С партнером (экшн)",
    "С детьми",
    "С друзьями (чтобы обсудить)",
    "С друзьями (фоном)",
]
WHEN_TIME = ["Пятничный вечер", "Воскресное утро", "Ночью после работы", "В отпуске"]
PURPOSE = ["Отдохнуть мозгом", "Вдохновиться", "Пощекотать нервы", "Порефлексировать"]

SHOW_ONLY_OBSCURE = "малоизвестное"
SHOW_ONLY_CULT = "культовое"
SHOW_ONLY_ARTHOUSE = "артхаус"
SHOW_ONLY = [SHOW_ONLY_OBSCURE, SHOW_ONLY_CULT, SHOW_ONLY_ARTHOUSE]

VALID_OPTIONS: Dict[str, List[str]] = {
    "withWhom": WITH_WHOM,
    "whenTime": WHEN_TIME,
    "purpose": PURPOSE,
    "showOnly": SHOW_ONLY,
}

REQUIRED_FIELDS = ("withWhom", "whenTime", "purpose")

GENRE_MAP: Dict[str, List[str]] = {
    "Один": ["драма", "биография"],
    "С партнером (романтика)": ["мелодрама", "комедия"],
    "С партнером (экшн)": ["боевик", "триллер"],
    "С детьми": ["мультфильм", "семейный"],
    "С друзьями (чтобы обсудить)": ["фантастика", "детектив"],
    "С друзьями (фоном)": ["комедия", "приключения"],
}
DEFAULT_GENRES = ["драма"]
ARTHOUSE_GENRES = ["артхаус", "документальный"]

# Catalog genre names that differ from ours; anything not listed is sent as is.
CATALOG_GENRE_NAMES: Dict[str, str] = {
    "артхаус": "драма",  # no arthouse genre in the catalog
}


@dataclass(frozen=True)
class Scenario:
    with_whom: str
    when_time: str
    purpose: str
    show_only: Optional[str] = None

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            "withWhom": self.with_whom,
            "whenTime": self.when_time,
            "purpose": self.purpose,
            "showOnly": self.show_only,
        }


@dataclass(frozen=True)
class GenreSet:
    domain: List[str]
    catalog: List[str]


def validate_scenario(data: Mapping[str, Any]) -> Scenario:
    """Check a raw questionnaire answer and turn it into a Scenario.

    Missing required fields are reported together. Out-of-domain values are
    reported one at a time, first offender in withWhom, whenTime, purpose,
    showOnly order.
    """
    missing = [name for name in REQUIRED_FIELDS if not data.get(name)]
    if missing:
        raise MissingFieldError(missing)

    for name in (*REQUIRED_FIELDS, "showOnly"):
        value = data.get(name)
        if value and value not in VALID_OPTIONS[name]:
            raise InvalidEnumValueError(name, value, VALID_OPTIONS[name])

    return Scenario(
        with_whom=data["withWhom"],
        when_time=data["whenTime"],
        purpose=data["purpose"],
        show_only=data.get("showOnly") or None,
    )


def to_catalog_genres(genres: List[str]) -> List[str]:
    catalog: List[str] = []
    for g in genres:
        name = CATALOG_GENRE_NAMES.get(g, g)
        if name not in catalog:
            catalog.append(name)
    return catalog


def genres_for(with_whom: str) -> GenreSet:
    domain = list(GENRE_MAP.get(with_whom, DEFAULT_GENRES))
    return GenreSet(domain=domain, catalog=to_catalog_genres(domain))
