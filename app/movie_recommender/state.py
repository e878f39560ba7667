from typing import Optional, TypedDict


class RecState(TypedDict, total=False):
    scenario: dict
    genres: list
    catalog_genres: list
    page: Optional[int]
    sort: Optional[dict]
    source: str
    candidates: list
    filtered: list
    shuffled: list
    recommendations: list
    total: int
