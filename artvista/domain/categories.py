# artvista/domain/categories.py
from typing import Iterable, List


def normalize_category(value: str | None) -> str:
    return (value or "").strip().lower()


def normalize_categories(raw: str | Iterable[str] | None) -> List[str]:
    """
    Jedno miejsce normalizacji kategorii (create, update i filtr listy).
    Przyjmuje "a, B" albo ["a", " B "]; wynik bez pustych i bez duplikatow.
    """
    if not raw:
        return []

    if isinstance(raw, str):
        parts = raw.split(",")
    else:
        parts = []
        for value in raw:
            parts.extend(str(value).split(","))

    result: List[str] = []
    for part in parts:
        name = normalize_category(part)
        if name and name not in result:
            result.append(name)
    return result
