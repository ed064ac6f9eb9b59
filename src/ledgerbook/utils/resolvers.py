"""Utilities for resolving book, category and account names to IDs."""

from typing import Iterable, Protocol


class Named(Protocol):
    id: int
    name: str


def resolve_by_name_or_id(kind: str, reference: str | int, candidates: Iterable[Named]) -> int:
    """Resolve a name or ID against a list of entities.

    Integers (or strings holding an integer) are matched against IDs first;
    anything else is matched against names case-insensitively.

    Raises:
        ValueError: If nothing matches
    """
    candidates = list(candidates)

    try:
        entity_id = int(reference)
    except (ValueError, TypeError):
        entity_id = None

    if entity_id is not None:
        for candidate in candidates:
            if candidate.id == entity_id:
                return entity_id
        if isinstance(reference, int):
            raise ValueError(f"{kind.capitalize()} ID {reference} not found")

    name = str(reference).strip().lower()
    for candidate in candidates:
        if candidate.name.lower() == name:
            return candidate.id

    raise ValueError(f"{kind.capitalize()} '{reference}' not found")
