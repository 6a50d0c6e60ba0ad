"""
Society Directory.

Read-only, ordered reference list of societies supplied once at startup.
Also hosts the assignment helpers used by the admin form.
"""

from typing import Iterable, Iterator, Optional, Sequence

from modules.admin_roster.models import Society


class SocietyDirectory:
    """Immutable lookup over the known societies."""

    def __init__(self, societies: Iterable[Society] = ()) -> None:
        self._societies: tuple[Society, ...] = tuple(societies)
        self._by_id: dict[int, Society] = {}
        for society in self._societies:
            if society.id in self._by_id:
                raise ValueError(f"Duplicate society id {society.id} in directory")
            self._by_id[society.id] = society

    def __iter__(self) -> Iterator[Society]:
        return iter(self._societies)

    def __len__(self) -> int:
        return len(self._societies)

    def all(self) -> tuple[Society, ...]:
        return self._societies

    def get(self, society_id: int) -> Optional[Society]:
        return self._by_id.get(society_id)

    def search(self, term: str) -> tuple[Society, ...]:
        """Societies whose name contains ``term``, ignoring case."""
        if not term:
            return self._societies
        needle = term.lower()
        return tuple(s for s in self._societies if needle in s.name.lower())

    def resolve(self, society_ids: Iterable[int]) -> tuple[Society, ...]:
        """
        Map ids to society records, in the given order.

        Raises:
            KeyError: If an id is not in the directory.
        """
        resolved = []
        for society_id in society_ids:
            society = self._by_id.get(society_id)
            if society is None:
                raise KeyError(f"Unknown society id {society_id}")
            resolved.append(society)
        return tuple(resolved)


def toggle_assignment(
    assigned: Sequence[Society], society: Society, checked: bool
) -> tuple[Society, ...]:
    """
    Add or remove one society from an assignment list.

    Checking an already assigned society leaves the list unchanged.
    """
    if checked:
        if any(s.id == society.id for s in assigned):
            return tuple(assigned)
        return (*assigned, society)
    return tuple(s for s in assigned if s.id != society.id)
