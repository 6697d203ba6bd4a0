"""Records produced by the crawl."""

from __future__ import annotations

from typing import Iterable, Iterator, List

from pydantic import BaseModel, ConfigDict, Field


class DependentRecord(BaseModel):
    """One row of a dependents listing page."""

    model_config = ConfigDict(frozen=True)

    user: str
    project: str
    stars: int = Field(ge=0)
    forks: int = Field(ge=0)


class ResultSet:
    """Append-only, ordered collection of records in discovery order."""

    def __init__(self, records: Iterable[DependentRecord] = ()) -> None:
        self._records: List[DependentRecord] = list(records)

    def extend(self, records: Iterable[DependentRecord]) -> None:
        self._records.extend(records)

    def to_list(self) -> List[dict]:
        return [r.model_dump() for r in self._records]

    def __iter__(self) -> Iterator[DependentRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, index: int) -> DependentRecord:
        return self._records[index]
