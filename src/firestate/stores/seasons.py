"""Stores for seasons."""

from __future__ import annotations

from typing import Optional

from firestate.filters import ByFields, Filter
from firestate.live import LiveQuery
from firestate.models import Season
from firestate.services import SeasonApiService
from firestate.store import CollectionStore, EntityStore


class SeasonStore(EntityStore[Season]):
    def __init__(self, api: SeasonApiService, *, name: str | None = None) -> None:
        super().__init__(name=name)
        self._api = api

    @property
    def season(self) -> Optional[Season]:
        return self.entity

    def _resolve(self, filters: Filter) -> LiveQuery[Optional[Season]]:
        return self._api.get_season(filters)


class SeasonsStore(CollectionStore[Season]):
    """Every season. Starts watching as soon as it is created."""

    def __init__(self, api: SeasonApiService, *, name: str | None = None) -> None:
        super().__init__(name=name)
        self._api = api
        self.load()

    @property
    def seasons(self) -> list[Season]:
        return self.entities

    def _resolve(self, filters: Filter) -> LiveQuery[list[Season]]:
        if filters != ByFields():
            raise ValueError(f"{self.name} watches the whole collection, got {filters!r}")
        return self._api.get_seasons()
