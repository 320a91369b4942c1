from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import date, datetime

from milktrack.application.interfaces.gateway import PersistenceGateway
from milktrack.application.stores.base import StoreOptions
from milktrack.application.stores.calves import CalfStore
from milktrack.application.stores.cows import CowStore
from milktrack.application.stores.milk import MilkStore
from milktrack.application.stores.pregnancies import PregnancyStore
from milktrack.application.stores.preferences import PreferencesStore
from milktrack.application.stores.reproduction import ReproductionStore
from milktrack.application.stores.vaccines import VaccineStore
from milktrack.utils.datetime_tz import local_today, utcnow

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FarmStores:
    """Every entity cache belonging to one owner."""

    owner_id: str
    cows: CowStore
    calves: CalfStore
    pregnancies: PregnancyStore
    reproduction: ReproductionStore
    vaccines: VaccineStore
    milk: MilkStore
    preferences: PreferencesStore


class StoreRegistry:
    """Shared stores keyed by owner id, created on first use."""

    def __init__(
        self,
        gateway: PersistenceGateway,
        *,
        options: StoreOptions | None = None,
        cow_notice_ttl_seconds: int | None = None,
        clock: Callable[[], datetime] = utcnow,
        today: Callable[[], date] = local_today,
    ) -> None:
        self.gateway = gateway
        self.options = options or StoreOptions()
        self.cow_options = replace(
            self.options,
            notice_ttl_seconds=cow_notice_ttl_seconds or self.options.notice_ttl_seconds,
        )
        self.clock = clock
        self.today = today
        self._stores: dict[str, FarmStores] = {}

    def for_owner(self, owner_id: str) -> FarmStores:
        stores = self._stores.get(owner_id)
        if stores is None:
            stores = self._build(owner_id)
            self._stores[owner_id] = stores
            logger.info("Created entity stores for owner %s", owner_id)
        return stores

    def _build(self, owner_id: str) -> FarmStores:
        common = {"clock": self.clock, "today": self.today}
        return FarmStores(
            owner_id=owner_id,
            cows=CowStore(self.gateway, owner_id, options=self.cow_options, **common),
            calves=CalfStore(self.gateway, owner_id, options=self.options, **common),
            pregnancies=PregnancyStore(self.gateway, owner_id, options=self.options, **common),
            reproduction=ReproductionStore(self.gateway, owner_id, options=self.options, **common),
            vaccines=VaccineStore(self.gateway, owner_id, options=self.options, **common),
            milk=MilkStore(self.gateway, owner_id, options=self.options, **common),
            preferences=PreferencesStore(self.gateway, owner_id, options=self.options, **common),
        )
