"""
Facility subscription bus.

Keeps the latest known facility view per company and notifies listeners
when it changes. Listeners subscribe either to a company's full facility
list or to a single facility and receive the cached view immediately when
one exists.

Delivery iterates a snapshot of the registrations taken when the publish
starts. A listener removed mid-delivery is not called afterwards, and a
listener added mid-delivery waits for the next publish (it already received
the cached view on subscribe).
"""
import itertools
import logging
from typing import Callable, Dict, List, Optional, Set

from tradergame.domain.production.facility import Facility
from tradergame.ports.outbound.repositories import IFacilityRepository

logger = logging.getLogger(__name__)

FacilitiesListener = Callable[[List[Facility]], None]
FacilityListener = Callable[[Facility], None]
Unsubscribe = Callable[[], None]


class SubscriptionBus:
    """Observer registry for company facility lists and single facilities"""

    def __init__(self, facility_repository: IFacilityRepository):
        self._facility_repo = facility_repository
        self._tokens = itertools.count(1)
        self._company_listeners: Dict[str, Dict[int, FacilitiesListener]] = {}
        self._facility_listeners: Dict[str, Dict[int, FacilityListener]] = {}
        self._facilities: Dict[str, List[Facility]] = {}
        self._initialized: Set[str] = set()

    # ----- subscriptions -----

    def subscribe_facilities(self, company_id: str, listener: FacilitiesListener) -> Unsubscribe:
        """
        Register a listener for a company's facility list.

        Returns:
            Disposer removing exactly this registration. Calling it twice is harmless.
        """
        token = next(self._tokens)
        self._company_listeners.setdefault(company_id, {})[token] = listener

        cached = self._facilities.get(company_id)
        if cached is not None:
            self._deliver(listener, list(cached), f"company {company_id}")

        def unsubscribe():
            self._remove(self._company_listeners, company_id, token)

        return unsubscribe

    def subscribe_facility(self, facility_id: str, listener: FacilityListener) -> Unsubscribe:
        """Register a listener for one facility. Returns its disposer."""
        token = next(self._tokens)
        self._facility_listeners.setdefault(facility_id, {})[token] = listener

        cached = self.get_facility(facility_id)
        if cached is not None:
            self._deliver(listener, cached, f"facility {facility_id}")

        def unsubscribe():
            self._remove(self._facility_listeners, facility_id, token)

        return unsubscribe

    def listener_count(self, key: Optional[str] = None) -> int:
        """Registrations for a company or facility id, or in total"""
        registries = (self._company_listeners, self._facility_listeners)
        if key is not None:
            return sum(len(r.get(key, {})) for r in registries)
        return sum(len(listeners) for r in registries for listeners in r.values())

    # ----- publishing -----

    def publish_facilities(self, company_id: str, facilities: List[Facility]):
        """Replace the cached list for a company and notify its listeners"""
        snapshot = list(facilities)
        self._facilities[company_id] = snapshot

        self._notify(self._company_listeners, company_id, snapshot)
        for facility in snapshot:
            self._notify(self._facility_listeners, facility.id, facility)

    def publish_facility(self, facility: Facility):
        """Update one facility in the cache and notify its listeners and its company's"""
        company_list = self._facilities.get(facility.company_id)
        if company_list is not None:
            replaced = [facility if f.id == facility.id else f for f in company_list]
            if not any(f.id == facility.id for f in company_list):
                replaced.append(facility)
            self._facilities[facility.company_id] = replaced
            self._notify(self._company_listeners, facility.company_id, list(replaced))

        self._notify(self._facility_listeners, facility.id, facility)

    # ----- lifecycle -----

    def initialize_game_data(self, company_id: str) -> List[Facility]:
        """
        Load and publish a company's facilities the first time it is seen.

        Later calls return the cached view without touching the repository.

        Raises:
            PersistenceError: If loading fails
        """
        if company_id in self._initialized:
            return self.get_facilities(company_id)

        facilities = self.refresh(company_id)
        self._initialized.add(company_id)
        return facilities

    def refresh(self, company_id: str) -> List[Facility]:
        """
        Reload a company's facilities from the repository and publish them.

        Raises:
            PersistenceError: If loading fails
        """
        facilities = self._facility_repo.list_by_company(company_id)
        logger.debug(f"Refreshed {len(facilities)} facilities for company {company_id}")
        self.publish_facilities(company_id, facilities)
        return facilities

    def cleanup(self):
        """Drop all listeners and cached data"""
        self._company_listeners.clear()
        self._facility_listeners.clear()
        self._facilities.clear()
        self._initialized.clear()

    # ----- reads -----

    def get_facilities(self, company_id: str) -> List[Facility]:
        return list(self._facilities.get(company_id, []))

    def get_facility(self, facility_id: str) -> Optional[Facility]:
        for facilities in self._facilities.values():
            for facility in facilities:
                if facility.id == facility_id:
                    return facility
        return None

    def company_ids(self) -> List[str]:
        return list(self._facilities)

    # ----- internals -----

    def _notify(self, registry: Dict[str, Dict], key: str, payload):
        listeners = registry.get(key)
        if not listeners:
            return

        for token, listener in list(listeners.items()):
            # Skip listeners unsubscribed earlier in this delivery
            if token not in registry.get(key, {}):
                continue
            self._deliver(listener, payload, key)

    @staticmethod
    def _deliver(listener, payload, key: str):
        try:
            listener(payload)
        except Exception as e:
            logger.error(f"Listener for {key} failed: {e}", exc_info=True)

    @staticmethod
    def _remove(registry: Dict[str, Dict], key: str, token: int):
        listeners = registry.get(key)
        if listeners is None:
            return
        listeners.pop(token, None)
        if not listeners:
            registry.pop(key, None)
