import json
from datetime import datetime, timezone
from typing import Any, Dict

from tradergame.domain.calendar.game_date import GameDate
from tradergame.domain.game.state import GameState
from tradergame.domain.production.facility import Facility
from tradergame.domain.production.inventory import Inventory, InventoryItem


def _parse_datetime(value):
    """Parse datetime from database - handles SQLite strings and PostgreSQL datetimes

    SQLite drops tzinfo, so naive values are treated as UTC.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        dt = value
    else:
        dt = datetime.fromisoformat(value)

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)

    return dt


def _parse_json(value, default):
    if value is None:
        return default
    if isinstance(value, str):
        return json.loads(value)
    return value


class FacilityMapper:
    """Map between database rows and Facility entities"""

    @staticmethod
    def from_db_row(row) -> Facility:
        """Convert database row to Facility. Inventory usage is recomputed from the items."""
        items = tuple(
            InventoryItem(resource_id=item["resource_id"], quantity=int(item["quantity"]))
            for item in _parse_json(row["inventory_items"], [])
            if int(item["quantity"]) > 0
        )
        inventory = Inventory(
            items=items,
            capacity=int(row["inventory_capacity"]),
            current_usage=sum(i.quantity for i in items),
        )

        progress = row["progress_ticks"]
        return Facility(
            id=row["id"],
            company_id=row["company_id"],
            name=row["name"],
            type=row["type"],
            facility_subtype=row["facility_subtype"],
            city_id=row["city_id"],
            effectivity=float(row["effectivity"]),
            worker_count=int(row["worker_count"]),
            inventory=inventory,
            available_recipe_ids=tuple(_parse_json(row["available_recipe_ids"], [])),
            active_recipe_id=row["active_recipe_id"],
            progress_ticks=int(progress) if progress is not None else None,
            is_producing=bool(row["is_producing"]),
            created_at=_parse_datetime(row["created_at"]),
        )

    @staticmethod
    def to_db_dict(facility: Facility) -> Dict[str, Any]:
        """Convert Facility to column values (JSON columns serialize automatically)"""
        return {
            "id": facility.id,
            "company_id": facility.company_id,
            "name": facility.name,
            "type": facility.type,
            "facility_subtype": facility.facility_subtype,
            "city_id": facility.city_id,
            "effectivity": facility.effectivity,
            "worker_count": facility.worker_count,
            "inventory_capacity": facility.inventory.capacity,
            "inventory_items": [
                {"resource_id": item.resource_id, "quantity": item.quantity}
                for item in facility.inventory.items
            ],
            "available_recipe_ids": list(facility.available_recipe_ids),
            "active_recipe_id": facility.active_recipe_id,
            "progress_ticks": facility.progress_ticks,
            "is_producing": facility.is_producing,
            "created_at": facility.created_at,
        }


class GameTimeMapper:
    """Map between the game_time row and GameState"""

    @staticmethod
    def from_db_row(row) -> GameState:
        return GameState(
            date=GameDate(year=int(row["year"]), month=int(row["month"]), day=int(row["day"])),
            tick=int(row["tick"]),
            last_tick_time=_parse_datetime(row["last_tick_time"]),
            next_tick_time=_parse_datetime(row["next_tick_time"]),
        )

    @staticmethod
    def to_db_dict(state: GameState) -> Dict[str, Any]:
        return {
            "tick": state.tick,
            "day": state.date.day,
            "month": state.date.month,
            "year": state.date.year,
            "last_tick_time": state.last_tick_time,
            "next_tick_time": state.next_tick_time,
        }
