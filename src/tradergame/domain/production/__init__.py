"""Production domain - recipes, inventories, facilities and tick advancement"""
from .recipe import Recipe
from .catalog import RecipeCatalog, default_catalog
from .inventory import Inventory, InventoryItem
from .facility import Facility
from .advancer import ProductionAdvancer, ProductionOutcome, BatchAdvanceResult

__all__ = [
    'Recipe',
    'RecipeCatalog',
    'default_catalog',
    'Inventory',
    'InventoryItem',
    'Facility',
    'ProductionAdvancer',
    'ProductionOutcome',
    'BatchAdvanceResult',
]
