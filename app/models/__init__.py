"""
Import all models here so that:
1. Alembic can auto-detect them when generating migrations
2. Relationships between models resolve correctly

Parent tables are imported before child tables.
"""

from app.models.user import User
from app.models.supplier import Supplier
from app.models.purchase_lpo import PurchaseLPO, LPOStatus
from app.models.stock_item import StockItem
from app.models.stock_out import StockOut
from app.models.system_log import SystemLog
from app.models.order import Order, Expense
from app.models.vehicle_trip import VehicleTrip, Proof, TravelComment
from app.models.vehicle_offence import VehicleOffence, OffenceStatus
from app.models.destination_standard import DestinationStandard

__all__ = [
    "User",
    "Supplier",
    "PurchaseLPO",
    "LPOStatus",
    "StockItem",
    "StockOut",
    "SystemLog",
    "Order",
    "Expense",
    "VehicleTrip",
    "Proof",
    "TravelComment",
    "VehicleOffence",
    "OffenceStatus",
    "DestinationStandard",
]
