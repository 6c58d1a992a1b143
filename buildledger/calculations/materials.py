"""
Material quantity estimation.

Quantities scale linearly with total floor area (area x floors) using
fixed per-square-foot coefficients, rounded up to whole units.
"""

import math
from typing import Union

from pydantic import Field

from buildledger.models.base import LedgerModel
from buildledger.models.records import MaterialEstimate
from buildledger.reference.pricelist import MaterialCost, calculate_material_cost

# Per square foot of total floor area.
CEMENT_BAGS_PER_SQFT = 0.4
SAND_CFT_PER_SQFT = 0.816
BRICKS_PER_SQFT = 8
STEEL_KG_PER_SQFT = 4
AGGREGATE_CFT_PER_SQFT = 0.608

# Price list items used to cost an estimate.
ESTIMATE_PRICE_ITEMS = {
    "cement": "cement-1",
    "sand": "sand-1",
    "bricks": "brick-1",
    "steel": "steel-1",
    "aggregate": "sand-3",
}


class MaterialQuantities(LedgerModel):
    cement: int = Field(..., ge=0, description="Bags")
    sand: int = Field(..., ge=0, description="Cubic feet")
    bricks: int = Field(..., ge=0, description="Pieces")
    steel: int = Field(..., ge=0, description="Kilograms")
    aggregate: int = Field(..., ge=0, description="Cubic feet")


def _ceil(value: float) -> int:
    # 1000 * 0.816 is 816.0000000000001 in binary floating point
    return math.ceil(round(value, 6))


def calculate_materials(area_sq_ft: float, floors: int = 1) -> MaterialQuantities:
    total = area_sq_ft * floors
    return MaterialQuantities(
        cement=_ceil(total * CEMENT_BAGS_PER_SQFT),
        sand=_ceil(total * SAND_CFT_PER_SQFT),
        bricks=_ceil(total * BRICKS_PER_SQFT),
        steel=_ceil(total * STEEL_KG_PER_SQFT),
        aggregate=_ceil(total * AGGREGATE_CFT_PER_SQFT),
    )


def create_material_estimate(name: str, area: float, floors: int = 1) -> MaterialEstimate:
    quantities = calculate_materials(area, floors)
    return MaterialEstimate(
        name=name,
        area=area,
        floors=floors,
        **quantities.model_dump(),
    )


def estimate_material_cost(quantities: Union[MaterialQuantities, MaterialEstimate]) -> MaterialCost:
    """Price the five estimated quantities from the construction price list."""
    return calculate_material_cost(
        (item_id, getattr(quantities, field))
        for field, item_id in ESTIMATE_PRICE_ITEMS.items()
    )
