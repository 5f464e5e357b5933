from pydantic import BaseModel, Field
from typing import Optional, Dict, Union
from datetime import date


class PartTypeDefinition(BaseModel):
    name: str
    volume_formula: Optional[str] = None
    input_hint: Optional[str] = None
    description: Optional[str] = None
    class Config:
        from_attributes = True


class MaterialRecord(BaseModel):
    id: Union[str, int]
    name: str
    density: Optional[float] = None  # g/cm³
    class Config:
        from_attributes = True


class PriceRecord(BaseModel):
    material_id: Optional[Union[str, int]] = None
    unit_price: float
    effective_start: date
    effective_end: Optional[date] = None  # None = still in effect
    class Config:
        from_attributes = True


class ComputedCost(BaseModel):
    unit_volume: float = 0.0    # mm³
    unit_weight: float = 0.0    # kg, 3 decimals
    quantity: float = 0.0
    total_weight: float = 0.0   # kg, 3 decimals
    unit_price: float = 0.0     # per kg
    total_price: float = 0.0    # 2 decimals
    density: float = 0.0
    density_fallback: bool = False
    measurements: Dict[str, float] = Field(default_factory=dict)
