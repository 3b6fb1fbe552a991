from pydantic import BaseModel, ConfigDict, EmailStr, Field, PositiveFloat, model_validator
from typing import Optional, List, Dict
from datetime import datetime, date
from .models import (
    SubstrateType, CoatingTier, QualityTier, StainTier, Unit, ProjectCategory, LineGroup,
    SurfaceType, ExteriorSurface, MeasurementType, ComponentType, WindowType, WindowSize,
    DoorType, CabinetType, CabinetFrontSize,
)


# --- Rate table ---

class RateEntry(BaseModel):
    """One priced item, quoted at the prime+2coats / Commercial reference tier."""
    model_config = ConfigDict(frozen=True)

    substrate_type: SubstrateType
    description: str = Field(min_length=1)
    unit: Unit
    base_rate: float = Field(ge=0)
    coating_modifiers: Dict[CoatingTier, PositiveFloat] = {}
    quality_modifiers: Dict[QualityTier, PositiveFloat] = {}


class WindowRate(BaseModel):
    window_type: WindowType
    size: WindowSize
    base_rate: float = Field(ge=0)
    coating_modifiers: Dict[CoatingTier, PositiveFloat] = {}
    quality_modifiers: Dict[QualityTier, PositiveFloat] = {}


class DoorRate(BaseModel):
    door_type: DoorType
    base_rate: float = Field(ge=0)
    coating_modifiers: Dict[CoatingTier, PositiveFloat] = {}
    quality_modifiers: Dict[QualityTier, PositiveFloat] = {}


class CabinetRate(BaseModel):
    size: CabinetFrontSize
    base_rate: float = Field(ge=0)
    coating_modifiers: Dict[CoatingTier, PositiveFloat] = {}
    quality_modifiers: Dict[QualityTier, PositiveFloat] = {}


class PricingSnapshot(BaseModel):
    entries: List[RateEntry]
    coating_modifiers: Dict[CoatingTier, float]
    quality_modifiers: Dict[QualityTier, float]
    stain_modifiers: Dict[StainTier, float]


class RatePreview(BaseModel):
    substrate_type: SubstrateType
    description: str
    coating_tier: CoatingTier
    quality_tier: QualityTier
    stain_tier: StainTier = StainTier.NONE
    unit: Optional[Unit] = None
    base_rate: float = 0.0
    unit_price: float = 0.0
    missing: bool = False


# --- Estimate input ---

class ExtraItem(BaseModel):
    """Any rate table item priced by an entered quantity (trim, gutters, shutters...)."""
    substrate_type: SubstrateType
    description: str
    quantity: float = Field(default=0.0, ge=0)
    coating_tier: Optional[CoatingTier] = None
    stain_tier: StainTier = StainTier.NONE
    label: Optional[str] = None


class WindowItem(BaseModel):
    window_type: WindowType
    size: WindowSize = WindowSize.MEDIUM
    count: int = Field(default=0, ge=0)
    stain_tier: StainTier = StainTier.NONE
    coating_tier: Optional[CoatingTier] = None


class DoorItem(BaseModel):
    door_type: DoorType
    count: int = Field(default=0, ge=0)
    stain_tier: StainTier = StainTier.NONE
    coating_tier: Optional[CoatingTier] = None


class RoomComponent(BaseModel):
    type: ComponentType
    coating_tier: Optional[CoatingTier] = None
    window_type: Optional[WindowType] = None
    window_size: WindowSize = WindowSize.MEDIUM
    door_type: Optional[DoorType] = None
    stain_tier: StainTier = StainTier.NONE
    count: int = Field(default=1, ge=0)

    @model_validator(mode="after")
    def _check_opening_type(self):
        if self.type == ComponentType.WINDOW and self.window_type is None:
            raise ValueError("Window components need a window_type")
        if self.type == ComponentType.DOOR and self.door_type is None:
            raise ValueError("Door components need a door_type")
        return self


class Room(BaseModel):
    name: str
    length: Optional[float] = Field(default=None, ge=0)
    width: Optional[float] = Field(default=None, ge=0)
    height: Optional[float] = Field(default=None, ge=0)
    surface_type: SurfaceType = SurfaceType.DRYWALL
    components: List[RoomComponent] = []
    extra_items: List[ExtraItem] = []


class Elevation(BaseModel):
    name: str
    width: Optional[float] = Field(default=None, ge=0)
    height: Optional[float] = Field(default=None, ge=0)


class ExteriorMeasurement(BaseModel):
    measurement_type: MeasurementType = MeasurementType.ELEVATION
    elevations: List[Elevation] = []
    perimeter: Optional[float] = Field(default=None, ge=0)
    average_height: Optional[float] = Field(default=None, ge=0)
    eave_length: float = Field(default=0.0, ge=0)
    body_surface: ExteriorSurface = ExteriorSurface.SIDING
    include_body: bool = True
    include_eaves: bool = False
    include_fascia: bool = False
    body_coating_tier: Optional[CoatingTier] = None
    eaves_coating_tier: Optional[CoatingTier] = None
    fascia_coating_tier: Optional[CoatingTier] = None
    windows: List[WindowItem] = []
    doors: List[DoorItem] = []
    extra_items: List[ExtraItem] = []


class CabinetryItem(BaseModel):
    name: str
    cabinet_type: CabinetType = CabinetType.LOWER
    small_fronts: int = Field(default=0, ge=0)
    medium_fronts: int = Field(default=0, ge=0)
    large_fronts: int = Field(default=0, ge=0)
    drawer_fronts: int = Field(default=0, ge=0)
    coating_tier: Optional[CoatingTier] = None
    stain_to_paint_conversion: bool = False


class EstimateInput(BaseModel):
    client_name: str = ""
    client_email: Optional[EmailStr] = None
    client_phone: str = ""
    project_address: str = ""
    project_category: ProjectCategory = ProjectCategory.BOTH
    project_type: str = ""
    quality_tier: QualityTier = QualityTier.COMMERCIAL
    coating_tier: CoatingTier = CoatingTier.PRIME_2COATS
    paint_quality: str = ""
    start_date: Optional[date] = None
    interior_rooms: List[Room] = []
    exterior_measurement: Optional[ExteriorMeasurement] = None
    cabinetry_items: List[CabinetryItem] = []
    additional_costs: float = Field(default=0.0, ge=0)
    notes: Optional[str] = None


# --- Estimate output ---

class LineItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    group: LineGroup
    substrate_type: Optional[SubstrateType] = None
    coating_tier: Optional[CoatingTier] = None
    quantity: float
    unit: Unit
    unit_price: float
    total: float


class CostBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    materials_cost: float = 0.0
    labor_cost: float = 0.0
    overhead_cost: float = 0.0
    profit_cost: float = 0.0
    additional_costs: float = 0.0
    subtotal: float = 0.0
    tax_rate: float = 0.0
    tax_amount: float = 0.0
    total: float = 0.0
    group_totals: Dict[LineGroup, float] = {}


class EstimateResult(BaseModel):
    line_items: List[LineItem] = []
    breakdown: CostBreakdown
    missing_pricing: List[str] = []


class EstimateRecord(EstimateInput):
    model_config = ConfigDict(frozen=True)

    id: str
    created_at: datetime
    valid_until: datetime
    line_items: List[LineItem] = []
    breakdown: CostBreakdown
    missing_pricing: List[str] = []


class EstimateSummary(BaseModel):
    id: str
    client_name: str
    project_address: str
    project_category: ProjectCategory
    total: float
    created_at: datetime
    valid_until: datetime
