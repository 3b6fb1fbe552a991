from sqlalchemy import Column, String, DateTime, Text
from datetime import datetime
from .database import Base
import enum


# --- Pricing dimensions ---

class SubstrateType(str, enum.Enum):
    GYPSUM_BOARD = "Gypsum board"
    WOOD = "Wood"
    DOORS = "Doors"
    WINDOWS = "Windows"
    METAL = "Metal"
    MASONRY = "Masonry"


class CoatingTier(str, enum.Enum):
    SPOT_1COAT = "spot+1coat"
    SPOT_2COATS = "spot+2coats"
    PRIME_2COATS = "prime+2coats"   # reference tier, base rates are quoted here


class QualityTier(str, enum.Enum):
    PRODUCTION = "Production"
    COMMERCIAL = "Commercial"
    RESIDENTIAL = "Residential"
    HIGH_END = "High End"


class StainTier(str, enum.Enum):
    NONE = "none"
    STANDARD = "standard"
    CUSTOM = "custom"


class Unit(str, enum.Enum):
    SQ_FT = "sq ft"
    LN_FT = "ln ft"
    EACH = "ea"
    HOUR = "hour"


# --- Project / component vocabulary ---

class ProjectCategory(str, enum.Enum):
    INTERIOR = "Interior"
    EXTERIOR = "Exterior"
    BOTH = "Both"


class LineGroup(str, enum.Enum):
    """Logical groups the labor/materials split is applied to."""
    INTERIOR = "interior"
    EXTERIOR = "exterior"
    CABINETRY = "cabinetry"


class SurfaceType(str, enum.Enum):
    DRYWALL = "Drywall"
    PLASTER = "Plaster"
    WOOD = "Wood"
    BRICK = "Brick"
    CONCRETE = "Concrete"
    METAL = "Metal"


class ExteriorSurface(str, enum.Enum):
    SIDING = "siding"
    T111_BOARD_BATTEN = "t111_board_batten"
    STUCCO_CMU = "stucco_cmu"


class MeasurementType(str, enum.Enum):
    ELEVATION = "elevation"
    PERIMETER = "perimeter"


class ComponentType(str, enum.Enum):
    WALLS = "Walls"
    CEILING = "Ceiling"
    BASEBOARDS = "Baseboards"
    WINDOW = "Window"
    DOOR = "Door"


class WindowType(str, enum.Enum):
    WOOD_DIVIDED_LIGHT = "wood divided light"
    WOOD_SINGLE_FRAME = "wood single frame"
    METAL_SINGLE_FRAME = "metal single frame"
    METAL_DIVIDED_LIGHT = "metal divided light"


class WindowSize(str, enum.Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class DoorType(str, enum.Enum):
    WOOD_SLAB_NO_FRAME = "wood slab no frame"
    WOOD_SLAB_WITH_FRAME = "wood slab with frame"
    HOLLOW_METAL_WITH_FRAME = "hollow metal with frame"
    WOOD_DIVIDED_LIGHT_WITH_FRAME = "wood divided light with frame"


class CabinetType(str, enum.Enum):
    UPPER = "upper"
    LOWER = "lower"
    ISLAND = "island"
    PANTRY = "pantry"
    VANITY = "vanity"


class CabinetFrontSize(str, enum.Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    DRAWER = "drawer"


# --- Key-value persistence ---

class StoredValue(Base):
    """One key of the key-value store (estimate list, pricing overrides)."""
    __tablename__ = "stored_values"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
