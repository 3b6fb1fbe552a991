"""FastAPI dependencies shared by the routers."""

from fastapi import Depends
from sqlalchemy.orm import Session

from .database import get_db
from .estimate_store import EstimateRepository
from .pricing_engine import PricingEngine
from .storage import KeyValueStore, SqlKeyValueStore


def get_store(db: Session = Depends(get_db)) -> KeyValueStore:
    return SqlKeyValueStore(db)


def get_engine(store: KeyValueStore = Depends(get_store)) -> PricingEngine:
    """Engine over the current overrides. Resolved once per request."""
    return PricingEngine.from_store(store)


def get_repository(store: KeyValueStore = Depends(get_store)) -> EstimateRepository:
    return EstimateRepository(store)
