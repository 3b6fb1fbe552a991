from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .config import settings
from .database import engine, Base
from .routers import estimates, pricing

logger = logging.getLogger("paint_estimator")

# Create tables (handles new tables but won't add columns to existing ones)
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Paint Estimator",
    description=f"Painting estimate calculator for {settings.COMPANY_NAME}",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(estimates.router, prefix="/api")
app.include_router(pricing.router, prefix="/api")

logger.info("Paint Estimator API ready (database: %s)", settings.DATABASE_URL.split(":", 1)[0])


@app.get("/health")
def health():
    return {"status": "ok", "app": "paint-estimator"}
