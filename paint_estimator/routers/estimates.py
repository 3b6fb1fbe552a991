from fastapi import APIRouter, Depends, HTTPException
from typing import List

from ..dependencies import get_engine, get_repository
from ..estimate_store import EstimateRepository, EstimateStoreUnreadable
from ..pricing_engine import PricingEngine
from ..schemas import EstimateInput, EstimateRecord, EstimateResult, EstimateSummary

router = APIRouter(prefix="/estimates", tags=["estimates"])


@router.post("/calculate", response_model=EstimateResult)
def calculate(estimate_input: EstimateInput, engine: PricingEngine = Depends(get_engine)):
    """Live recalculation. Nothing is stored."""
    return engine.calculate_estimate(estimate_input)


@router.post("/", response_model=EstimateRecord)
def create_estimate(
    estimate_input: EstimateInput,
    engine: PricingEngine = Depends(get_engine),
    repo: EstimateRepository = Depends(get_repository),
):
    record = engine.create_estimate(estimate_input)
    try:
        return repo.add(record)
    except EstimateStoreUnreadable as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.get("/", response_model=List[EstimateRecord])
def list_estimates(repo: EstimateRepository = Depends(get_repository)):
    return repo.list()


@router.get("/summaries", response_model=List[EstimateSummary])
def list_estimate_summaries(repo: EstimateRepository = Depends(get_repository)):
    return repo.summaries()


@router.get("/{estimate_id}", response_model=EstimateRecord)
def get_estimate(estimate_id: str, repo: EstimateRepository = Depends(get_repository)):
    record = repo.get(estimate_id)
    if not record:
        raise HTTPException(status_code=404, detail="Estimate not found")
    return record


@router.delete("/{estimate_id}")
def delete_estimate(estimate_id: str, repo: EstimateRepository = Depends(get_repository)):
    try:
        deleted = repo.delete(estimate_id)
    except EstimateStoreUnreadable as e:
        raise HTTPException(status_code=409, detail=str(e))
    if not deleted:
        raise HTTPException(status_code=404, detail="Estimate not found")
    return {"ok": True}
