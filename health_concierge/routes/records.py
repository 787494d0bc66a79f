"""Member profile and health record routes."""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query

from ..errors import RecordNotFoundError
from ..logging_config import get_logger
from ..models.health import HealthPlan, MedicalHistory, RiskPrediction, TravelAdvisory, UserProfile
from ..services.storage import Storage, get_storage

logger = get_logger(__name__)

router = APIRouter(tags=["records"])


@router.get("/profile/{user_id}", response_model=UserProfile)
async def get_profile(user_id: str, storage: Storage = Depends(get_storage)) -> UserProfile:
    profile = await storage.get_user_profile(user_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="User profile not found")
    return profile


@router.post("/profile", response_model=UserProfile)
async def create_profile(profile: UserProfile, storage: Storage = Depends(get_storage)) -> UserProfile:
    try:
        return await storage.create_user_profile(profile)
    except Exception as e:
        logger.error(f"Error creating user profile: {e}")
        raise HTTPException(status_code=500, detail="Failed to create user profile")


@router.put("/profile/{user_id}", response_model=UserProfile)
async def update_profile(
    user_id: str,
    updates: Dict[str, Any] = Body(...),
    storage: Storage = Depends(get_storage),
) -> UserProfile:
    """Partially update a profile; keys may be camelCase or snake_case."""
    try:
        return await storage.update_user_profile(user_id, updates)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error updating user profile {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update user profile")


@router.get("/medical-history/{user_id}", response_model=List[MedicalHistory])
async def get_medical_history(
    user_id: str,
    category: Optional[str] = Query(None),
    storage: Storage = Depends(get_storage),
) -> List[MedicalHistory]:
    """Medical history records, newest first."""
    return await storage.get_medical_history(user_id, category)


@router.post("/medical-history", response_model=MedicalHistory)
async def add_medical_history(record: MedicalHistory, storage: Storage = Depends(get_storage)) -> MedicalHistory:
    return await storage.add_medical_history(record)


@router.get("/health-plans/{user_id}", response_model=List[HealthPlan])
async def get_health_plans(
    user_id: str,
    status: Optional[str] = Query(None),
    storage: Storage = Depends(get_storage),
) -> List[HealthPlan]:
    return await storage.get_health_plans(user_id, status)


@router.post("/health-plans", response_model=HealthPlan)
async def add_health_plan(plan: HealthPlan, storage: Storage = Depends(get_storage)) -> HealthPlan:
    return await storage.add_health_plan(plan)


@router.get("/risk-predictions/{user_id}", response_model=List[RiskPrediction])
async def get_risk_predictions(user_id: str, storage: Storage = Depends(get_storage)) -> List[RiskPrediction]:
    return await storage.get_risk_predictions(user_id)


@router.get("/travel-advisories/{user_id}", response_model=List[TravelAdvisory])
async def get_travel_advisories(
    user_id: str,
    status: Optional[str] = Query(None),
    storage: Storage = Depends(get_storage),
) -> List[TravelAdvisory]:
    return await storage.get_travel_advisories(user_id, status)


@router.get("/patient-summary/{user_id}")
async def get_patient_summary(user_id: str, storage: Storage = Depends(get_storage)) -> Dict[str, Any]:
    """Profile, recent records, active plans and chat activity in one payload."""
    return await storage.get_patient_summary(user_id)


@router.get("/search-medical-records/{user_id}")
async def search_medical_records(
    user_id: str,
    q: Optional[str] = Query(None),
    storage: Storage = Depends(get_storage),
) -> List[Dict[str, Any]]:
    if not q:
        raise HTTPException(status_code=400, detail="Search query is required")
    return await storage.search_medical_records(user_id, q)


__all__ = ["router"]
