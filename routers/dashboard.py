# routers/dashboard.py
from fastapi import APIRouter, Depends

from dependencies import StoreContext, get_store
from schemas.state import DashboardStats

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStats, summary="Portfolio statistics")
def get_dashboard_stats(store: StoreContext = Depends(get_store)):
     """Recomputed from unit and payment data on every load."""
     return store.state.dashboard_stats
