# app/api/routers/analytics.py
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.deps import require_admin
from app.data.database import get_db
from app.domain.schemas import DashboardOut, RevenuePoint, ProductStatsOut
from app.services.analytics_service import AnalyticsService

# caly router tylko dla admina
router = APIRouter(prefix="/analytics", tags=["analytics"], dependencies=[Depends(require_admin)])


@router.get("/dashboard", response_model=DashboardOut)
def dashboard(db: Session = Depends(get_db)):
    return AnalyticsService(db).dashboard()


@router.get("/revenue", response_model=List[RevenuePoint])
def revenue(period: str = Query("7days"), db: Session = Depends(get_db)):
    return AnalyticsService(db).revenue(period)


@router.get("/products", response_model=List[ProductStatsOut])
def product_stats(db: Session = Depends(get_db)):
    return AnalyticsService(db).product_stats()
