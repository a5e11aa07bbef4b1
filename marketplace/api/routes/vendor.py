# marketplace/api/routes/vendor.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from marketplace.core.security import Identity, require_vendor
from marketplace.db.base import get_db
from marketplace.schemas.dashboard import DashboardResponse, DashboardStats
from marketplace.services.dashboard_service import DashboardService

router = APIRouter(prefix="/vendor", tags=["vendor"])


# --------------------------
# /vendor/dashboard
# --------------------------
@router.get("/dashboard", response_model=DashboardResponse)
def vendor_dashboard(db: Session = Depends(get_db), identity: Identity = Depends(require_vendor)):
    stats = DashboardService(db).vendor_stats(identity.user_id)
    return DashboardResponse(stats=DashboardStats(**stats))
