# marketplace/schemas/dashboard.py
from marketplace.schemas.common import CamelModel


class DashboardStats(CamelModel):
    service_count: int
    pending_bookings: int
    total_earnings: float


class DashboardResponse(CamelModel):
    stats: DashboardStats
