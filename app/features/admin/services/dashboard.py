from app.features.admin.schemas.dashboard import AdminStats
from app.platform.api_client import ApiClient, parse_response
from app.platform.schemas import unwrap


class AdminDashboardService:
    def __init__(self, client: ApiClient):
        self.client = client

    async def get_dashboard_stats(self) -> AdminStats:
        payload = await self.client.get("/admin/stats")
        return parse_response(AdminStats, unwrap(payload, "stats"))
