from fastapi import APIRouter, Depends

from app.features.admin.services.dashboard import AdminDashboardService
from app.platform.api_client import ApiClient
from app.platform.dependencies import get_api_client
from app.platform.response import api_response
from app.platform.utils.display import stat_cards

router = APIRouter(tags=["Admin - Dashboard"])


@router.get(
    "/stats",
    summary="Get dashboard statistics",
)
async def get_dashboard_stats(client: ApiClient = Depends(get_api_client)):
    """
    Get overall marketplace statistics:
    - Total workers
    - Total employers
    - Total jobs
    - Active jobs
    """
    service = AdminDashboardService(client)
    stats = await service.get_dashboard_stats()
    cards = stat_cards([
        ("Total Workers", stats.total_workers),
        ("Total Employers", stats.total_employers),
        ("Total Jobs", stats.total_jobs),
        ("Active Jobs", stats.active_jobs),
    ])

    return api_response(
        data={"stats": stats, "cards": cards},
        message="Dashboard statistics retrieved successfully",
    )
