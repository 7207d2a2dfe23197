from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.features.worker.schemas.worker import ProfileUpdate
from app.features.worker.services.worker import WorkerService, filter_jobs, profile_completion
from app.platform.api_client import ApiClient
from app.platform.dependencies import get_api_client, require_role
from app.platform.response import api_response
from app.platform.session import Role
from app.platform.utils.display import stat_cards, status_badge

router = APIRouter(
    prefix="/dashboard",
    tags=["Worker dashboard"],
    dependencies=[Depends(require_role(Role.WORKER))],
)


def get_worker_service(client: ApiClient = Depends(get_api_client)) -> WorkerService:
    return WorkerService(client)


@router.get("", summary="Worker dashboard summary")
async def dashboard(service: WorkerService = Depends(get_worker_service)):
    stats = await service.dashboard_stats()
    cards = stat_cards([
        ("Profile Completion", f"{stats.profile_completion}%"),
        ("Total Applications", stats.total_applications),
        ("Pending Offers", stats.pending_offers),
        ("Accepted Offers", stats.accepted_offers),
    ])
    return api_response(
        data={"stats": stats, "cards": cards, "profile_complete": stats.profile_completion >= 100},
        message="Dashboard retrieved successfully",
    )


@router.get("/profile", summary="Worker profile")
async def get_profile(service: WorkerService = Depends(get_worker_service)):
    profile = await service.get_profile()
    return api_response(
        data={"profile": profile, "completion": profile_completion(profile)},
        message="Profile retrieved successfully",
    )


@router.put("/profile", summary="Update worker profile")
async def update_profile(
    body: ProfileUpdate,
    service: WorkerService = Depends(get_worker_service),
):
    profile = await service.update_profile(body)
    return api_response(data={"profile": profile}, message="Profile updated successfully")


@router.get("/jobs", summary="Browse jobs")
async def list_jobs(
    category: Optional[str] = Query(None, description="Category to show, or All"),
    q: Optional[str] = Query(None, description="Text to search for in title and description"),
    available: bool = Query(False, description="Only jobs still open for applications"),
    service: WorkerService = Depends(get_worker_service),
):
    jobs = await service.list_jobs(available_only=available)
    matches = filter_jobs(jobs, category=category, query=q)
    return api_response(
        data={"jobs": matches, "total": len(matches)},
        message="Jobs retrieved successfully",
    )


@router.post("/jobs/{job_id}/apply", summary="Apply for a job")
async def apply_for_job(job_id: str, service: WorkerService = Depends(get_worker_service)):
    result = await service.apply(job_id)
    return api_response(data=result, message="Application submitted successfully")


@router.get("/applications", summary="Jobs this worker has applied for")
async def list_applications(service: WorkerService = Depends(get_worker_service)):
    applications = await service.list_applications()
    return api_response(
        data={
            "applications": [
                {**item.model_dump(mode="json", by_alias=True), "badge": status_badge(item.status)}
                for item in applications
            ]
        },
        message="Applications retrieved successfully",
    )


@router.get("/offers", summary="Job offers received")
async def list_offers(service: WorkerService = Depends(get_worker_service)):
    offers = await service.list_offers()
    return api_response(
        data={
            "offers": [
                {**offer.model_dump(mode="json", by_alias=True), "badge": status_badge(offer.status)}
                for offer in offers
            ]
        },
        message="Offers retrieved successfully",
    )


@router.post("/offers/{offer_id}/accept", summary="Accept an offer")
async def accept_offer(offer_id: str, service: WorkerService = Depends(get_worker_service)):
    await service.respond_to_offer(offer_id, "accepted")
    return api_response(
        data={"id": offer_id, "status": "accepted", "badge": status_badge("accepted")},
        message="Offer accepted",
    )


@router.post("/offers/{offer_id}/reject", summary="Reject an offer")
async def reject_offer(offer_id: str, service: WorkerService = Depends(get_worker_service)):
    await service.respond_to_offer(offer_id, "rejected")
    return api_response(
        data={"id": offer_id, "status": "rejected", "badge": status_badge("rejected")},
        message="Offer rejected",
    )
