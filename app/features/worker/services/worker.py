import asyncio
from typing import List, Optional

from app.features.worker.schemas.worker import (
    Application,
    DashboardStats,
    Job,
    Offer,
    OfferResponse,
    ProfileUpdate,
    WorkerProfile,
)
from app.platform.api_client import ApiClient, parse_list, parse_response
from app.platform.logger import get_logger
from app.platform.schemas import unwrap, unwrap_list

logger = get_logger("worker_service")

ALL_CATEGORIES = "All"
PROFILE_FIELDS = ("name", "phone", "email", "category", "skills", "current_location")


def profile_completion(profile: WorkerProfile) -> int:
    """Share of the core profile fields that are filled in, as a whole percentage."""
    filled = sum(1 for field in PROFILE_FIELDS if getattr(profile, field))
    return round(filled * 100 / len(PROFILE_FIELDS))


def filter_jobs(jobs: List[Job], category: Optional[str] = None, query: Optional[str] = None) -> List[Job]:
    query = (query or "").strip().lower()
    matches = []
    for job in jobs:
        if category and category != ALL_CATEGORIES and job.category != category:
            continue
        if query:
            haystack = " ".join(filter(None, [job.job_title, job.description, job.category])).lower()
            if query not in haystack:
                continue
        matches.append(job)
    return matches


class WorkerService:
    def __init__(self, client: ApiClient):
        self.client = client

    async def get_profile(self) -> WorkerProfile:
        payload = await self.client.get("/worker/profile")
        return parse_response(WorkerProfile, unwrap(payload, "profile"))

    async def update_profile(self, update: ProfileUpdate) -> WorkerProfile:
        payload = await self.client.put("/worker/profile", json=update.to_payload())
        logger.info("Worker profile updated")
        profile = unwrap(payload, "profile")
        if not isinstance(profile, dict) or not profile:
            return WorkerProfile.model_validate(update.to_payload())
        return parse_response(WorkerProfile, profile)

    async def list_jobs(self, available_only: bool = False) -> List[Job]:
        path = "/worker/jobs/available" if available_only else "/worker/jobs"
        payload = await self.client.get(path)
        return parse_list(Job, unwrap_list(payload, "jobs"))

    async def apply(self, job_id: str):
        payload = await self.client.post(f"/worker/jobs/{job_id}/apply")
        logger.info(f"Applied for job {job_id}")
        return payload

    async def list_applications(self) -> List[Application]:
        payload = await self.client.get("/worker/applications")
        return parse_list(Application, unwrap_list(payload, "applications"))

    async def list_offers(self) -> List[Offer]:
        payload = await self.client.get("/worker/offers")
        return parse_list(Offer, unwrap_list(payload, "offers"))

    async def respond_to_offer(self, offer_id: str, response: str):
        body = OfferResponse(response=response)
        payload = await self.client.post(f"/worker/offers/{offer_id}/respond", json=body.to_payload())
        logger.info(f"Offer {offer_id} {response}")
        return payload

    async def dashboard_stats(self) -> DashboardStats:
        profile, applications, offers = await asyncio.gather(
            self.get_profile(), self.list_applications(), self.list_offers()
        )
        return DashboardStats(
            profile_completion=profile_completion(profile),
            total_applications=len(applications),
            pending_offers=sum(1 for offer in offers if offer.status == "pending"),
            accepted_offers=sum(1 for offer in offers if offer.status == "accepted"),
        )
