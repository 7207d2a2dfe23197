from typing import Any, List

from app.features.employer.schemas.employer import EmployerProfile, JobPost, OfferCreate, WorkerSummary
from app.platform.api_client import ApiClient, parse_list, parse_response
from app.platform.logger import get_logger
from app.platform.schemas import unwrap, unwrap_list

logger = get_logger("employer_service")


class EmployerService:
    def __init__(self, client: ApiClient):
        self.client = client

    async def get_profile(self) -> EmployerProfile:
        payload = await self.client.get("/employer/profile")
        return parse_response(EmployerProfile, unwrap(payload, "profile"))

    async def workers_by_category(self, category: str) -> List[WorkerSummary]:
        payload = await self.client.get(f"/employer/workers/{category}")
        return parse_list(WorkerSummary, unwrap_list(payload, "workers"))

    async def send_offer(self, offer: OfferCreate) -> Any:
        payload = await self.client.post("/employer/offers", json=offer.to_payload())
        logger.info(f"Offer sent to worker {offer.worker_id}")
        return payload

    async def publish_job(self, job: JobPost) -> Any:
        payload = await self.client.post("/employer/jobs", json=job.to_payload())
        logger.info(f"Job published in {job.category}")
        return payload
