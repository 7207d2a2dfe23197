from fastapi import APIRouter, Depends, status

from app.features.employer.schemas.employer import JobPost, OfferCreate
from app.features.employer.services.employer import EmployerService
from app.platform.api_client import ApiClient
from app.platform.dependencies import get_api_client, require_role
from app.platform.response import api_response
from app.platform.session import Role

router = APIRouter(
    prefix="/employer",
    tags=["Employer dashboard"],
    dependencies=[Depends(require_role(Role.EMPLOYER))],
)


def get_employer_service(client: ApiClient = Depends(get_api_client)) -> EmployerService:
    return EmployerService(client)


@router.get("", summary="Employer dashboard")
async def dashboard(service: EmployerService = Depends(get_employer_service)):
    profile = await service.get_profile()
    return api_response(data={"profile": profile}, message="Dashboard retrieved successfully")


@router.get("/profile", summary="Employer profile")
async def get_profile(service: EmployerService = Depends(get_employer_service)):
    profile = await service.get_profile()
    return api_response(data={"profile": profile}, message="Profile retrieved successfully")


@router.get("/workers/{category}", summary="Workers in a category")
async def workers_by_category(category: str, service: EmployerService = Depends(get_employer_service)):
    workers = await service.workers_by_category(category)
    return api_response(
        data={"workers": workers, "total": len(workers)},
        message="Workers retrieved successfully",
    )


@router.post("/offers", status_code=status.HTTP_201_CREATED, summary="Send a job offer to a worker")
async def send_offer(body: OfferCreate, service: EmployerService = Depends(get_employer_service)):
    result = await service.send_offer(body)
    return api_response(data=result, message="Offer sent successfully", status_code=status.HTTP_201_CREATED)


@router.post("/jobs", status_code=status.HTTP_201_CREATED, summary="Publish a job")
async def publish_job(body: JobPost, service: EmployerService = Depends(get_employer_service)):
    result = await service.publish_job(body)
    return api_response(data=result, message="Job published successfully", status_code=status.HTTP_201_CREATED)
