from fastapi import APIRouter

from app.features.admin.routes import router as admin_router
from app.features.auth.routes.register import router as register_router
from app.features.auth.routes.signin import router as signin_router
from app.features.employer.routes.employer import router as employer_router
from app.features.health.routes.health import router as health_router
from app.features.worker.routes.worker import router as worker_router

api_router = APIRouter()


# Register all feature routes
api_router.include_router(health_router)
api_router.include_router(signin_router)
api_router.include_router(register_router)
api_router.include_router(worker_router)
api_router.include_router(employer_router)
api_router.include_router(admin_router)
