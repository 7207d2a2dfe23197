from fastapi import APIRouter, Depends

from app.features.admin.routes.dashboard import router as dashboard_router
from app.features.admin.routes.verifications import router as verifications_router
from app.platform.dependencies import require_role
from app.platform.session import Role


router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(require_role(Role.ADMIN))])

router.include_router(dashboard_router)
router.include_router(verifications_router)
