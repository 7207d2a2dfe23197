from app.platform.schemas import CamelModel


class AdminStats(CamelModel):
    total_workers: int = 0
    total_employers: int = 0
    total_jobs: int = 0
    active_jobs: int = 0
