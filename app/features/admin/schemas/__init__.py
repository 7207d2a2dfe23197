from .dashboard import AdminStats
from .verification import (
    RejectionRequest,
    Verification,
    VerificationDocument,
    VerificationStatus,
)
