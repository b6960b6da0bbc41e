"""Stand-alone conflict check, without uploading."""

from fastapi import APIRouter, Depends

from .....composition.container import Container, get_container
from ..deps import get_owner_id
from ..models import ConflictCheckRequest, ConflictReportResponse

router = APIRouter(prefix="/api/v1/conflicts", tags=["conflicts"])


@router.post("/check", response_model=ConflictReportResponse, response_model_by_alias=True)
def check_conflicts(
    request: ConflictCheckRequest,
    owner_id: str = Depends(get_owner_id),
    container: Container = Depends(get_container),
) -> ConflictReportResponse:
    """Report near-duplicates of ``text`` among the caller's files."""
    report = container.conflict_detector().detect_conflicts(
        request.text, request.name, owner_id, threshold=request.threshold
    )
    return ConflictReportResponse.from_report(report)
