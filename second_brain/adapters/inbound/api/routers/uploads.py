"""Upload decision flow: start, proceed, cancel."""

from fastapi import APIRouter, Depends, Header, Request
from fastapi.concurrency import run_in_threadpool

from .....core.domain import IncomingFile
from ..deps import GateRegistry, get_gate_registry, get_owner_id
from ..models import ConflictReportResponse, GateStateResponse, UploadResponse

router = APIRouter(prefix="/api/v1/uploads", tags=["uploads"])


@router.put("/{file_name}", response_model=UploadResponse)
async def start_upload(
    file_name: str,
    request: Request,
    content_type: str = Header(default="application/octet-stream"),
    owner_id: str = Depends(get_owner_id),
    registry: GateRegistry = Depends(get_gate_registry),
) -> UploadResponse:
    """Upload raw bytes. Returns ``awaiting_decision`` when near-duplicates exist.

    Responds 409 if the caller already has an upload in progress or already
    stores a file with this name.
    """
    data = await request.body()
    incoming = IncomingFile(name=file_name, data=data, content_type=content_type)
    with registry.checkout(owner_id) as gate:
        outcome = await run_in_threadpool(gate.start, incoming)
    return UploadResponse.from_outcome(outcome)


@router.post("/proceed", response_model=UploadResponse)
def proceed_upload(
    owner_id: str = Depends(get_owner_id),
    registry: GateRegistry = Depends(get_gate_registry),
) -> UploadResponse:
    """Keep the pending upload despite the conflict warning."""
    with registry.checkout(owner_id) as gate:
        return UploadResponse.from_outcome(gate.proceed())


@router.post("/cancel", response_model=UploadResponse)
def cancel_upload(
    owner_id: str = Depends(get_owner_id),
    registry: GateRegistry = Depends(get_gate_registry),
) -> UploadResponse:
    """Discard the pending upload."""
    with registry.checkout(owner_id) as gate:
        return UploadResponse.from_outcome(gate.cancel())


@router.get("/state", response_model=GateStateResponse)
def upload_state(
    owner_id: str = Depends(get_owner_id),
    registry: GateRegistry = Depends(get_gate_registry),
) -> GateStateResponse:
    with registry.checkout(owner_id) as gate:
        return GateStateResponse(
            state=gate.state.value,
            pending_file=gate.pending.file.name if gate.pending else None,
            report=ConflictReportResponse.from_report(gate.report) if gate.report else None,
        )
