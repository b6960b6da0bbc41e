"""Stored file listing and deletion."""

import logging

from fastapi import APIRouter, Depends

from .....composition.container import Container, get_container
from ..deps import get_owner_id
from ..models import ClearResponse, FileInfo, FileListResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/files", tags=["files"])


@router.get("", response_model=FileListResponse)
def list_files(
    owner_id: str = Depends(get_owner_id),
    container: Container = Depends(get_container),
) -> FileListResponse:
    """List the caller's files, newest first."""
    records = container.file_service().list_files(owner_id)
    return FileListResponse(files=[FileInfo.from_record(r) for r in records], count=len(records))


@router.delete("/{document_id}", response_model=FileInfo)
def delete_file(
    document_id: str,
    owner_id: str = Depends(get_owner_id),
    container: Container = Depends(get_container),
) -> FileInfo:
    """Delete one file. Blob removal failures are logged, not returned."""
    record = container.file_service().delete_file(owner_id, document_id)
    return FileInfo.from_record(record)


@router.delete("", response_model=ClearResponse)
def clear_files(
    owner_id: str = Depends(get_owner_id),
    container: Container = Depends(get_container),
) -> ClearResponse:
    """Delete all of the caller's files."""
    deleted = container.file_service().clear_files(owner_id)
    logger.info("Owner %s cleared %d file(s)", owner_id, deleted)
    return ClearResponse(deleted=deleted)
