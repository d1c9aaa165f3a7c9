"""Admin image upload router."""

from fastapi import APIRouter, Depends, File, Request, UploadFile, status

from kasupe.api.deps import get_current_admin
from kasupe.schemas.common import UploadResponse
from kasupe.services.storage_service import save_image

router = APIRouter(
    prefix="/api/v1/admin/uploads",
    tags=["admin-uploads"],
    dependencies=[Depends(get_current_admin)],
)


@router.post("/{folder}", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_image(folder: str, request: Request, file: UploadFile = File(...)) -> UploadResponse:
    """Store an image under ``folder`` (cars, blogs or testimonials) and return its public URL."""
    relative_path = await save_image(file, folder)
    return UploadResponse(url=f"{str(request.base_url).rstrip('/')}/uploads/{relative_path}")
