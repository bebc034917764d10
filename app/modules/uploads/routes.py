from fastapi import APIRouter, Depends, UploadFile, File, Form
from app.core.dependencies import get_current_user, get_storage
from app.database.supabase_client import get_service_supabase
from app.modules.auth.schemas import AuthenticatedUser
from app.modules.uploads.r2_storage import R2Storage
from app.modules.uploads.schemas import UploadResponse, ReorderRequest, MessageResponse
from app.modules.uploads.service import UploadService
from supabase import Client
from typing import Optional

router = APIRouter(prefix="/upload", tags=["upload"])


def get_upload_service(
    supabase: Client = Depends(get_service_supabase),
    storage: R2Storage = Depends(get_storage),
) -> UploadService:
    return UploadService(supabase, storage)


@router.post("", response_model=UploadResponse)
async def upload_photo(
    image: Optional[UploadFile] = File(None),
    replace_id: Optional[str] = Form(None, alias="replaceId"),
    user: AuthenticatedUser = Depends(get_current_user),
    service: UploadService = Depends(get_upload_service)
):
    """
    Upload one profile image (multipart field "image") to object storage.
    With replaceId the existing photo keeps its id and position.
    Returns the storage key recorded as the photo's imageUrl.
    """
    return await service.upload_photo(user.id, image, replace_id)


# declared before /{photo_id} routes so "reorder" is not taken as an id
@router.patch("/reorder", response_model=MessageResponse)
async def reorder_photos(
    request: ReorderRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: UploadService = Depends(get_upload_service)
):
    """Set photo positions; position 0 becomes the primary photo"""
    service.reorder_photos(user.id, request.photos)
    return MessageResponse(message="Photos reordered successfully")


@router.delete("/{photo_id}", response_model=MessageResponse)
async def delete_photo(
    photo_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: UploadService = Depends(get_upload_service)
):
    """Delete a photo and renumber the remaining ones"""
    service.delete_photo(user.id, photo_id)
    return MessageResponse(message="Photo deleted successfully")
