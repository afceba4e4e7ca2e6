"""
Customer review API endpoints.
"""

from fastapi import APIRouter, Depends, File, UploadFile, status
from typing import List

from app.config import Settings
from app.services.auth import AdminContext
from app.services.review import ReviewService
from app.schemas.contact import MessageResponse
from app.schemas.review import (
    ImageUploadResponse,
    ReviewCreate,
    ReviewResponse,
    ReviewUpdate,
    ReviewUpdateResponse
)
from app.schemas.error import (
    get_admin_error_responses,
    get_error_responses,
    get_public_error_responses,
    get_upload_error_responses
)
from app.utils.dependencies import get_current_admin, get_review_service, get_settings_dep
from app.utils.file_utils import FileValidator


router = APIRouter(prefix="/reviews", tags=["Reviews"])
admin_router = APIRouter(prefix="/admin/reviews", tags=["Reviews (admin)"])


@router.get(
    "",
    response_model=List[ReviewResponse],
    summary="List reviews",
    responses=get_error_responses(500)
)
async def list_reviews(
    review_service: ReviewService = Depends(get_review_service)
):
    return await review_service.list_reviews()


@router.get(
    "/{review_id}",
    response_model=ReviewResponse,
    summary="Get review by ID",
    responses=get_public_error_responses()
)
async def get_review(
    review_id: str,
    review_service: ReviewService = Depends(get_review_service)
):
    return await review_service.get_review(review_id)


@admin_router.post(
    "/upload-image",
    response_model=ImageUploadResponse,
    summary="Upload review image",
    description="Upload one image (multipart field `file`) and return its public URL.",
    responses=get_upload_error_responses()
)
async def upload_review_image(
    file: List[UploadFile] = File(..., description="Image file to upload"),
    admin: AdminContext = Depends(get_current_admin),
    review_service: ReviewService = Depends(get_review_service),
    settings: Settings = Depends(get_settings_dep)
):
    """
    Upload a review image.

    The field is read as a list so that a request carrying several `file`
    parts is rejected instead of silently keeping the first one.
    """
    uploads = await FileValidator.read_uploads(file, max_files=1, max_size=settings.max_file_size)
    url = await review_service.upload_image(uploads[0])
    return {"url": url}


@admin_router.post(
    "",
    response_model=ReviewResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create review",
    responses=get_admin_error_responses()
)
async def create_review(
    review_data: ReviewCreate,
    admin: AdminContext = Depends(get_current_admin),
    review_service: ReviewService = Depends(get_review_service)
):
    return await review_service.create_review(review_data, admin.identity)


@admin_router.put(
    "/{review_id}",
    response_model=ReviewUpdateResponse,
    summary="Update review",
    description="Update the supplied fields of a review; `comments` is accepted as an alias of `review`.",
    responses=get_admin_error_responses()
)
async def update_review(
    review_id: str,
    review_data: ReviewUpdate,
    admin: AdminContext = Depends(get_current_admin),
    review_service: ReviewService = Depends(get_review_service)
):
    updated = await review_service.update_review(review_id, review_data, admin.identity)
    return {"message": "Review updated successfully", "review": updated}


@admin_router.delete(
    "/{review_id}",
    response_model=MessageResponse,
    summary="Delete review",
    responses=get_admin_error_responses()
)
async def delete_review(
    review_id: str,
    admin: AdminContext = Depends(get_current_admin),
    review_service: ReviewService = Depends(get_review_service)
):
    await review_service.delete_review(review_id)
    return {"message": "Review deleted successfully"}
