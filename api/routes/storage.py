"""存储预签名相关路由。"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from api.dependencies import get_presign_service
from application.dto import (
    ObjectURLRequestDTO,
    ObjectURLResponseDTO,
    PresignUploadRequestDTO,
    PresignUploadResponseDTO,
)
from application.services.presign_service import PresignService
from core.response import ErrorResponse


router = APIRouter(
    prefix="/storage",
    tags=["Storage"],
)

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing or invalid input"},
    500: {"model": ErrorResponse, "description": "Server configuration or signing failure"},
}


@router.post(
    "/presigned-upload-url",
    summary="生成直传预签名 PUT URL",
    response_model=PresignUploadResponseDTO,
    responses=_ERROR_RESPONSES,
)
async def presign_upload(
    payload: PresignUploadRequestDTO,
    service: PresignService = Depends(get_presign_service),
):
    return await service.presign_upload(
        file_name=payload.file_name,
        content_type=payload.content_type,
    )


@router.post(
    "/object-url",
    summary="生成读取预签名 GET URL",
    response_model=ObjectURLResponseDTO,
    responses=_ERROR_RESPONSES,
)
async def object_url(
    payload: ObjectURLRequestDTO,
    service: PresignService = Depends(get_presign_service),
):
    return await service.presign_read(file_name=payload.file_name)
