"""
API依赖项 - 预签名服务装配
"""
from fastapi import Depends

from application.ports.storage import PresignPort
from application.services.presign_service import PresignService
from infrastructure.adapters.storage_port import SignerPortAdapter
from infrastructure.external.storage import StorageConfig, get_storage_config


async def get_presign_port(
    config: StorageConfig = Depends(get_storage_config),
) -> PresignPort:
    return SignerPortAdapter(config)


async def get_presign_service(
    presigner: PresignPort = Depends(get_presign_port),
    config: StorageConfig = Depends(get_storage_config),
) -> PresignService:
    return PresignService(
        presigner,
        upload_expires_in=config.upload_expires_in,
        read_expires_in=config.read_expires_in,
    )
