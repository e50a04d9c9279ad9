"""
数据传输对象（DTO）- 应用层与表现层之间的数据传输

线上调用方（前端上传流程）使用 camelCase 字段名，DTO 通过 alias 对齐。
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DTOBase(BaseModel):
    """Base DTO: accept both alias (camelCase) and field names."""

    model_config = ConfigDict(populate_by_name=True)


class PresignUploadRequestDTO(DTOBase):
    """Input payload for requesting a presigned upload.

    Fields are optional at the schema level so that a missing value is
    reported as a 400 by the service rather than a schema error.
    """

    file_name: Optional[str] = Field(default=None, alias="fileName")
    content_type: Optional[str] = Field(default=None, alias="contentType")

    @field_validator("file_name", "content_type")
    def _strip_empty(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ObjectURLRequestDTO(DTOBase):
    """Input payload for requesting a presigned read URL."""

    file_name: Optional[str] = Field(default=None, alias="fileName")

    @field_validator("file_name")
    def _strip_empty(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class PresignUploadResponseDTO(DTOBase):
    """Presigned PUT returned to clients."""

    presigned_url: str = Field(alias="presignedUrl")
    public_url: str = Field(alias="publicUrl")
    file_name: str = Field(alias="fileName")


class ObjectURLResponseDTO(DTOBase):
    """Presigned GET returned to clients."""

    url: str
    file_name: str = Field(alias="fileName")
