from pydantic import BaseModel, ConfigDict, Field
from typing import List


class UploadResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    key: str
    id: str
    image_url: str = Field(alias="imageUrl")
    position: int
    is_primary: bool = Field(alias="isPrimary")


class PhotoPosition(BaseModel):
    id: str
    position: int = Field(..., ge=0)


class ReorderRequest(BaseModel):
    photos: List[PhotoPosition]


class MessageResponse(BaseModel):
    success: bool = True
    message: str
