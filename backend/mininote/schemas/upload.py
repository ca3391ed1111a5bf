"""
MiniNote Backend - Pydantic Response Schemas
=============================================

What:  API contract for the JSON returned by POST /upload.
Who:   Consumed by the inline upload script of the editor page, which
       inserts `![](url)` for images and `[name](url)` otherwise.
"""

from pydantic import BaseModel, Field

from mininote.services.upload_store import StoredUpload


class UploadResponse(BaseModel):
    """Reference to a stored upload."""

    url: str = Field(description="Path of the stored file, e.g. /_tmp/1718000000_photo.png")
    is_image: bool = Field(description="True if the extension is a known image type")
    name: str = Field(description="Stored file name")

    @classmethod
    def from_stored(cls, stored: StoredUpload) -> "UploadResponse":
        return cls(url=stored.url, is_image=stored.is_image, name=stored.name)
