"""Pydantic DTOs (Data Transfer Objects) for the Article feature."""

from datetime import datetime

from pydantic import BaseModel, Field


class ArticleCreate(BaseModel):
    """Schema for creating a new article."""

    title: str = Field(..., min_length=1, examples=["Getting Started"])
    content: str = Field("", examples=["<p>Hello from the editor.</p>"])


class ArticleCreateRequest(ArticleCreate):
    """API payload — may echo a draft id issued by the create form."""

    id: str | None = Field(None, examples=["ab12CD34"])


class ArticleResponse(BaseModel):
    """Schema returned to the client."""

    id: str
    title: str
    content: str
    created_at: datetime

    model_config = {"from_attributes": True}


class UploadResponse(BaseModel):
    """Image upload result in the shape the TinyMCE upload handler expects."""

    location: str
