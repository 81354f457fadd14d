from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Like(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId")


class Comment(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    author: str
    author_display_name: str = Field(..., alias="authorDisplayName")
    author_avatar_ref: Optional[str] = Field(None, alias="authorAvatarRef")
    text: str
    created_at: str = Field(..., alias="createdAt")


class Post(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    author: str
    author_display_name: str = Field(..., alias="authorDisplayName")
    author_avatar_ref: Optional[str] = Field(None, alias="authorAvatarRef")
    text: str
    created_at: str = Field(..., alias="createdAt")
    likes: List[Like] = []
    comments: List[Comment] = []

    @classmethod
    def from_document(cls, doc_id: str, data: dict) -> "Post":
        """Build a post from a stored document and its id"""
        return cls.model_validate({**data, "id": doc_id})

    def to_document(self) -> dict:
        """Document body as stored; the id lives in the document path"""
        return self.model_dump(by_alias=True, exclude={"id"})


class PostCreate(BaseModel):
    text: str


class CommentRequest(BaseModel):
    text: str
