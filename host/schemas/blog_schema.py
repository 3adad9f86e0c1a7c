from typing import List, Optional
from pydantic import BaseModel, Field


class PostCreate(BaseModel):
    """Input schema for a post created together with its blog."""
    title: str = Field(..., min_length=1, max_length=200)
    content: Optional[str] = None


class BlogCreate(BaseModel):
    """Input schema to create a blog."""
    url: str = Field(..., min_length=1, max_length=300)
    title: Optional[str] = Field(None, max_length=200)
    posts: List[PostCreate] = Field(default_factory=list)

    model_config = {
        "json_schema_extra": {
            "example": {
                "url": "https://blogs.example.com/dotnet",
                "title": "Unit of work notes",
                "posts": [{"title": "Paging", "content": "Offset and limit"}],
            }
        }
    }
