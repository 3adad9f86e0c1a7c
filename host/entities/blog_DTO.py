from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
from .page import PageDTO

@dataclass(slots=True)
class PostDTO:
    id: int
    title: str
    content: Optional[str]

@dataclass(slots=True)
class BlogDTO:
    """Blog row with its posts."""
    id: int
    url: str
    title: Optional[str]
    created_at: Optional[datetime]
    posts: List[PostDTO] = field(default_factory=list)

BlogPageDTO = PageDTO[BlogDTO]
