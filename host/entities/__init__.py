from .blog_DTO import BlogDTO, BlogPageDTO, PostDTO
from .page import PageDTO

__all__ = [
    "BlogDTO", "BlogPageDTO", "PostDTO",
    "PageDTO",
]
