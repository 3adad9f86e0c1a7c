from .base import Base
from .blog import Blog
from .post import Post

__all__ = [
    "Base",
    "Blog",
    "Post",
]
