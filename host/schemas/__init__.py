from .blog_schema import BlogCreate, PostCreate

__all__ = ["BlogCreate", "PostCreate"]
