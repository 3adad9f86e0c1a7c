from .custom_blog_repository import CustomBlogRepository

__all__ = ["CustomBlogRepository"]
