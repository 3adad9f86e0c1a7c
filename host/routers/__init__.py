from .blog_router import router as blog_router

__all__ = ["blog_router"]
