from .routes import content_router, public_content_router

__all__ = ["content_router", "public_content_router"]
