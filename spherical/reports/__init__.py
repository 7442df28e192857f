from .routes import reports_router

__all__ = ["reports_router"]
