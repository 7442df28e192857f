from .routes import enquiries_router, public_enquiries_router

__all__ = ["enquiries_router", "public_enquiries_router"]
