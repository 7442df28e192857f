from .routes import sales_router
from .service import SalesService, compute_totals

__all__ = ["sales_router", "SalesService", "compute_totals"]
