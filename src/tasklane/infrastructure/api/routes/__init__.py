"""API Routes for Tasklane."""

from tasklane.infrastructure.api.routes.rbac_router import router as rbac_router

__all__ = ["rbac_router"]
