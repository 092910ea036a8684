# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .sign_service import SignService
from .catalog_service import CatalogService, catalog_service

__all__ = [
    "SignService",
    "CatalogService",
    "catalog_service",
]
