# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from typing import Annotated

from fastapi import Depends

from core.services.catalog_service import CatalogService, catalog_service


def get_catalog_service() -> CatalogService:
    """
    Get the catalog state holder.

    Returns the process-wide instance; tests override this dependency.
    """
    return catalog_service


# Type alias for dependency injection
CatalogDep = Annotated[CatalogService, Depends(get_catalog_service)]
