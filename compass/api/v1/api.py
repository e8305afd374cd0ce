"""
V1 API router aggregation.

All versioned endpoint routers are mounted here under ``/investors``.  The
top-level ``main.py`` mounts this router at ``/api/v1``.

The search and transfer routers are included first: their static paths
(``/investors/search``, ``/investors/export`` ...) must be matched before
``/investors/{investor_id}``.
"""

from fastapi import APIRouter, Depends

from compass.api.deps import get_current_user
from compass.api.v1.endpoints import investors, search, transfer

api_router = APIRouter(dependencies=[Depends(get_current_user)])

api_router.include_router(search.router, prefix="/investors", tags=["Search"])
api_router.include_router(transfer.router, prefix="/investors", tags=["Import / Export"])
api_router.include_router(investors.router, prefix="/investors", tags=["Investors"])
