"""Tables API Routes - Route registration only."""

from fastapi import APIRouter

from tableside.api.v1 import TABLES_PREFIX
from tableside.api.v1.tables import api

router = APIRouter()
router.include_router(api.router, prefix=TABLES_PREFIX, tags=["tables"])
