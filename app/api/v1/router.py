from fastapi import APIRouter
from packages.preferences import preferences_router


# Main v1 router (includes all endpoints)
router = APIRouter()
router.include_router(preferences_router)
