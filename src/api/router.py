from fastapi import APIRouter

from src.api.endpoints.tasks import router as tasks_router
from src.api.endpoints.users import router as users_router

router = APIRouter()

router.include_router(users_router)
router.include_router(tasks_router)
