from rollbook.web.routers.auth import router as auth_router
from rollbook.web.routers.protected import router as protected_router
from rollbook.web.routers.students import router as students_router

__all__ = [
    "auth_router",
    "protected_router",
    "students_router",
]
