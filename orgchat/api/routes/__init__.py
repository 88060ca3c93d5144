from fastapi import APIRouter

from orgchat.api.routes.auth_routes import organizations_router
from orgchat.api.routes.auth_routes import router as auth_router
from orgchat.api.routes.chat_routes import router as chat_router
from orgchat.api.routes.relay_routes import router as relay_router

api_router = APIRouter(prefix="/api")

api_router.include_router(relay_router)
api_router.include_router(chat_router)
api_router.include_router(auth_router)
api_router.include_router(organizations_router)
