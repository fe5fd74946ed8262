from fastapi import APIRouter

from console_output.api.routes import demo

api_router = APIRouter()
api_router.include_router(demo.router)
