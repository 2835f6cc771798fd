from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from src.core import get_settings
from src.api.v1 import api_router
from src.core.middleware import RequestLoggingMiddleware
from src.services.board_service import BoardService
from src.logs.server_log import api_logger

# Get application settings
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # Доска живет только в памяти процесса
    app.state.board = BoardService.create_default(seed_tasks=settings.SEED_DEFAULT_TASKS)
    api_logger.info(f"Board initialized with {len(app.state.board.store)} tasks")

    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="API for a drag-and-drop task board",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=3600,
)

# Add request logging middleware
app.add_middleware(RequestLoggingMiddleware)

app.include_router(api_router)


@app.get("/")
async def root(request: Request):
    """Health check endpoint"""
    api_logger.info(f"Received health check request: {request.method} {request.url}")
    return {"message": f"{settings.PROJECT_NAME} is running"}


if __name__ == "__main__":
    import uvicorn

    api_logger.info(f"Сервер запускается на http://{settings.HOST}:{settings.PORT}")

    uvicorn.run(
        "src.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="info"
    )
