import inspect
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from google.cloud import firestore

from config import get_settings
from domain.envelope import Envelope, error_body
from services.errors import PostServiceError

# Import routers
from routers import posts

logger = logging.getLogger('uvicorn.error')

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application startup: Initializing resources...")
    try:
        app.state.db = firestore.AsyncClient(project=settings.firestore_project)
        logger.info("Firestore Async client initialized.")
    except Exception as e:
        logger.error(f"Failed to initialize Firestore Async client: {e}")
        app.state.db = None

    yield
    logger.info("Application shutdown: Cleaning up resources...")
    if hasattr(app.state, 'db') and app.state.db:
        try:
            closed = app.state.db.close() # Close the async client
            if inspect.isawaitable(closed):
                await closed
            logger.info("Firestore Async client closed.")
        except Exception as e:
            logger.error(f"Error closing Firestore client: {e}")


app = FastAPI(title="Learn Sphere Post Service", lifespan=lifespan)
app.include_router(posts.router, prefix=settings.api_prefix)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(
    TrustedHostMiddleware, allowed_hosts=settings.allowed_hosts
)


@app.exception_handler(PostServiceError)
async def post_service_error_handler(request: Request, exc: PostServiceError):
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Rejected request body for {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=422, content=error_body("Invalid request"))


@app.get(f"{settings.api_prefix}/", response_model=Envelope)
async def welcome():
    return Envelope(message="Welcome to the Post Service of Learn Sphere!")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.host, port=settings.port, log_level=settings.log_level)
