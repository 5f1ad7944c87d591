# Main application file



import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.database import engine, Base
from app.core.rate_limiter import limiter
from app.core.config import settings
from app.core.responses import register_exception_handlers
from app.models import business as business_model  # noqa: F401
from app.models import users as users_model  # noqa: F401
from app.routers import (
    auth,
    business,
)      


# LOGGING CONFIGURATION

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(message)s",
)

logger = logging.getLogger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine, checkfirst=True)
    logger.info("Database tables ready")
    yield


# APP INIT

app = FastAPI(
    title="Avo Business API",
    description="Accounts, businesses and employees for the Avo offers platform",
    version="1.0.0",
    lifespan=lifespan,
)



# CORS (Token-based auth)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Authorization", "Content-Type"],
)


# ERROR ENVELOPE

register_exception_handlers(app)


# RATE LIMITING

app.state.limiter = limiter


# REQUEST LOGGING MIDDLEWARE

@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()

    response = await call_next(request)

    duration = round((time.time() - start_time) * 1000, 2)

    logger.info(
        f"{request.method} {request.url.path} "
        f"Status: {response.status_code} "
        f"Time: {duration}ms"
    )

    return response


# ROUTERS

app.include_router(auth.router, prefix=settings.API_PREFIX)
app.include_router(business.router, prefix=settings.API_PREFIX)



# ROOT

@app.get("/")
def root():
    logger.info("Health check endpoint called")
    return {"message": "Avo Business API is running"}
