import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from groundbook.api.routes import admin, auth, bookings, grounds
from groundbook.core.config import settings
from groundbook.core.exceptions import (
    DomainException,
    domain_exception_handler,
    persistence_exception_handler,
)
from groundbook.core.logging_config import get_logger
from groundbook.db.base import Base
from groundbook.db.seed import ensure_admin
from groundbook.db.session import SessionLocal, engine

logger = get_logger()

# StaticFiles checks the directory at mount time
os.makedirs(settings.UPLOAD_DIR, exist_ok=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)

    if settings.ADMIN_EMAIL and settings.ADMIN_PASSWORD:
        db = SessionLocal()
        try:
            ensure_admin(
                db,
                settings.ADMIN_NAME,
                settings.ADMIN_EMAIL,
                settings.ADMIN_PASSWORD,
                settings.ADMIN_PHONE,
            )
        finally:
            db.close()

    logger.info("Ground booking API started")
    yield

    engine.dispose()
    logger.info("Ground booking API stopped")


app = FastAPI(
    title="Ground Booking API",
    version="1.0.0",
    description="Hourly booking of sports grounds with manual UPI payment review",
    lifespan=lifespan,
)


# Request Logging Middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info(f"REQUEST: {request.method} {request.url}")

    try:
        response = await call_next(request)
    except Exception as e:
        logger.exception(f"ERROR: {request.url} -> {e}")
        raise

    logger.info(f"RESPONSE: {response.status_code} {request.url}")
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(DomainException, domain_exception_handler)
app.add_exception_handler(SQLAlchemyError, persistence_exception_handler)

app.include_router(auth.router)
app.include_router(grounds.router)
app.include_router(bookings.router)
app.include_router(admin.router)

app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")


@app.get("/", tags=["Root"])
def root():
    return {"message": "Backend running successfully"}
