"""
SportNet Community API - Main FastAPI Application
"""

import logging
import secrets
import time

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from sportnet.config import settings
from sportnet.database import get_session_local, init_db
from sportnet.exceptions import error_response, register_exception_handlers
from sportnet.models.user import User, UserRole
from sportnet.routes import admin, auth, coach, events, notification, participant, reference, search
from sportnet.utils.auth import get_password_hash

# Configure logging
logging.basicConfig(
    level=logging.INFO if settings.DEBUG else logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

SAFE_METHODS = {"GET", "HEAD", "OPTIONS"}

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Sports community backend - events, reservations, coach certification, clubs and notifications",
    version="1.0.0",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["Authorization", "Content-Type", settings.CSRF_HEADER_NAME],
)


# CSRF middleware (double-submit cookie)
@app.middleware("http")
async def csrf_protect(request: Request, call_next):
    if not settings.CSRF_ENABLED:
        return await call_next(request)

    cookie_token = request.cookies.get(settings.CSRF_COOKIE_NAME)

    if request.method not in SAFE_METHODS:
        header_token = request.headers.get(settings.CSRF_HEADER_NAME)
        if not cookie_token or not header_token or not secrets.compare_digest(cookie_token, header_token):
            logger.warning(f"CSRF check failed: {request.method} {request.url.path}")
            return error_response(403, "Invalid CSRF token")

    response = await call_next(request)

    if not cookie_token:
        response.set_cookie(
            settings.CSRF_COOKIE_NAME,
            secrets.token_urlsafe(32),
            httponly=False,
            samesite="strict",
            secure=settings.is_production,
        )
    return response


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()

    response = await call_next(request)

    process_time = time.time() - start_time
    logger.info(
        f"{request.method} {request.url.path} - " f"Status: {response.status_code} - " f"Time: {process_time:.3f}s"
    )

    return response


register_exception_handlers(app)


def seed_admin():
    """Create the configured admin account if it does not exist yet"""
    if not (settings.ADMIN_EMAIL and settings.ADMIN_PASSWORD):
        return

    db = get_session_local()()
    try:
        if db.query(User).filter(User.email == settings.ADMIN_EMAIL).first():
            return
        db.add(
            User(
                first_name="Admin",
                last_name="User",
                email=settings.ADMIN_EMAIL,
                phone="0000000",
                hashed_password=get_password_hash(settings.ADMIN_PASSWORD),
                role=UserRole.ADMIN.value,
                is_active=True,
            )
        )
        db.commit()
        logger.info(f"Seeded admin account {settings.ADMIN_EMAIL}")
    finally:
        db.close()


# Startup event
@app.on_event("startup")
async def startup_event():
    """Initialize database on startup"""
    logger.info("Starting SportNet Community API...")

    try:
        init_db()
        seed_admin()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {str(e)}")
        raise

    logger.info(f"API started in {settings.ENVIRONMENT} mode")


# Include routers
app.include_router(auth.router)
app.include_router(participant.router)
app.include_router(coach.router)
app.include_router(events.router)
app.include_router(admin.router)
app.include_router(notification.router)
app.include_router(reference.router)
app.include_router(search.router)


# Root endpoint
@app.get("/")
async def root():
    return {
        "success": True,
        "message": f"{settings.APP_NAME} is running",
        "data": {"version": "1.0.0", "environment": settings.ENVIRONMENT},
    }


# Health check endpoint
@app.get("/health")
async def health_check():
    return {"success": True, "data": {"status": "healthy", "timestamp": time.time()}}


if __name__ == "__main__":
    uvicorn.run(
        "sportnet.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="info" if settings.DEBUG else "warning",
    )
