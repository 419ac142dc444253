from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routes import auth, home, venues, bookings, vendor, admin
from app.core.errors import AuthError, BookingAppError

# ⭐ Import logging system
from app.core.logging_config import get_logger

logger = get_logger()

app = FastAPI(
    title="Turf Booking API",
    version="1.0.0",
    description="API for venue browsing, slot availability, bookings with manual QR payment, vendors & admin oversight"
)


# ⭐ Request Logging Middleware
@app.middleware("http")
async def log_requests(request, call_next):
    logger.info(f"REQUEST: {request.method} {request.url}")

    try:
        response = await call_next(request)
        logger.info(f"RESPONSE: {response.status_code} {request.url}")
        return response

    except Exception as e:
        logger.error(f"ERROR: {request.url} -> {str(e)}")
        raise e


# ⭐ Domain errors -> JSON notification for the client
@app.exception_handler(BookingAppError)
async def booking_app_error_handler(request: Request, exc: BookingAppError):
    if exc.status_code >= 500:
        logger.error(f"{exc.__class__.__name__}: {request.url} -> {exc.message}")
    else:
        logger.info(f"{exc.__class__.__name__}: {request.url} -> {exc.message}")

    content = {"detail": exc.message, "error": exc.__class__.__name__}
    if isinstance(exc, AuthError) and exc.redirect:
        content["redirect"] = exc.redirect

    return JSONResponse(status_code=exc.status_code, content=content)


# ⭐ CORS (important for frontend)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],   # Can restrict later for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -------- ROUTERS REGISTER ORDER MATTERS --------
app.include_router(auth.router)
app.include_router(home.router)
app.include_router(venues.router)
app.include_router(bookings.router)
app.include_router(vendor.router)
app.include_router(admin.router)


@app.get("/", tags=["Root"])
def root():
    return {"message": "Backend running successfully"}
