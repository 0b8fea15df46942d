import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from starlette.exceptions import HTTPException as StarletteHTTPException

from tutorhub.database import create_db_and_tables
from tutorhub.config import settings
from tutorhub.errors import ServiceError
from tutorhub.routes import (
    auth,
    bookings,
    checkout,
    course_categories,
    courses,
    enrollments,
    health,
    review_requests,
    reviews,
    tutors,
    users,
)

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Run DB creation ONLY in local
    if settings.ENV == "local":
        create_db_and_tables()
    yield

app = FastAPI(title="TutorHub API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_dict()))


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"error": "Validation failed", "details": details},
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
app.include_router(users.router, prefix="/users", tags=["Users"])
app.include_router(courses.router, prefix="/courses", tags=["Courses"])
app.include_router(course_categories.router, prefix="/course-categories", tags=["Courses"])
app.include_router(tutors.router, prefix="/tutors", tags=["Tutors"])
app.include_router(checkout.router, prefix="/checkout", tags=["Checkout"])
app.include_router(enrollments.router, prefix="/enrollments", tags=["Enrollments"])
app.include_router(bookings.router, prefix="/bookings", tags=["Bookings"])
app.include_router(reviews.router, prefix="/reviews", tags=["Reviews"])
app.include_router(review_requests.router, prefix="/review-requests", tags=["Review Requests"])
app.include_router(health.router, prefix="/health", tags=["Health"])


@app.get("/")
def root():
    return {
        "auth_endpoints": ["/auth/register", "/auth/login"],
        "user_endpoints": ["/users/me", "/users/{user_id}", "/users/{user_id}/password"],
        "courses": ["/courses", "/courses/{course_id}", "/course-categories"],
        "tutors": ["/tutors", "/tutors/profile", "/tutors/{tutor_id}"],
        "checkout": ["/checkout", "/checkout/session", "/checkout/fulfill"],
        "enrollments": ["/enrollments", "/enrollments/check"],
        "bookings": ["/bookings"],
        "reviews": ["/reviews", "/reviews/pending", "/reviews/{review_id}"],
        "review_requests": [
            "/review-requests", "/review-requests/student",
            "/review-requests/{request_id}/submit", "/review-requests/{request_id}",
        ],
    }
