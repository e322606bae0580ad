import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.v1.auth.router import router as auth_router
from app.api.v1.schools.router import router as schools_router
from app.api.v1.students.router import router as students_router
from app.core.config import settings
from app.core.exceptions import ValidationError

logger = logging.getLogger(__name__)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed or missing input as VALIDATION_ERROR (400) naming the fields."""
    fields = []
    for error in exc.errors():
        # loc is e.g. ("body", "pinCode") or ("query", "query"); drop the location prefix
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in ("body", "query", "header", "path"):
            loc = loc[1:]
        field = ".".join(loc) or "body"
        if field not in fields:
            fields.append(field)
    err = ValidationError(fields)
    logger.info("Rejected request to %s: invalid %s", request.url.path, err.fields)
    return JSONResponse(status_code=err.status_code, content={"detail": err.to_detail()})


def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(title="School Refer Dashboard")

    # CORS: allow frontend to call this API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # Routers
    app.include_router(auth_router)
    app.include_router(schools_router)
    app.include_router(students_router)

    @app.get("/health", tags=["health"])
    async def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()
