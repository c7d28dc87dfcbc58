import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fundtheworld.core.config import settings
from fundtheworld.core.database import engine, Base
from fundtheworld.models import chat, organization, reservation, user  # noqa: F401 (register tables)
from fundtheworld.controllers import (
    chat_controller, organization_controller, reservation_controller, upload_controller, user_controller
)

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("main")

Base.metadata.create_all(bind=engine)

app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

API_PREFIX = getattr(settings, "api_prefix", "/api")

# Include routers
app.include_router(organization_controller.router, prefix=API_PREFIX)
app.include_router(upload_controller.router, prefix=API_PREFIX)
app.include_router(chat_controller.router, prefix=API_PREFIX)
app.include_router(reservation_controller.router, prefix=API_PREFIX)
app.include_router(user_controller.router, prefix=API_PREFIX)


def describe_validation_error(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ())[1:]) or "body"
        if error.get("type") == "missing":
            messages.append(f"Missing required fields: {field}")
        else:
            # "Value error, Invalid Bitcoin address format" -> "Invalid Bitcoin address format"
            msg = str(error.get("msg", "Invalid value")).removeprefix("Value error, ")
            messages.append(f"{field}: {msg}")
    return "; ".join(messages) or "Invalid request format"


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"detail": describe_validation_error(exc)})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# Health check endpoint
@app.get("/")
async def root():
    return {
        "message": "Fund The World API",
        "version": "1.0.0",
        "status": "running",
        "endpoints": [
            f"{API_PREFIX}/organization/all",
            f"{API_PREFIX}/organization/{{nickname}}",
            f"{API_PREFIX}/submit",
            f"{API_PREFIX}/chat",
            f"{API_PREFIX}/users/",
            "/docs"
        ]
    }

@app.get("/health")
async def health_check():
    return {"status": "healthy", "app": settings.app_name}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "fundtheworld.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.debug
    )
