from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
import logging
import json
import os

from portfolio.api.endpoints import contact
from portfolio.core.config import settings
from portfolio.core.logging import setup_logging

logger = logging.getLogger(__name__)

with open(os.path.join(os.path.dirname(__file__), "log_config.json"), "r") as file:
    LOGGING_CONFIG = json.load(file)

setup_logging()

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Contact relay for the portfolio site",
    version="0.1.0",
    debug=settings.DEBUG,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=False,
    allow_methods=["POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)

app.include_router(
    contact.router,
    prefix=settings.API_PREFIX,
    tags=["contact"],
)


@app.get("/", tags=["status"])
async def root():
    return {"status": "online", "service": settings.PROJECT_NAME}


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"error": "Unexpected server error"},
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "portfolio.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_config=LOGGING_CONFIG,
    )
