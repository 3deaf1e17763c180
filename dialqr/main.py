# dialqr/main.py — FastAPI app entry point

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from dialqr.config import get_settings
from dialqr.routers import dial_qr, health, pages


@asynccontextmanager
async def lifespan(_: FastAPI):
    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    yield


app = FastAPI(
    title="dialqr",
    description="Phone number to tel: QR code generator",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(HTTPException)
async def http_exception_handler(_: Request, exc: HTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

# Include routers
app.include_router(health.router, tags=["health"])
app.include_router(pages.router)
app.include_router(
    dial_qr.router,
    prefix="/api/v1",
    tags=["dial-qr"],
)
