import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv
import uvicorn

from database import check_connection, init_db
from routers import auth, dashboard, documents, payments, properties, tenants
from services import auth_service
from utils.exceptions import (
    DuplicateUnitError,
    InvalidAmountError,
    InvalidStatusError,
    NotFoundError,
    PropertyStoreError,
    UnitNotVacantError,
)

# Load .env
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("jomidar")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Refuse to start without a signing key
    auth_service.get_secret_key()
    if os.getenv("AUTO_CREATE_TABLES", "true").lower() == "true":
        init_db()
    yield


# App instance
app = FastAPI(title="Jomidar Property Management API", lifespan=lifespan)

# CORS
origins = [o for o in os.getenv("CORS_ORIGINS", "").split(",") if o]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

ERROR_STATUS_CODES = {
    NotFoundError: 404,
    DuplicateUnitError: 409,
    UnitNotVacantError: 409,
    InvalidAmountError: 422,
    InvalidStatusError: 422,
}


@app.exception_handler(PropertyStoreError)
async def store_error_handler(request: Request, exc: PropertyStoreError):
    status_code = ERROR_STATUS_CODES.get(type(exc), 400)
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=status_code, content=exc.to_dict())


@app.get("/api/health")
def health():
    return {"status": "ok", "database": check_connection()}


for module in (auth, properties, tenants, payments, documents, dashboard):
    app.include_router(module.router)


# Unhandled errors
@app.middleware("http")
async def error_middleware(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


if __name__ == "__main__":
    port = int(os.getenv("PORT", 10000))
    uvicorn.run("main:app", host="0.0.0.0", port=port, reload=True)
