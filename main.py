import logging
import os

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.database import Base, engine
from app.core.errors import CatalogError

# import models so they are registered on the metadata
import app.models  # noqa: F401

from app.routes.categories import router as categories_router
from app.routes.plans import router as plans_router
from app.routes.addons import router as addons_router
from app.routes.credentials import router as credentials_router

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)

app = FastAPI(title="Catalog Backend")

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError):
    logger.warning(f"{exc.title} on {request.method} {request.url.path}: {exc.message} ({exc.code})")
    return JSONResponse(status_code=exc.code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_406_NOT_ACCEPTABLE,
        content={"error": "Entry Error", "message": "Malformed request body", "code": 406, "details": jsonable_encoder(exc.errors())},
    )


# Create tables (after models are imported)
Base.metadata.create_all(bind=engine)

app.include_router(categories_router, prefix="/api/categories", tags=["categories"])
app.include_router(plans_router, prefix="/api/categories", tags=["plans"])
app.include_router(addons_router, prefix="/api/categories", tags=["addons"])
app.include_router(credentials_router, prefix="/api/credentials", tags=["credentials"])


@app.get("/")
def read_root():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=int(os.environ.get("PORT", 8000)))
