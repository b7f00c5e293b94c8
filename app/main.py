from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.v1.routes import search
from app.config import settings
from app.core.exceptions import SearchBackendUnavailable
from app.core.logging import setup_logging

setup_logging()

app = FastAPI(
    title="CMS Content Search",
    description="Scoped, boosted and faceted search over CMS content objects.",
    version="0.1.0",
    docs_url="/docs" if settings.ENVIRONMENT == "development" else None,
    redoc_url="/redoc" if settings.ENVIRONMENT == "development" else None,
)

# CORS
origins = [
    "http://localhost",
    "http://localhost:8000",
    "http://localhost:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

@app.exception_handler(SearchBackendUnavailable)
async def search_backend_unavailable_handler(request: Request, exc: SearchBackendUnavailable):
    return JSONResponse(status_code=503, content={"detail": exc.message})

# API Routes
app.include_router(search.router, prefix="/api/v1/search", tags=["search"])

@app.get("/health")
async def health_check():
    return {"status": "ok"}
