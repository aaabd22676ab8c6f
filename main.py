from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Load environment variables before the config module reads them
load_dotenv()

from picby.api.v1 import router as v1_router
from picby.schemas import HealthResponse
from picby.services.colors import __version__

app = FastAPI(
    title="PicBy Color Search",
    description="Classify images by dominant color family and search folders by color",
    version=__version__
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"]
)

app.include_router(v1_router)


@app.get("/healthz", response_model=HealthResponse)
def health_check():
    """Health check endpoint"""
    return HealthResponse(ok=True, version=__version__, service="picby")


@app.get("/")
def root():
    """Root endpoint"""
    return {
        "message": "PicBy Color Search API",
        "version": __version__,
        "docs": "/docs"
    }
