"""
FastAPI main application for the property search service.
"""

# Load environment variables from .env file
from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from propsearch import __version__
from propsearch.config import SearchSettings, get_search_settings
from propsearch.db import init_db, close_db, get_pg_pool, get_redis
from propsearch.error_handling import TimeoutConfig
from propsearch.services.database import LeaseRepository, PropertyRepository
from propsearch.services.geocoding import GoogleGeocoder, InMemoryGeoCache, LocationResolver, RedisGeoCache
from propsearch.services.llm import AnthropicLanguageModel
from propsearch.services.search import (
    LeaseFilterExtractor,
    LeaseSearchOrchestrator,
    ParameterExtractor,
    PropertySearchOrchestrator,
)
from propsearch.services.storage import GCSUrlSigner

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def build_services(app: FastAPI, settings: SearchSettings):
    """Wire the search pipeline onto app.state"""
    pool = get_pg_pool()
    timeouts = TimeoutConfig(
        language_model_seconds=settings.language_model.timeout_seconds,
        geocoding_seconds=settings.geocoding.timeout_seconds,
    )
    llm = AnthropicLanguageModel(settings.language_model)
    if not llm.available:
        logger.warning("ANTHROPIC_API_KEY not set - natural-language search will return empty results")
    geocoder = GoogleGeocoder(settings.geocoding)

    if settings.geocoding.cache_backend == "redis":
        cache = RedisGeoCache(get_redis())
    else:
        cache = InMemoryGeoCache()

    resolver = LocationResolver(
        geocoder,
        cache=cache,
        ttl_seconds=settings.geocoding.cache_ttl_seconds,
        timeout_seconds=timeouts.geocoding_seconds,
    )
    signer = GCSUrlSigner(settings.storage, timeout_seconds=timeouts.signing_seconds)

    app.state.geocoder = geocoder
    app.state.signer = signer
    app.state.property_search = PropertySearchOrchestrator(
        PropertyRepository(pool),
        ParameterExtractor(llm, timeout_seconds=timeouts.language_model_seconds),
        resolver,
        signer=signer,
    )
    app.state.lease_search = LeaseSearchOrchestrator(
        LeaseRepository(pool),
        LeaseFilterExtractor(llm, timeout_seconds=timeouts.language_model_seconds),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    # Startup
    logger.info("Starting property search API...")
    settings = get_search_settings()
    await init_db(settings.database, use_redis=settings.geocoding.cache_backend == "redis")
    logger.info("Database initialized")
    build_services(app, settings)

    yield

    # Shutdown
    logger.info("Shutting down property search API...")
    await app.state.geocoder.close()
    await close_db()


app = FastAPI(
    title="Property Search API",
    description="Property and lease listings with natural-language search",
    version=__version__,
    lifespan=lifespan
)

# CORS middleware - allow all origins for development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "version": __version__
    }


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Property Search API",
        "docs": "/docs",
        "health": "/health",
    }


# Include routers
from propsearch.routers import properties, leases, storage

app.include_router(properties.router, prefix="/api", tags=["properties"])
app.include_router(leases.router, prefix="/api", tags=["leases"])
app.include_router(storage.router, prefix="/api", tags=["storage"])
