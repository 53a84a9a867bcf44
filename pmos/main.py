import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pmos.api.curriculum import router as curriculum_router
from pmos.api.dashboard import router as dashboard_router
from pmos.api.insights import router as insights_router
from pmos.api.maintenance import router as maintenance_router
from pmos.api.resources import router as resources_router
from pmos.api.routes import router
from pmos.config import settings

# Configure logging from settings
logging.basicConfig(level=settings.log_level)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    logging.info("=" * 60)
    logging.info(f"🚀 {settings.app_name} starting up...")
    logging.info("=" * 60)

    # App Settings
    logging.info("📋 App Configuration:")
    logging.info(f"  Environment: {settings.environment}")
    logging.info(f"  Debug mode: {settings.debug}")
    logging.info(f"  Log level: {settings.log_level}")

    # Server Settings
    logging.info("🌐 Server Configuration:")
    logging.info(f"  Host: {settings.host}")
    logging.info(f"  Port: {settings.port}")
    logging.info(f"  CORS Origins: {settings.cors_origins}")

    # Database Settings
    logging.info("💾 Database Configuration:")
    logging.info(f"  Supabase URL: {'✓ Configured' if settings.supabase_url else '✗ Not set'}")
    logging.info(
        f"  Supabase Key: {'✓ Service key' if settings.supabase_service_key else ('✓ Anon key' if settings.supabase_anon_key else '✗ Not set')}"
    )

    logging.info("=" * 60)
    logging.info("✅ Startup complete - Ready to accept requests")
    logging.info("=" * 60)

    yield  # App runs here

    logging.info("🛑 App is shutting down...")


app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)

# Add CORS middleware - configured from settings
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router, prefix="/api")
app.include_router(insights_router, prefix="/api/insights", tags=["insights"])
app.include_router(curriculum_router, prefix="/api/curriculum", tags=["curriculum"])
app.include_router(resources_router, prefix="/api/resources", tags=["resources"])
app.include_router(dashboard_router, prefix="/api/dashboard", tags=["dashboard"])
app.include_router(maintenance_router, prefix="/api/maintenance", tags=["maintenance"])
