import logging
import os
from dotenv import load_dotenv  # load .env variables

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import dugout.database as database
from dugout.csrf import CSRF_HEADER_NAME, csrf_middleware
from dugout.errors import register_exception_handlers

# ----- Load environment variables -----
load_dotenv()

# ----- Logging -----
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)

# ----- Routers -----
from dugout.routes.auth import router as auth_router
from dugout.routes.teams import router as team_router
from dugout.routes.team_permissions import router as team_permissions_router
from dugout.routes.players import router as player_router
from dugout.routes.prospects import router as prospect_router
from dugout.routes.depth_charts import router as depth_chart_router
from dugout.routes.schedule_templates import router as schedule_template_router
from dugout.routes.scouts import router as scout_router
from dugout.routes.coaches import router as coach_router
from dugout.routes.high_school_coaches import router as high_school_coach_router
from dugout.routes.vendors import router as vendor_router
from dugout.routes.locations import router as location_router
from dugout.routes.schedules import router as schedule_router
from dugout.routes.schedule_events import router as schedule_event_router
from dugout.routes.games import router as game_router
from dugout.routes.scouting_reports import router as scouting_report_router
from dugout.routes.reports import router as report_router

API_PREFIX = "/api/v1"

# ----- FastAPI app -----
app = FastAPI(
    title="Dugout API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

register_exception_handlers(app)

# Registered before CORS so CORS stays the outermost layer and preflights never hit the guard.
app.middleware("http")(csrf_middleware)

# ----- CORS (enabled only if ALLOWED_ORIGINS is set) -----
raw_origins = os.getenv("ALLOWED_ORIGINS", "").strip()
if raw_origins:
    allowed_origins = [o.strip() for o in raw_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=[
            "Authorization", "Content-Type", "Accept", "Origin", "X-Requested-With", CSRF_HEADER_NAME
        ],
        max_age=86400,
    )

# ----- Include routers -----
# /teams/permissions and /reports/scouting must be matched before their parents' /{id} routes.
app.include_router(auth_router, prefix=f"{API_PREFIX}/auth")
app.include_router(team_permissions_router, prefix=f"{API_PREFIX}/teams/permissions")
app.include_router(team_router, prefix=f"{API_PREFIX}/teams")
app.include_router(player_router, prefix=f"{API_PREFIX}/players")
app.include_router(prospect_router, prefix=f"{API_PREFIX}/prospects")
app.include_router(depth_chart_router, prefix=f"{API_PREFIX}/depth-charts")
app.include_router(schedule_template_router, prefix=f"{API_PREFIX}/schedule-templates")
app.include_router(scout_router, prefix=f"{API_PREFIX}/scouts")
app.include_router(coach_router, prefix=f"{API_PREFIX}/coaches")
app.include_router(high_school_coach_router, prefix=f"{API_PREFIX}/high-school-coaches")
app.include_router(vendor_router, prefix=f"{API_PREFIX}/vendors")
app.include_router(location_router, prefix=f"{API_PREFIX}/locations")
app.include_router(schedule_router, prefix=f"{API_PREFIX}/schedules")
app.include_router(schedule_event_router, prefix=f"{API_PREFIX}/schedule-events")
app.include_router(game_router, prefix=f"{API_PREFIX}/games")
app.include_router(scouting_report_router, prefix=f"{API_PREFIX}/reports/scouting")
app.include_router(report_router, prefix=f"{API_PREFIX}/reports")


@app.on_event("startup")
async def on_startup():
    await database.ensure_database(
        max_attempts=int(os.getenv("DB_INIT_MAX_ATTEMPTS", "10")),
        base_delay=float(os.getenv("DB_INIT_RETRY_SECONDS", "1.0")),
    )
    logging.info("Dugout API started; tables ensured.")


@app.on_event("shutdown")
async def on_shutdown():
    await database.engine.dispose()


# ----- Health check endpoint -----
@app.get("/health", tags=["meta"])
async def health():
    return {"success": True, "status": "ok"}


# Never log secret values; booleans only.
if os.getenv("DATABASE_URL"):
    logging.info("DATABASE_URL loaded.")
if os.getenv("JWT_SECRET"):
    logging.info("JWT_SECRET loaded.")
if os.getenv("CSRF_SECRET"):
    logging.info("CSRF_SECRET loaded.")
