from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from resume_tailor.config import settings
from resume_tailor.api import (
    jd_routes,
    profile_routes,
    resume_routes,
    tailor_routes,
)
from resume_tailor.api.exception_handlers import register_exception_handlers
from resume_tailor.utils.logging_config import configure_logging

configure_logging(settings.log_level)

app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
    description="Resume tailoring with fabrication checks and change auditing",
)

# ── CORS ────────────────────────────────────────────────────────────────────

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Errors ──────────────────────────────────────────────────────────────────

register_exception_handlers(app)

# ── Routers ─────────────────────────────────────────────────────────────────

app.include_router(jd_routes.router, prefix="/api/jobs", tags=["Jobs"])
app.include_router(profile_routes.router, prefix="/api/profile", tags=["Profile"])
app.include_router(resume_routes.router, prefix="/api/resumes", tags=["Resumes"])
app.include_router(tailor_routes.router, prefix="/api/tailor", tags=["Tailoring"])

# ── Health Check ────────────────────────────────────────────────────────────


@app.get("/api/health")
async def health_check():
    return {"status": "healthy", "app": settings.app_name, "version": "0.1.0"}
