from resume_tailor.api import (
    jd_routes,
    profile_routes,
    resume_routes,
    tailor_routes,
)

__all__ = [
    "jd_routes",
    "profile_routes",
    "resume_routes",
    "tailor_routes",
]
