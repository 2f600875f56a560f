from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware
from core.config_loader import settings
from core.exceptions import register_exception_handlers
from core.logging_config import configure_logging

from organization.router import organization_router
from shift.router import shift_router
from rotation.router import rotation_router
from assignment.router import assignment_router
import models_bootstrap

configure_logging()

openapi_tags = [
    {
        "name": "Shifts",
        "description": "Shift definitions and the company default shift",
    },
    {
        "name": "Shift Rotations",
        "description": "Rotation templates and rotation runs",
    },
    {
        "name": "Shift Assignments",
        "description": "Per-employee, per-date shift assignments",
    },
    {
        "name": "Health Checks",
        "description": "Application health checks",
    }
]

app = FastAPI(title="Shift Scheduling", openapi_tags=openapi_tags)

if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            str(origin).strip("/") for origin in settings.BACKEND_CORS_ORIGINS
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

register_exception_handlers(app)

app.include_router(organization_router, prefix="/api")
app.include_router(shift_router, prefix="/api")
app.include_router(rotation_router, prefix="/api")
app.include_router(assignment_router, prefix="/api")


@app.get("/health", tags=['Health Checks'])
def read_root():
    return {"health": "true"}
