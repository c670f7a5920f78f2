"""
Health check handler.
"""

import os
from datetime import datetime
from pathlib import Path
from typing import Dict

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ...config import GatewayConfig, Settings


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    timestamp: str
    version: str
    uptime: float
    gateway: str


def _writable_dir(path: Path) -> bool:
    return path.is_dir() and os.access(path, os.W_OK)


class HealthHandler:
    """Handler for health check endpoints."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.gateway_config = GatewayConfig.from_settings(settings)
        self.start_time = datetime.now()
        self.router = APIRouter()
        self._setup_routes()

    def readiness_checks(self) -> Dict[str, bool]:
        """Storage locations and gateway credentials the booking flow depends on."""
        return {
            "wizard_state_db": _writable_dir(Path(self.settings.state_db_path).parent),
            "bookings_db": _writable_dir(Path(self.settings.bookings_db_path).parent),
            "upload_dir": _writable_dir(Path(self.settings.upload_dir)),
            "gateway": self.gateway_config.is_configured(),
        }

    def _setup_routes(self):
        """Setup health check routes."""

        @self.router.get("", response_model=HealthResponse)
        async def health_check():
            """Basic health check endpoint."""
            uptime = (datetime.now() - self.start_time).total_seconds()
            return HealthResponse(
                status="healthy",
                timestamp=datetime.now().isoformat(),
                version=self.settings.app_version,
                uptime=uptime,
                gateway=self.gateway_config.provider,
            )

        @self.router.get("/ready")
        async def readiness_check():
            """Ready once storage is writable; a missing gateway key only degrades payments."""
            checks = self.readiness_checks()
            storage_ok = all(ok for name, ok in checks.items() if name != "gateway")
            if not storage_ok:
                return JSONResponse(
                    status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                    content={"status": "not_ready", "checks": checks},
                )
            return {"status": "ready" if checks["gateway"] else "degraded", "checks": checks}

        @self.router.get("/live")
        async def liveness_check():
            """Liveness check for container orchestration."""
            return {"status": "alive"}
