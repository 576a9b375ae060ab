"""Editor configuration loaded from the environment."""

from __future__ import annotations

from dataclasses import dataclass
import os

ENTITY_TYPES = (
    "job-seekers",
    "hiring-managers",
    "organizations",
    "jobs",
    "jobs-direct-hire",
    "jobs-executive-search",
    "placements",
    "placements-direct-hire",
    "placements-executive-search",
    "tasks",
    "planner",
    "leads",
    "tearsheets",
    "goals-quotas",
)

MIN_ZOOM = 0.5
MAX_ZOOM = 2.0
ZOOM_STEP = 0.1


@dataclass(slots=True)
class EditorConfig:
    api_base_url: str = "http://localhost:8080"
    api_token: str = ""
    entity_type: str = "job-seekers"
    timeout: float = 30
    zoom: float = 1.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> EditorConfig:
        """
        Create config from environment variables.

        Environment variables:
            DOCMAPPER_API_BASE_URL: CRM backend base URL
            DOCMAPPER_API_TOKEN: bearer token sent with every request
            DOCMAPPER_ENTITY_TYPE: entity whose custom fields fill the palette
            DOCMAPPER_TIMEOUT: HTTP timeout in seconds, may be fractional (default: 30)
            DOCMAPPER_ZOOM: initial render zoom (default: 1.0)
            DOCMAPPER_LOG_LEVEL: logging level name (default: INFO)
        """
        return cls(
            api_base_url=os.getenv("DOCMAPPER_API_BASE_URL", "http://localhost:8080"),
            api_token=os.getenv("DOCMAPPER_API_TOKEN", ""),
            entity_type=os.getenv("DOCMAPPER_ENTITY_TYPE", "job-seekers"),
            timeout=float(os.getenv("DOCMAPPER_TIMEOUT", "30")),
            zoom=clamp_zoom(float(os.getenv("DOCMAPPER_ZOOM", "1.0"))),
            log_level=os.getenv("DOCMAPPER_LOG_LEVEL", "INFO").upper(),
        )

    @property
    def base_url(self) -> str:
        return self.api_base_url.rstrip("/")


def clamp_zoom(zoom: float) -> float:
    return round(max(MIN_ZOOM, min(MAX_ZOOM, zoom)), 2)
