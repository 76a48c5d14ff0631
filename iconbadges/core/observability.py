"""Observability helpers for monitoring."""
from __future__ import annotations

from fastapi import FastAPI

from prometheus_fastapi_instrumentator import Instrumentator

from iconbadges.core.logging import get_logger
from iconbadges.core.settings import get_settings

logger = get_logger(__name__)


def configure_observability(app: FastAPI) -> None:
    settings = get_settings()

    if settings.enable_prometheus:
        Instrumentator().instrument(app, metric_namespace=settings.metrics_namespace).expose(
            app, include_in_schema=False
        )
        logger.info("prometheus_enabled", namespace=settings.metrics_namespace)


__all__ = ["configure_observability"]
