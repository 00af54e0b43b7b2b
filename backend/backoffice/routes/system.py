# backend/backoffice/routes/system.py
"""
System health and resource discovery endpoints.
"""

import time
from flask import Blueprint, current_app, jsonify
from sqlalchemy import text

from ..extensions import db
from ..resources import RESOURCES

system_bp = Blueprint("system", __name__, url_prefix="/api")


def check_database_health() -> dict:
    """
    Check database connectivity.

    Returns dict with status and latency.
    """
    start_time = time.time()
    try:
        db.session.execute(text("SELECT 1"))
        elapsed_ms = (time.time() - start_time) * 1000
        return {"status": "healthy", "latency_ms": round(elapsed_ms, 2)}
    except Exception:
        db.session.rollback()
        elapsed_ms = (time.time() - start_time) * 1000
        current_app.logger.exception("Database health check failed")
        return {
            "status": "unhealthy",
            "latency_ms": round(elapsed_ms, 2),
            "error": "Database error"
        }


@system_bp.get("/health")
def health():
    database = check_database_health()
    healthy = database["status"] == "healthy"
    return jsonify({
        "status": "healthy" if healthy else "unhealthy",
        "checks": {"database": database},
    }), 200 if healthy else 503


@system_bp.get("/resources")
def list_resources():
    """Describe every registered resource (path, searchable fields, writable fields)."""
    return jsonify({
        "resources": [
            {
                "name": config.name,
                "path": config.url_prefix,
                "search_fields": list(config.search_fields),
                "exact_search_fields": list(config.exact_search_fields),
                "search_relations": [f"{rel}.{col}" for rel, col in config.search_relations],
                "filters": list(config.query_params),
                "fields": sorted(config.policy.writable_fields),
            }
            for config in RESOURCES
        ]
    })
