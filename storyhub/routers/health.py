from fastapi import APIRouter, Depends
from storyhub.database.connection import check_database_health
from storyhub.state import AppState, get_state
import os
import psutil
from datetime import datetime

router = APIRouter(prefix="/api", tags=["health"])

@router.get("/health")
async def health_check(state: AppState = Depends(get_state)):
    """Main health check endpoint"""
    db_healthy = await check_database_health(state.database)

    return {
        "status": "OK",
        "database": "connected" if db_healthy else "unavailable",
    }

@router.get("/health/detailed")
async def detailed_health_check(state: AppState = Depends(get_state)):
    process = psutil.Process(os.getpid())
    checks = {
        "database": await check_database_health(state.database),
        "timestamp": datetime.utcnow().isoformat(),
        "realtime": {
            "buffered_events": len(state.events),
            "capacity": state.events.capacity,
            "subscribers": state.events.subscriber_count,
        },
        "system": {
            "memory_percent": psutil.virtual_memory().percent,
            "process_memory_mb": round(process.memory_info().rss / (1024 * 1024), 2),
            "cpu_percent": psutil.cpu_percent()
        }
    }

    status = "healthy" if checks["database"] else "degraded"
    return {"status": status, "checks": checks}
