from __future__ import annotations

from fastapi import APIRouter

from loginkit.core.alerts import alert_engine

router = APIRouter(prefix="/alerts", tags=["alerts"])


@router.get("")
async def get_alerts(client_id: str, limit: int = 50):
    return {"items": alert_engine.list_alerts(limit=limit, client_id=client_id)}
