from typing import Optional

from fastapi import APIRouter, Query
from fastapi.responses import PlainTextResponse

router = APIRouter()


@router.get("/api/websocket", tags=["WebSocket"])
async def websocket_probe(upgrade: Optional[str] = Query(default=None)):
    """
    Fallback for WebSocket upgrade probes.

    The real handshake is terminated by the standalone WebSocket server. If a
    probe lands here, that server is not in front of us, so answer 426 and
    say where the upgrade is expected to happen. This route never upgrades.
    """
    if upgrade == "websocket":
        return PlainTextResponse(
            "WebSocket upgrade should be handled by custom server",
            status_code=426,
            headers={"Upgrade": "websocket", "Connection": "Upgrade"},
        )

    return PlainTextResponse("WebSocket endpoint", status_code=200)
