"""RPC Reflection — lists the RPC services and methods this app serves.

Invariants:
    - Reads app.state.rpc_services, populated by create_app(); never hardcoded here
"""

from fastapi import APIRouter, Request

router = APIRouter(prefix="/rpc", tags=["reflection"])


@router.get("/services")
async def list_services(request: Request):
    services: dict[str, tuple[str, ...]] = request.app.state.rpc_services
    return {
        "services": [
            {"name": name, "methods": list(methods)}
            for name, methods in services.items()
        ],
    }
