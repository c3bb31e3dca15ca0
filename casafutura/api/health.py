from fastapi import APIRouter

from casafutura.storage.factory import resolve_backend

router = APIRouter(tags=["health"])


@router.get("/health")
async def health():
    return {"ok": True, "storage": resolve_backend()}
