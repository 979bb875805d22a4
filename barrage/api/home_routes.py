from fastapi import APIRouter

from barrage import __version__

router = APIRouter()

@router.get(
    path="/",
    summary = "health check",
    description = "health check 용 엔드포인트 (서비스 버전 포함)"
)
async def home():
    return {"status": "ok", "service": "barrage", "version": __version__}
