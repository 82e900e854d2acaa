from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from config.settings import Settings
from ..dependencies import get_db_manager, get_settings
from ...database.manager import StoreManager
from ...errors import StorageUnavailableError

router = APIRouter()


@router.get("/config")
async def public_config(settings: Settings = Depends(get_settings)):
    return {"telegramBotUsername": settings.TELEGRAM_BOT_USERNAME}


@router.get("/health")
async def health(db_manager: StoreManager = Depends(get_db_manager)):
    try:
        async with db_manager.transaction(readonly=True) as db:
            await db.users.read_all()
    except StorageUnavailableError:
        return JSONResponse(status_code=503, content={"status": "unhealthy", "checks": {"store": "error"}})
    return {"status": "healthy", "checks": {"store": "ok"}}
