from aiogram import Router

from .results import router as results_router
from .verification import router as verification_router

bot_router = Router(name="bot_main")
bot_router.include_router(results_router)
bot_router.include_router(verification_router)
