import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI

from barrage import __version__
from barrage.api import api_router
from barrage.core.config import settings
from barrage.common.exceptionhandler import register_exception_handler

# 로깅 설정
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """애플리케이션 라이프사이클 관리"""
    logger.info("Starting Barrage API...")
    if settings.STRESS_MAX_ACTIVE_REQUESTS > 0:
        logger.info(f"Active request ceiling: {settings.STRESS_MAX_ACTIVE_REQUESTS}")

    yield

    logger.info("Shutting down Barrage API...")


app = FastAPI(
    title="Barrage API",
    description="동시 HTTP 부하를 생성하고 결과를 집계하는 API입니다.",
    version=__version__,
    docs_url="/api/swagger",
    lifespan=lifespan
)

app.include_router(api_router)

register_exception_handler(app)
