from pydantic import BaseModel, Field
from typing import Optional, List

from barrage.core.config import settings


class TargetSpec(BaseModel):
    """부하 대상 하나의 설정 (검증 이후 변경 불가)"""
    model_config = {
        "frozen": True
    }

    url: str = settings.STRESS_DEFAULT_URL
    regex_url: bool = False                 # url을 정규식 패턴으로 취급
    count: int = settings.STRESS_DEFAULT_COUNT
    concurrency: int = settings.STRESS_DEFAULT_CONCURRENCY
    timeout: str = settings.STRESS_DEFAULT_TIMEOUT  # ex: "500ms", "10s", "" = 제한 없음
    method: str = settings.STRESS_DEFAULT_METHOD
    body: str = ""
    body_filename: str = ""                 # 설정 시 body보다 우선
    headers: str = ""                       # ex: "Accept: text/html, X-Token: abc"
    user_agent: str = settings.STRESS_DEFAULT_USER_AGENT
    basic_auth: str = ""                    # ex: "user:password"
    compress: bool = False
    keep_alive: bool = False


class StressRequest(BaseModel):
    """전체 실행 설정"""
    model_config = {
        "frozen": True
    }

    targets: List[TargetSpec] = Field(default_factory=lambda: [TargetSpec()])
    verbose: bool = False
    quiet: bool = False
    no_http2: bool = False
    enforce_ssl: bool = False               # False면 TLS 인증서 검증 생략
    result_filename_json: Optional[str] = None
    result_filename_csv: Optional[str] = None
