import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends

from barrage.common.response.code import SuccessCode
from barrage.common.response.response_template import ResponseTemplate
from barrage.core.config import settings
from barrage.dependencies.services import get_stress_service
from barrage.schemas.stress.stress_request import StressRequest, TargetSpec
from barrage.services.stress.config_validator import validate_run_config
from barrage.services.stress.stress_service import StressService

router = APIRouter()
logger = logging.getLogger(__name__)


def _confine(folder: str, filename: Optional[str]) -> Optional[str]:
    # 파일 이름만 남기고 지정 폴더 아래로 고정
    if not filename:
        return None
    return str(Path(folder) / Path(filename).name)


def _to_result_path(filename: Optional[str]) -> Optional[str]:
    return _confine(settings.STRESS_RESULT_FOLDER, filename)


def _confine_body_file(target: TargetSpec) -> TargetSpec:
    if not target.body_filename:
        return target
    return target.model_copy(update={
        "body_filename": _confine(settings.STRESS_BODY_FOLDER, target.body_filename),
    })


@router.post(
    path="",
    summary="부하 테스트 실행 API",
    description="""
    하나 이상의 타겟에 대해 동시 HTTP 요청을 보내고 타겟별 / 전체 요약을 반환합니다.

    ## 📝 요청 파라미터
    - **targets**: 타겟 배열
      - **url**: 요청 URL (regex_url=true면 정규식 패턴)
      - **count**: 총 요청 수 / **concurrency**: 동시 워커 수 (count 이하)
      - **timeout**: 요청별 타임아웃 (예: "500ms", "10s")
      - **method**, **body**, **body_filename** (본문 폴더 안의 파일 이름), **headers** ("key:val,key:val"), **user_agent**, **basic_auth** ("user:pass")
      - **compress**, **keep_alive**
    - **quiet**, **verbose**, **no_http2**, **enforce_ssl**
    - **result_filename_json**, **result_filename_csv**: 설정 시 결과 폴더에 전체 요청 결과 저장

    ## 🔍 주의사항
    - 설정 또는 요청 생성에 실패하면 요청을 하나도 보내지 않고 400을 반환합니다
    - 개별 요청의 실패(타임아웃, 연결 실패, 2xx 외 응답)는 요약의 error_count에 집계됩니다
    """,
)
def run_stress_test(
        request: StressRequest,
        stress_service: StressService = Depends(get_stress_service),
):
    config = request.model_copy(update={
        "targets": [_confine_body_file(target) for target in request.targets],
        "result_filename_json": _to_result_path(request.result_filename_json),
        "result_filename_csv": _to_result_path(request.result_filename_csv),
    })
    logger.info(f"Stress test requested for {len(config.targets)} target(s)")

    result = stress_service.run(config)

    return ResponseTemplate.success(SuccessCode.SUCCESS_CODE, result.model_dump())


@router.post(
    path="/validate",
    summary="부하 테스트 설정 검증 API",
    description="요청을 보내지 않고 설정만 검증합니다.",
)
async def validate_stress_config(request: StressRequest):
    validate_run_config(request)
    return ResponseTemplate.success(SuccessCode.VALID_CONFIGURATION)
