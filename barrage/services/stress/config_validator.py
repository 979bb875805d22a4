import logging

from barrage.common.exception.stress_exception import ConfigValidationError
from barrage.schemas.stress.stress_request import StressRequest
from barrage.utils.duration_parser import parse_duration_ns

logger = logging.getLogger(__name__)

ONE_MILLISECOND_NS = 1_000_000


def validate_run_config(config: StressRequest) -> None:
    """
    실행 전에 전체 설정을 검증합니다. 첫 번째 위반에서 즉시 중단합니다.

    Raises:
        ConfigValidationError: 설정이 잘못되었을 때
    """
    if len(config.targets) == 0:
        raise ConfigValidationError("zero targets")

    for target in config.targets:
        if target.url == "":
            raise ConfigValidationError("empty URL")
        if target.count <= 0:
            raise ConfigValidationError("request count must be greater than zero")
        if target.concurrency <= 0:
            raise ConfigValidationError("concurrency must be greater than zero")
        if target.timeout != "":
            try:
                timeout_ns = parse_duration_ns(target.timeout)
            except ValueError as e:
                logger.debug(f"Timeout parse failure: {e}")
                raise ConfigValidationError(f"failed to parse timeout: {target.timeout}") from e
            if timeout_ns <= ONE_MILLISECOND_NS:
                raise ConfigValidationError("timeout must be greater than one millisecond")
        # 메시지는 기존 문구 유지 (동작은 concurrency > count 거부)
        if target.concurrency > target.count:
            raise ConfigValidationError("concurrency must be higher than request count")
