from typing import Dict, List, Optional
from pydantic import BaseModel


class LatencyMetrics(BaseModel):
    """응답시간 통계 (단위: ms)"""
    min_value: float = 0.0
    max_value: float = 0.0
    avg_value: float = 0.0
    p50: float = 0.0
    p75: float = 0.0
    p90: float = 0.0
    p95: float = 0.0
    p99: float = 0.0


class StatusBucket(BaseModel):
    count: int = 0
    percentage: float = 0.0


class StressSummary(BaseModel):
    """요청 결과 집합에 대한 집계 (계산 이후 변경 불가)"""
    model_config = {
        "frozen": True
    }

    total_requests: int = 0
    success_count: int = 0
    error_count: int = 0
    status_buckets: Dict[str, StatusBucket] = {}
    latency: LatencyMetrics = LatencyMetrics()
    total_bytes: int = 0
    span_seconds: float = 0.0
    throughput: float = 0.0  # requests / second


class TargetSummary(BaseModel):
    model_config = {
        "frozen": True
    }

    index: int
    method: str
    url: str
    summary: StressSummary


class StressResult(BaseModel):
    """실행 결과 - 타겟별 요약과 전체 요약"""
    model_config = {
        "frozen": True
    }

    targets: List[TargetSummary]
    global_summary: StressSummary
    result_filename_json: Optional[str] = None
    result_filename_csv: Optional[str] = None
