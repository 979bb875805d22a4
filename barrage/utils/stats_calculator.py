from typing import Dict, List, Sequence

from barrage.schemas.stress.request_stat import RequestStat
from barrage.schemas.stress.stress_summary import LatencyMetrics, StatusBucket, StressSummary

STATUS_BUCKETS = ("2xx", "3xx", "4xx", "5xx", "error")
PERCENTILES = {"p50": 0.50, "p75": 0.75, "p90": 0.90, "p95": 0.95, "p99": 0.99}


class StatsCalculator:
    """요청 결과 통계 계산 유틸리티"""

    @staticmethod
    def calculate_percentile(sorted_values: Sequence[float], quantile: float) -> float:
        """
        정렬된 값에서 백분위수 계산 (가장 가까운 두 순위 사이 선형 보간)

        rank = (n - 1) * quantile 이며, statistics.quantiles(method="inclusive")와 같은 결과입니다.

        Args:
            sorted_values: 오름차순 정렬된 값들
            quantile: 0.0 ~ 1.0

        Returns:
            float: 백분위 값 (값이 없으면 0.0)
        """
        if not sorted_values:
            return 0.0
        if len(sorted_values) == 1:
            return float(sorted_values[0])

        rank = (len(sorted_values) - 1) * quantile
        lower = int(rank)
        upper = min(lower + 1, len(sorted_values) - 1)
        fraction = rank - lower
        return sorted_values[lower] + (sorted_values[upper] - sorted_values[lower]) * fraction

    @staticmethod
    def status_bucket(stat: RequestStat) -> str:
        """상태코드 구간 ('2xx' ~ '5xx'), 응답이 없으면 'error', 그 외는 'other'"""
        if stat.status_code == 0:
            return "error"
        if 200 <= stat.status_code < 600:
            return f"{stat.status_code // 100}xx"
        return "other"

    @staticmethod
    def calculate_status_buckets(stats: List[RequestStat]) -> Dict[str, StatusBucket]:
        counts = {bucket: 0 for bucket in STATUS_BUCKETS}
        for stat in stats:
            bucket = StatsCalculator.status_bucket(stat)
            counts[bucket] = counts.get(bucket, 0) + 1

        total = len(stats)
        return {
            bucket: StatusBucket(
                count=count,
                percentage=(count / total * 100) if total > 0 else 0.0,
            )
            for bucket, count in counts.items()
        }

    @staticmethod
    def calculate_latency(stats: List[RequestStat]) -> LatencyMetrics:
        """응답시간 통계 (ms)"""
        durations = sorted(stat.duration_ns / 1_000_000 for stat in stats)
        if not durations:
            return LatencyMetrics()

        return LatencyMetrics(
            min_value=durations[0],
            max_value=durations[-1],
            avg_value=sum(durations) / len(durations),
            **{
                name: StatsCalculator.calculate_percentile(durations, quantile)
                for name, quantile in PERCENTILES.items()
            },
        )

    @staticmethod
    def summarize(stats: List[RequestStat]) -> StressSummary:
        """
        요청 결과 목록을 하나의 요약으로 집계

        결과 순서와 무관하게 같은 요약이 나옵니다.
        처리량은 가장 이른 시작 시각부터 가장 늦은 종료 시각까지의 구간 기준입니다.

        Args:
            stats: 요청 결과 리스트

        Returns:
            StressSummary: 집계 결과
        """
        if not stats:
            return StressSummary(status_buckets=StatsCalculator.calculate_status_buckets([]))

        total = len(stats)
        error_count = sum(1 for stat in stats if stat.error is not None)

        earliest_start = min(stat.start_time for stat in stats)
        latest_end = max(stat.end_time for stat in stats)
        span_seconds = max((latest_end - earliest_start).total_seconds(), 0.0)

        return StressSummary(
            total_requests=total,
            success_count=total - error_count,
            error_count=error_count,
            status_buckets=StatsCalculator.calculate_status_buckets(stats),
            latency=StatsCalculator.calculate_latency(stats),
            total_bytes=sum(stat.data_transferred for stat in stats),
            span_seconds=span_seconds,
            throughput=(total / span_seconds) if span_seconds > 0 else 0.0,
        )
