"""
부하 테스트 실행 서비스

1. 설정 검증 (실패시 트래픽 전송 전 중단)
2. 모든 타겟의 요청 큐 생성 및 봉인 (하나라도 실패하면 전체 중단)
3. 타겟별 워커 풀을 동시에 실행
4. 타겟별 / 전체 요약 집계 및 결과 파일 저장
"""
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from barrage.core.config import settings
from barrage.schemas.stress.request_stat import RequestStat
from barrage.schemas.stress.stress_request import StressRequest, TargetSpec
from barrage.schemas.stress.stress_summary import StressResult, StressSummary, TargetSummary
from barrage.services.stress import result_writer
from barrage.services.stress.config_validator import validate_run_config
from barrage.services.stress.output_sink import OutputSink
from barrage.services.stress.request_builder import UrlGenerator, generate_url_from_pattern
from barrage.services.stress.request_queue import SealedRequestQueue, build_request_queue
from barrage.services.stress.summary_formatter import create_text_summary
from barrage.services.stress.worker_pool import ClientFactory, TargetWorkerPool, create_http_client
from barrage.utils.stats_calculator import StatsCalculator

logger = logging.getLogger(__name__)


class StressService:
    """부하 테스트 실행기"""

    def __init__(
        self,
        client_factory: ClientFactory = create_http_client,
        url_generator: UrlGenerator = generate_url_from_pattern,
        max_active_requests: Optional[int] = None,
    ):
        """
        Args:
            client_factory: 타겟별 공유 HTTP 클라이언트 생성 함수
            url_generator: regex_url 타겟의 URL 생성 함수
            max_active_requests: 프로세스 전체 동시 실행 요청 수 상한 (0 = 제한 없음, None이면 설정값)
        """
        self.client_factory = client_factory
        self.url_generator = url_generator
        if max_active_requests is None:
            max_active_requests = settings.STRESS_MAX_ACTIVE_REQUESTS
        self.max_active_requests = max_active_requests

    def run(self, config: StressRequest, output_sink: Optional[OutputSink] = None) -> StressResult:
        """
        부하 테스트 실행

        Raises:
            ConfigValidationError: 설정 검증 실패
            RequestBuildError: 요청 생성 실패 (트래픽 전송 전)
            ResultWriteError: 결과 파일 저장 실패
        """
        sink = output_sink or OutputSink(quiet=config.quiet, verbose=config.verbose)

        validate_run_config(config)

        # 모든 타겟의 요청을 먼저 만들어 두고 시작
        request_queues = [build_request_queue(target, self.url_generator) for target in config.targets]

        target_count = len(config.targets)
        logger.info(f"Starting stress run against {target_count} target(s)")
        sink.writeln(f"Stress testing {target_count} target{'' if target_count == 1 else 's'}:")

        limiter = threading.BoundedSemaphore(self.max_active_requests) if self.max_active_requests > 0 else None

        with ThreadPoolExecutor(max_workers=target_count, thread_name_prefix="barrage-target") as executor:
            futures = [
                executor.submit(self._run_target, config, target, request_queue, sink, limiter)
                for target, request_queue in zip(config.targets, request_queues)
            ]
            target_stats: List[List[RequestStat]] = [future.result() for future in futures]

        # 타겟 순서대로 이어 붙인 전체 결과
        global_stats = [stat for stats in target_stats for stat in stats]

        target_summaries = [
            TargetSummary(
                index=idx + 1,
                method=target.method,
                url=target.url,
                summary=StatsCalculator.summarize(stats),
            )
            for idx, (target, stats) in enumerate(zip(config.targets, target_stats))
        ]
        global_summary = StatsCalculator.summarize(global_stats)
        logger.info(
            f"Stress run finished: {global_summary.total_requests} requests, "
            f"{global_summary.error_count} errors, {global_summary.throughput:.2f} req/s"
        )

        self._print_summary(sink, target_summaries, global_summary)
        self._write_results(config, sink, global_stats)

        return StressResult(
            targets=target_summaries,
            global_summary=global_summary,
            result_filename_json=config.result_filename_json,
            result_filename_csv=config.result_filename_csv,
        )

    def _run_target(
        self,
        config: StressRequest,
        target: TargetSpec,
        request_queue: SealedRequestQueue,
        sink: OutputSink,
        limiter: Optional[threading.Semaphore],
    ) -> List[RequestStat]:
        sink.writeln(f"- Running {target.count} tests at {target.url}, {target.concurrency} at a time")
        with self.client_factory(target, config) as client:
            pool = TargetWorkerPool(target, request_queue, client, sink, limiter)
            return pool.run()

    def _print_summary(self, sink: OutputSink, target_summaries: List[TargetSummary], global_summary: StressSummary) -> None:
        sink.write("\n----Summary----\n\n")

        # 타겟이 여러 개일 때만 타겟별 요약 출력
        if len(target_summaries) > 1:
            for target_summary in target_summaries:
                sink.writeln(f"----Target {target_summary.index}: {target_summary.method} {target_summary.url}")
                sink.writeln(create_text_summary(target_summary.summary))
            sink.writeln("----Global----")

        sink.writeln(create_text_summary(global_summary))

    def _write_results(self, config: StressRequest, sink: OutputSink, global_stats: List[RequestStat]) -> None:
        if config.result_filename_json:
            sink.write(f"Writing full result data to: {config.result_filename_json} ...")
            result_writer.write_json(global_stats, config.result_filename_json)
            sink.writeln("finished!")

        if config.result_filename_csv:
            sink.write(f"Writing full result data to: {config.result_filename_csv} ...")
            result_writer.write_csv(global_stats, config.result_filename_csv)
            sink.writeln("finished!")
