import argparse
import logging
import sys
from typing import List, Optional

from barrage.common.exception.stress_exception import StressException
from barrage.core.config import settings
from barrage.schemas.stress.stress_request import StressRequest, TargetSpec
from barrage.services.stress.stress_service import StressService

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="barrage", description="Concurrent HTTP load generator")
    subparsers = parser.add_subparsers(dest="command", required=True)

    stress = subparsers.add_parser("stress", help="Run a stress test against one or more URLs")
    stress.add_argument("urls", nargs="*", default=[settings.STRESS_DEFAULT_URL], metavar="URL",
                        help=f"Target URLs (default: {settings.STRESS_DEFAULT_URL})")
    stress.add_argument("-r", "--regex", action="store_true", help="Interpret URLs as regular expressions")
    stress.add_argument("-n", "--num", type=int, default=settings.STRESS_DEFAULT_COUNT,
                        help="Number of requests per target")
    stress.add_argument("-c", "--concurrent", type=int, default=settings.STRESS_DEFAULT_CONCURRENCY,
                        help="Number of concurrent requests per target")
    stress.add_argument("-t", "--timeout", default=settings.STRESS_DEFAULT_TIMEOUT,
                        help='Request timeout, e.g. "500ms", "10s"; empty for none')
    stress.add_argument("-X", "--request-method", default=settings.STRESS_DEFAULT_METHOD, help="HTTP method")
    stress.add_argument("--body", default="", help="Request body")
    stress.add_argument("--body-file", default="", help="Read the request body from a file")
    stress.add_argument("-H", "--headers", default="", help='Headers, e.g. "Accept: text/html, X-Id: 1"')
    stress.add_argument("--user-agent", default=settings.STRESS_DEFAULT_USER_AGENT, help="User-Agent header")
    stress.add_argument("--basic-auth", default="", help='Basic auth credential, e.g. "user:password"')
    stress.add_argument("--compress", action="store_true", help="Allow compressed responses")
    stress.add_argument("-k", "--keepalive", action="store_true", help="Reuse connections")
    stress.add_argument("-v", "--verbose", action="store_true", help="Print request and response details")
    stress.add_argument("-q", "--quiet", action="store_true", help="Do not print per-request lines")
    stress.add_argument("--no-http2", action="store_true", help="Disable HTTP/2 negotiation")
    stress.add_argument("-s", "--enforce-ssl", action="store_true", help="Verify TLS certificates")
    stress.add_argument("-j", "--output-json", default=None, help="Write full results as JSON")
    stress.add_argument("-o", "--output-csv", default=None, help="Write full results as CSV")
    return parser


def config_from_args(args: argparse.Namespace) -> StressRequest:
    """모든 URL이 같은 옵션을 공유하는 타겟 목록으로 변환"""
    targets = [
        TargetSpec(
            url=url,
            regex_url=args.regex,
            count=args.num,
            concurrency=args.concurrent,
            timeout=args.timeout,
            method=args.request_method,
            body=args.body,
            body_filename=args.body_file,
            headers=args.headers,
            user_agent=args.user_agent,
            basic_auth=args.basic_auth,
            compress=args.compress,
            keep_alive=args.keepalive,
        )
        for url in args.urls
    ]
    return StressRequest(
        targets=targets,
        verbose=args.verbose,
        quiet=args.quiet,
        no_http2=args.no_http2,
        enforce_ssl=args.enforce_ssl,
        result_filename_json=args.output_json,
        result_filename_csv=args.output_csv,
    )


def main(argv: Optional[List[str]] = None, service: Optional[StressService] = None) -> int:
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    args = build_parser().parse_args(argv)

    config = config_from_args(args)
    try:
        (service or StressService()).run(config)
    except StressException as e:
        logger.debug(f"Stress run aborted: {e.code.name}", exc_info=True)
        print(e.code.describe(e.message), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
