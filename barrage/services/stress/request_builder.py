import logging
import re
from typing import Callable, Dict

import exrex
import httpx

from barrage.common.exception.stress_exception import KeyValueParseError, RequestBuildError
from barrage.core.config import settings
from barrage.schemas.stress.request_stat import BuiltRequest
from barrage.schemas.stress.stress_request import TargetSpec
from barrage.utils.file_writer import FileWriter

logger = logging.getLogger(__name__)

UrlGenerator = Callable[[str], str]

# RFC 7230 token
METHOD_TOKEN = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")


def generate_url_from_pattern(pattern: str) -> str:
    """정규식 패턴에 매칭되는 문자열 하나를 생성"""
    return exrex.getone(pattern, limit=settings.STRESS_REGEX_URL_MAX_REPEAT)


def parse_key_value_list(raw: str, pair_delim: str = ",", kv_delim: str = ":") -> Dict[str, str]:
    """
    "key1: val2, key3 :val4,key5:val6 " 형식의 문자열을 딕셔너리로 변환

    pair_delim으로 쌍을 나누고, 각 쌍은 첫 번째 kv_delim 기준으로 key/value로 나눈 뒤
    양쪽 공백을 제거합니다. 하나라도 잘못된 쌍이 있으면 전체가 실패합니다.

    Raises:
        KeyValueParseError: 두 부분으로 나뉘지 않거나 key/value가 비어있을 때
    """
    result: Dict[str, str] = {}
    for pair in raw.split(pair_delim):
        parts = pair.split(kv_delim, 1)
        if len(parts) != 2:
            raise KeyValueParseError(f"failed to parse into two parts: {pair!r}")
        key, value = parts[0].strip(), parts[1].strip()
        if key == "" or value == "":
            raise KeyValueParseError(f"key or value is empty: {pair!r}")
        result[key] = value
    return result


def resolve_url(target: TargetSpec, url_generator: UrlGenerator = generate_url_from_pattern) -> str:
    if target.regex_url:
        try:
            url_str = url_generator(target.url)
        except (re.error, ValueError) as e:
            raise RequestBuildError(f"failed to parse regex: {e}") from e
    else:
        url_str = target.url

    try:
        url = httpx.URL(url_str)
        # scheme이 없으면 http 사용
        if not url.scheme:
            prefix = "http:" if url_str.startswith("//") else "http://"
            url = httpx.URL(prefix + url_str)
    except (httpx.InvalidURL, TypeError) as e:
        raise RequestBuildError(f"failed to parse URL {url_str} : {e}") from e
    return str(url)


def resolve_body(target: TargetSpec) -> bytes:
    if target.body_filename:
        try:
            return FileWriter.read_bytes_from_path(target.body_filename)
        except OSError as e:
            raise RequestBuildError(
                f"failed to read contents of file {target.body_filename}: {e}"
            ) from e
    if target.body:
        return target.body.encode("utf-8")
    return b""


def build_request(target: TargetSpec, url_generator: UrlGenerator = generate_url_from_pattern) -> BuiltRequest:
    """
    타겟 설정으로부터 전송 가능한 요청 하나를 생성

    Raises:
        RequestBuildError: URL/본문/헤더/basic auth 처리 실패시
    """
    url = resolve_url(target, url_generator)
    body = resolve_body(target)

    headers: Dict[str, str] = {}
    if target.headers:
        try:
            headers.update(parse_key_value_list(target.headers))
        except KeyValueParseError as e:
            logger.debug(f"Header parse failure: {e}")
            raise RequestBuildError("could not parse headers") from e

    # User-Agent는 헤더 문자열보다 항상 우선
    for key in [k for k in headers if k.lower() == "user-agent"]:
        del headers[key]
    headers["User-Agent"] = target.user_agent

    basic_auth = None
    if target.basic_auth:
        try:
            auth_pairs = parse_key_value_list(target.basic_auth)
        except KeyValueParseError as e:
            logger.debug(f"Basic auth parse failure: {e}")
            raise RequestBuildError("could not parse basic auth") from e
        # 첫 번째 쌍만 사용
        basic_auth = next(iter(auth_pairs.items()))

    method = (target.method or "GET").upper()
    if not METHOD_TOKEN.fullmatch(method):
        raise RequestBuildError(f"failed to create request: invalid method {method!r}")

    return BuiltRequest(
        method=method,
        url=url,
        headers=headers,
        body=body,
        basic_auth=basic_auth,
    )
