"""
"300ms", "1.5h", "2h45m" 형식의 기간 문자열 파서
"""
import re

_UNIT_NANOSECONDS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

_COMPONENT_PATTERN = re.compile(r"(\d*)(?:\.(\d*))?([a-zµμ]+)")


def parse_duration_ns(value: str) -> int:
    """
    기간 문자열을 나노초 정수로 변환

    Args:
        value: 부호(선택) + (숫자 + 단위) 반복. 단위는 ns, us(µs), ms, s, m, h

    Returns:
        int: 나노초

    Raises:
        ValueError: 형식이 잘못되었거나 알 수 없는 단위일 때
    """
    text = value
    sign = 1
    if text[:1] in ("-", "+"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]

    if text == "0":
        return 0
    if not text:
        raise ValueError(f"invalid duration {value!r}")

    total = 0
    pos = 0
    while pos < len(text):
        match = _COMPONENT_PATTERN.match(text, pos)
        if not match:
            raise ValueError(f"invalid duration {value!r}")
        whole, frac, unit = match.groups()
        if not whole and not frac:
            raise ValueError(f"invalid duration {value!r}")
        if unit not in _UNIT_NANOSECONDS:
            raise ValueError(f"unknown unit {unit!r} in duration {value!r}")

        scale = _UNIT_NANOSECONDS[unit]
        total += int(whole or "0") * scale
        if frac:
            total += int(frac) * scale // (10 ** len(frac))
        pos = match.end()

    return sign * total


def parse_duration_seconds(value: str) -> float:
    return parse_duration_ns(value) / 1_000_000_000
