import csv
import io
import json
from typing import List

from barrage.common.exception.stress_exception import ResultWriteError
from barrage.schemas.stress.request_stat import RequestStat
from barrage.utils.file_writer import FileWriter


def render_json(stats: List[RequestStat]) -> str:
    return json.dumps([stat.to_dict() for stat in stats], indent=4, ensure_ascii=False)


def render_csv(stats: List[RequestStat]) -> str:
    """start time, duration(ns), status code, "<N> bytes" - 헤더 행 없음"""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    for stat in stats:
        writer.writerow([
            str(stat.start_time),
            str(stat.duration_ns),
            str(stat.status_code),
            f"{stat.data_transferred} bytes",
        ])
    return buffer.getvalue()


def write_json(stats: List[RequestStat], file_path: str) -> str:
    try:
        return FileWriter.write_to_path(render_json(stats), file_path)
    except OSError as e:
        raise ResultWriteError(f"failed to write full result data to {file_path}: {e}") from e


def write_csv(stats: List[RequestStat], file_path: str) -> str:
    try:
        return FileWriter.write_to_path(render_csv(stats), file_path, newline="")
    except OSError as e:
        raise ResultWriteError(f"failed to write full result data to {file_path}: {e}") from e
