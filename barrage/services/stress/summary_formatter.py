from barrage.schemas.stress.stress_summary import StressSummary


def create_text_summary(summary: StressSummary) -> str:
    """요약을 사람이 읽을 수 있는 여러 줄 문자열로 변환"""
    latency = summary.latency
    lines = [
        f"Requests: {summary.total_requests}",
        f"Succeeded: {summary.success_count}  Failed: {summary.error_count}",
        "",
        "Status codes:",
    ]
    for bucket, stats in summary.status_buckets.items():
        if stats.count == 0:
            continue
        lines.append(f"  {bucket}: {stats.count} ({stats.percentage:.2f}%)")

    lines.extend([
        "",
        "Latency (ms):",
        f"  min: {latency.min_value:.2f}  mean: {latency.avg_value:.2f}  max: {latency.max_value:.2f}",
        f"  p50: {latency.p50:.2f}  p75: {latency.p75:.2f}  p90: {latency.p90:.2f}"
        f"  p95: {latency.p95:.2f}  p99: {latency.p99:.2f}",
        "",
        f"Data transferred: {summary.total_bytes} bytes",
        f"Throughput: {summary.throughput:.2f} req/s over {summary.span_seconds:.3f}s",
        "",
    ])
    return "\n".join(lines)
