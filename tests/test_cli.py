import pytest

from barrage.cli import build_parser, config_from_args, main
from barrage.common.response.code import FailureCode
from barrage.services.stress.stress_service import StressService
from tests.conftest import RecordingHandler, make_client_factory


def test_every_url_becomes_a_target_with_shared_options():
    args = build_parser().parse_args([
        "stress", "http://a.example.com", "b.example.com",
        "-n", "20", "-c", "4", "-t", "2s", "-X", "PUT",
        "-H", "Accept: */*", "--basic-auth", "u:p", "-k", "--compress",
        "-q", "--no-http2", "-j", "out.json",
    ])

    config = config_from_args(args)

    assert [t.url for t in config.targets] == ["http://a.example.com", "b.example.com"]
    for target in config.targets:
        assert target.count == 20
        assert target.concurrency == 4
        assert target.timeout == "2s"
        assert target.method == "PUT"
        assert target.headers == "Accept: */*"
        assert target.basic_auth == "u:p"
        assert target.keep_alive
        assert target.compress
    assert config.quiet
    assert config.no_http2
    assert config.result_filename_json == "out.json"
    assert config.result_filename_csv is None


def test_defaults():
    config = config_from_args(build_parser().parse_args(["stress"]))

    target = config.targets[0]
    assert target.url == "http://localhost"
    assert target.count == 10
    assert target.concurrency == 1
    assert target.timeout == "10s"
    assert target.method == "GET"
    assert not config.enforce_ssl


def test_main_runs_and_returns_zero(capsys):
    handler = RecordingHandler()
    service = StressService(client_factory=make_client_factory(handler), max_active_requests=0)

    code = main(["stress", "http://example.com", "-n", "3", "-q"], service=service)

    assert code == 0
    assert len(handler.requests) == 3
    assert "----Summary----" in capsys.readouterr().out


def test_main_reports_fatal_error(capsys):
    handler = RecordingHandler()
    service = StressService(client_factory=make_client_factory(handler), max_active_requests=0)

    code = main(["stress", "http://example.com", "-n", "2", "-c", "3"], service=service)

    assert code == 1
    err = capsys.readouterr().err
    assert "concurrency must be higher than request count" in err
    assert "invalid configuration" in err
    assert handler.requests == []


def test_subcommand_is_required():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_code_description_joins_detail_and_code_message():
    assert FailureCode.INVALID_CONFIGURATION.describe("zero targets") == "zero targets\ninvalid configuration"
    assert FailureCode.INVALID_CONFIGURATION.describe("invalid configuration") == "invalid configuration"
    assert FailureCode.RESULT_WRITE_FAILED.is_server_error()
    assert not FailureCode.INVALID_CONFIGURATION.is_server_error()
