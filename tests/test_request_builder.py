import base64
import itertools

import pytest

from barrage.common.exception.stress_exception import KeyValueParseError, RequestBuildError
from barrage.schemas.stress.stress_request import TargetSpec
from barrage.services.stress.request_builder import build_request, generate_url_from_pattern, parse_key_value_list


class TestParseKeyValueList:

    def test_trims_whitespace_around_keys_and_values(self):
        result = parse_key_value_list("key1: val2, key3 :val4,key5:val6 ")

        assert result == {"key1": "val2", "key3": "val4", "key5": "val6"}

    def test_splits_on_first_separator_only(self):
        result = parse_key_value_list("Referer: http://example.com:8080/path")

        assert result == {"Referer": "http://example.com:8080/path"}

    @pytest.mark.parametrize("raw", [
        "key1 val1",
        "key1:val1, key2",
        "key1:val1,",
        ":val1",
        "key1:  ",
        "  : ",
        "",
    ])
    def test_malformed_pair_fails_whole_string(self, raw):
        with pytest.raises(KeyValueParseError):
            parse_key_value_list(raw)


class TestBuildRequest:

    def test_literal_url_with_defaults(self):
        request = build_request(TargetSpec(url="http://example.com/path"))

        assert request.method == "GET"
        assert request.url == "http://example.com/path"
        assert request.body == b""
        assert request.basic_auth is None
        assert request.headers["User-Agent"] == "barrage"

    def test_missing_scheme_defaults_to_http(self):
        request = build_request(TargetSpec(url="example.com/path"))

        assert request.url == "http://example.com/path"

    def test_https_scheme_is_kept(self):
        request = build_request(TargetSpec(url="https://example.com"))

        assert request.url.startswith("https://example.com")

    def test_unparseable_url_carries_offending_string(self):
        with pytest.raises(RequestBuildError, match="failed to parse URL http://example.com:abc"):
            build_request(TargetSpec(url="http://example.com:abc"))

    def test_method_is_upper_cased(self):
        request = build_request(TargetSpec(url="http://example.com", method="post"))

        assert request.method == "POST"

    @pytest.mark.parametrize("method", ["BAD METHOD", "GET\r\n", "PO(ST)", "GÉT"])
    def test_method_that_is_not_a_token_aborts_build(self, method):
        with pytest.raises(RequestBuildError, match="failed to create request: invalid method"):
            build_request(TargetSpec(url="http://example.com", method=method))

    def test_extension_methods_are_accepted(self):
        request = build_request(TargetSpec(url="http://example.com", method="purge"))

        assert request.method == "PURGE"

    def test_literal_body(self):
        request = build_request(TargetSpec(url="http://example.com", body="hello"))

        assert request.body == b"hello"

    def test_body_file_takes_precedence_over_literal(self, tmp_path):
        body_file = tmp_path / "body.json"
        body_file.write_bytes(b'{"from": "file"}')

        request = build_request(TargetSpec(
            url="http://example.com",
            body="literal",
            body_filename=str(body_file),
        ))

        assert request.body == b'{"from": "file"}'

    def test_unreadable_body_file_names_the_file(self, tmp_path):
        missing = tmp_path / "missing.txt"

        with pytest.raises(RequestBuildError, match="failed to read contents of file .*missing.txt"):
            build_request(TargetSpec(url="http://example.com", body_filename=str(missing)))

    def test_headers_are_added(self):
        request = build_request(TargetSpec(
            url="http://example.com",
            headers="Accept: text/html, X-Request-Id: 42",
        ))

        assert request.headers["Accept"] == "text/html"
        assert request.headers["X-Request-Id"] == "42"

    def test_user_agent_overrides_header_string(self):
        request = build_request(TargetSpec(
            url="http://example.com",
            headers="user-agent: curl/8.0, Accept: */*",
            user_agent="barrage-test",
        ))

        user_agents = [value for key, value in request.headers.items() if key.lower() == "user-agent"]
        assert user_agents == ["barrage-test"]

    def test_malformed_headers_abort_build(self):
        with pytest.raises(RequestBuildError, match="could not parse headers"):
            build_request(TargetSpec(url="http://example.com", headers="Accept text/html"))

    def test_basic_auth_uses_only_first_pair(self):
        request = build_request(TargetSpec(
            url="http://example.com",
            basic_auth="alice:secret, bob:hunter2",
        ))

        assert request.basic_auth == ("alice", "secret")

    def test_malformed_basic_auth_aborts_build(self):
        with pytest.raises(RequestBuildError, match="could not parse basic auth"):
            build_request(TargetSpec(url="http://example.com", basic_auth="alice"))

    def test_literal_url_is_identical_for_every_request(self):
        target = TargetSpec(url="http://example.com/items?page=1", regex_url=False)

        urls = {build_request(target).url for _ in range(5)}

        assert urls == {"http://example.com/items?page=1"}

    def test_regex_url_is_generated_per_request(self):
        generated = itertools.count()
        target = TargetSpec(url="http://example.com/item/[0-9]+", regex_url=True)

        urls = [
            build_request(target, url_generator=lambda pattern: f"http://example.com/item/{next(generated)}").url
            for _ in range(3)
        ]

        assert urls == [
            "http://example.com/item/0",
            "http://example.com/item/1",
            "http://example.com/item/2",
        ]

    def test_regex_url_matches_pattern(self):
        target = TargetSpec(url=r"http://example\.com/item/[0-9]{3}", regex_url=True)

        request = build_request(target)

        assert request.url.startswith("http://example.com/item/")
        assert len(request.url.rsplit("/", 1)[1]) == 3

    def test_malformed_regex_fails_build(self):
        with pytest.raises(RequestBuildError, match="failed to parse regex"):
            build_request(TargetSpec(url="http://example.com/(unclosed", regex_url=True))


def test_generate_url_from_pattern_produces_match():
    url = generate_url_from_pattern(r"http://host/(a|b)")

    assert url in ("http://host/a", "http://host/b")


def test_basic_auth_reaches_the_wire(handler, client_factory):
    request = build_request(TargetSpec(url="http://example.com", basic_auth="alice:secret"))

    with client_factory(None, None) as client:
        client.request(request.method, request.url, headers=request.headers, auth=request.basic_auth)

    expected = "Basic " + base64.b64encode(b"alice:secret").decode()
    assert handler.requests[0].headers["Authorization"] == expected
