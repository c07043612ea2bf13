"""Tests for core infrastructure modules."""

from unittest.mock import patch
import logging

import httpx
import pytest
from pydantic import ValidationError

from cdap.base.config import CdapConfig, validate_config
from cdap.base.exceptions import RemoteCallError, RequestConstructionError
from cdap.base.http import HttpClient, url_join
from cdap.base.logger import CdapLogger, StructuredFormatter
from cdap.base.retry import retry


# ══════════════════════════════════════════════════════════════════════
# Config
# ══════════════════════════════════════════════════════════════════════

class TestCdapConfig:
    def test_explicit_values(self, monkeypatch):
        monkeypatch.setenv("CDAP_HOST", "http://env:11015")
        cfg = CdapConfig(host="https://cdap.example.com", default_namespace="ns", auth_token="t")
        assert cfg.host == "https://cdap.example.com"
        assert cfg.default_namespace == "ns"
        assert cfg.auth_token == "t"

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("CDAP_NAMESPACE", raising=False)
        monkeypatch.delenv("CDAP_AUTH_TOKEN", raising=False)
        cfg = CdapConfig(host="http://localhost:11015")
        assert cfg.default_namespace == "default"
        assert cfg.auth_token is None
        assert cfg.max_attempts == 1

    def test_env_fallback(self, monkeypatch):
        monkeypatch.setenv("CDAP_HOST", "http://env:11015")
        monkeypatch.setenv("CDAP_NAMESPACE", "env-ns")
        monkeypatch.setenv("CDAP_AUTH_TOKEN", "env-token")
        cfg = CdapConfig()
        assert cfg.host == "http://env:11015"
        assert cfg.default_namespace == "env-ns"
        assert cfg.auth_token == "env-token"

    def test_missing_host(self, monkeypatch):
        monkeypatch.delenv("CDAP_HOST", raising=False)
        with pytest.raises(ValidationError):
            CdapConfig()

    def test_host_needs_scheme(self):
        with pytest.raises(ValidationError, match="http"):
            CdapConfig(host="localhost:11015")

    def test_unknown_field(self):
        with pytest.raises(ValidationError):
            CdapConfig(host="http://localhost", region="us")

    def test_max_attempts_positive(self):
        with pytest.raises(ValidationError):
            CdapConfig(host="http://localhost", max_attempts=0)


class TestValidateConfig:
    def test_dict(self):
        cfg = validate_config({"host": "http://localhost:11015"})
        assert isinstance(cfg, CdapConfig)

    def test_model_passthrough(self):
        cfg = CdapConfig(host="http://localhost:11015")
        assert validate_config(cfg) is cfg


# ══════════════════════════════════════════════════════════════════════
# URL joining
# ══════════════════════════════════════════════════════════════════════

class TestUrlJoin:
    def test_single_separator(self):
        assert url_join("http://h:1/", "/v3/", "/namespaces", "ns/") == "http://h:1/v3/namespaces/ns"

    def test_plain_segments(self):
        assert url_join("http://h", "a", "b", "c") == "http://h/a/b/c"

    def test_base_path_kept(self):
        assert url_join("http://h/api/", "v3") == "http://h/api/v3"

    def test_empty_segments_dropped(self):
        assert url_join("http://h", "v3", "", "/", "x") == "http://h/v3/x"

    def test_no_encoding(self):
        assert url_join("http://h", "a b", "c%2F") == "http://h/a b/c%2F"

    def test_deterministic(self):
        assert url_join("http://h", "ns", "key") == url_join("http://h/", "/ns/", "/key/")


# ══════════════════════════════════════════════════════════════════════
# HTTP client
# ══════════════════════════════════════════════════════════════════════

def _client(handler, **config):
    cfg = CdapConfig(host="http://cdap.local", **config)
    return HttpClient(cfg, transport=httpx.MockTransport(handler))


class TestHttpClient:
    def test_returns_body(self):
        with _client(lambda r: httpx.Response(200, content=b"[]")) as client:
            assert client.call("GET", "http://cdap.local/v3/namespaces") == b"[]"

    def test_auth_header(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200)

        with _client(handler, auth_token="tok") as client:
            client.call("PUT", "http://cdap.local/x", b"{}")
        assert seen[0].headers["Authorization"] == "Bearer tok"
        assert seen[0].headers["Content-Type"] == "application/json"
        assert seen[0].content == b"{}"

    def test_no_auth_header_without_token(self, monkeypatch):
        monkeypatch.delenv("CDAP_AUTH_TOKEN", raising=False)
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(204)

        with _client(handler) as client:
            client.call("DELETE", "http://cdap.local/x")
        assert "Authorization" not in seen[0].headers

    def test_non_2xx(self):
        with _client(lambda r: httpx.Response(409, text="conflict")) as client:
            with pytest.raises(RemoteCallError) as exc:
                client.call("PUT", "http://cdap.local/x", b"{}")
        assert exc.value.status_code == 409
        assert exc.value.body == "conflict"

    def test_transport_failure(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with _client(handler) as client:
            with pytest.raises(RemoteCallError) as exc:
                client.call("GET", "http://cdap.local/x")
        assert exc.value.status_code is None
        assert isinstance(exc.value.__cause__, httpx.ConnectError)

    def test_transport_retry(self):
        calls = []

        def handler(request):
            calls.append(request)
            if len(calls) < 3:
                raise httpx.ConnectError("refused", request=request)
            return httpx.Response(200, content=b"ok")

        with _client(handler, max_attempts=3, retry_delay=0) as client:
            assert client.call("GET", "http://cdap.local/x") == b"ok"
        assert len(calls) == 3

    def test_status_errors_not_retried(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(503)

        with _client(handler, max_attempts=3, retry_delay=0) as client:
            with pytest.raises(RemoteCallError):
                client.call("GET", "http://cdap.local/x")
        assert len(calls) == 1

    def test_relative_address(self):
        with _client(lambda r: httpx.Response(200)) as client:
            with pytest.raises(RequestConstructionError):
                client.call("GET", "/v3/namespaces")

    def test_bad_scheme(self):
        with _client(lambda r: httpx.Response(200)) as client:
            with pytest.raises(RequestConstructionError):
                client.call("GET", "ftp://cdap.local/v3")


# ══════════════════════════════════════════════════════════════════════
# Retry
# ══════════════════════════════════════════════════════════════════════

class TestRetry:
    def test_success_no_retry(self):
        call_count = 0

        @retry(max_attempts=3, base_delay=0)
        def ok():
            nonlocal call_count
            call_count += 1
            return "ok"

        assert ok() == "ok"
        assert call_count == 1

    def test_retries_on_failure(self):
        call_count = 0

        @retry(max_attempts=3, base_delay=0, retryable_exceptions=(ValueError,))
        def fail_twice():
            nonlocal call_count
            call_count += 1
            if call_count < 3:
                raise ValueError("fail")
            return "ok"

        assert fail_twice() == "ok"
        assert call_count == 3

    def test_max_attempts_exceeded(self):
        @retry(max_attempts=2, base_delay=0, retryable_exceptions=(ValueError,))
        def always_fail():
            raise ValueError("nope")

        with pytest.raises(ValueError):
            always_fail()

    def test_non_retryable_raises_immediately(self):
        call_count = 0

        @retry(max_attempts=3, base_delay=0, retryable_exceptions=(ValueError,))
        def type_err():
            nonlocal call_count
            call_count += 1
            raise TypeError("not retryable")

        with pytest.raises(TypeError):
            type_err()
        assert call_count == 1

    @patch("cdap.base.retry.time.sleep")
    def test_backoff_capped(self, mock_sleep):
        @retry(max_attempts=4, base_delay=1, max_delay=3, retryable_exceptions=(ValueError,))
        def always_fail():
            raise ValueError("nope")

        with pytest.raises(ValueError):
            always_fail()
        assert [c.args[0] for c in mock_sleep.call_args_list] == [1, 2, 3]


# ══════════════════════════════════════════════════════════════════════
# Logger
# ══════════════════════════════════════════════════════════════════════

class TestCdapLogger:
    def test_log_operation(self, capfd):
        logger = CdapLogger("test_cdap")
        logger.logger.setLevel(logging.DEBUG)
        logger.info("test message", namespace="analytics", resource="secure_key", operation="create")
        captured = capfd.readouterr()
        assert "test message" in captured.err
        assert "analytics" in captured.err

    def test_structured_formatter(self):
        fmt = StructuredFormatter()
        record = logging.LogRecord(
            name="test", level=logging.INFO, pathname="", lineno=0,
            msg="hi", args=(), exc_info=None,
        )
        record.namespace = "default"
        record.request_id = "abc"
        record.status_code = 404
        output = fmt.format(record)
        assert '"namespace": "default"' in output
        assert '"request_id": "abc"' in output
        assert '"status_code": 404' in output
