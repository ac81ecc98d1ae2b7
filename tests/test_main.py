"""Tests for the demo driver"""

from unittest.mock import AsyncMock, Mock

import httpx
import pytest

from s3_gcs_shim import main as main_module
from s3_gcs_shim.client import S3Client
from s3_gcs_shim.exceptions import AuthError, ConfigError
from s3_gcs_shim.main import DEMO_BODY, DEMO_KEY, load_config, main, run_demo
from s3_gcs_shim.models import ObjectInfo
from s3_gcs_shim.pipeline import create_http_client


class TestLoadConfig:
    """Config from command line and environment"""

    def test_command_line(self, clean_env):
        config = load_config(["--project_id", "cli-project", "--bucket", "cli-bucket"])

        assert config.project_id == "cli-project"
        assert config.bucket == "cli-bucket"

    def test_environment(self, clean_env, monkeypatch):
        monkeypatch.setenv("S3GCS_PROJECT_ID", "env-project")
        monkeypatch.setenv("S3GCS_BUCKET", "env-bucket")

        config = load_config([])

        assert config.project_id == "env-project"
        assert config.bucket == "env-bucket"

    def test_missing_project(self, clean_env):
        with pytest.raises(ConfigError) as exc_info:
            load_config(["--bucket", "b"])

        assert any("project_id" in error for error in exc_info.value.errors)

    def test_missing_bucket(self, clean_env):
        with pytest.raises(ConfigError, match="bucket"):
            load_config(["--project_id", "p"])


class TestRunDemo:
    """Demo flow over the pipeline"""

    @pytest.mark.asyncio
    async def test_demo_flow(self, config, provider, make_backend, capsys):
        def respond(request):
            if request.method == "GET" and request.url.path == "/":
                return httpx.Response(
                    200,
                    content=b"<ListAllMyBucketsResult><Buckets><Bucket>"
                    b"<Name>test-bucket</Name></Bucket></Buckets>"
                    b"</ListAllMyBucketsResult>",
                )
            return httpx.Response(
                200,
                headers=[("x-goog-meta-key01", "foo"), ("x-goog-meta-key02", "bar")],
                content=DEMO_BODY if request.method == "GET" else b"",
            )

        backend = make_backend(responder=respond)
        http_client = create_http_client(config, provider, transport=backend.transport)

        await run_demo(config, S3Client(config, http_client=http_client))

        methods = [(r.method, r.url.path) for r in backend.requests]
        assert methods == [
            ("GET", "/"),
            ("PUT", f"/test-bucket/{DEMO_KEY}"),
            ("GET", f"/test-bucket/{DEMO_KEY}"),
        ]
        put_request = backend.requests[1]
        assert put_request.headers["x-goog-acl"] == "private"
        assert put_request.headers["x-goog-meta-key01"] == "foo"

        output = capsys.readouterr().out
        assert "buckets: ['test-bucket']" in output
        assert "put object:" in output
        assert "get object:" in output


class TestMain:
    """Exit status of the entry point"""

    @pytest.fixture(autouse=True)
    def quiet_logging(self, monkeypatch):
        """Keep main() from reconfiguring the root logger under pytest"""
        monkeypatch.setattr(main_module, "setup_logging", Mock())

    def test_success(self, clean_env, monkeypatch):
        demo = AsyncMock()
        monkeypatch.setattr(main_module, "run_demo", demo)

        assert main(["--project_id", "p", "--bucket", "b"]) == 0
        demo.assert_awaited_once()

    def test_config_error(self, clean_env):
        assert main(["--bucket", "b"]) == 1

    @pytest.mark.parametrize(
        "error",
        [
            AuthError("no token", errors=["DefaultCredentialsError"]),
            ConfigError("SigV4 signing requires an HMAC key pair"),
            httpx.ConnectError("refused"),
            httpx.HTTPStatusError(
                "forbidden",
                request=httpx.Request("GET", "https://storage.googleapis.com/"),
                response=httpx.Response(403),
            ),
        ],
        ids=["auth", "config", "transport", "http_status"],
    )
    def test_failures_exit_1(self, clean_env, monkeypatch, error):
        monkeypatch.setattr(main_module, "run_demo", AsyncMock(side_effect=error))

        assert main(["--project_id", "p", "--bucket", "b"]) == 1

    def test_auth_error_reported_as_credential_problem(
        self, clean_env, monkeypatch, caplog
    ):
        monkeypatch.setattr(
            main_module, "run_demo", AsyncMock(side_effect=AuthError("no token"))
        )

        with caplog.at_level("ERROR", logger="s3-gcs-shim.main"):
            main(["--project_id", "p", "--bucket", "b"])

        assert "Credential problem: no token" in caplog.text


def test_object_info_repr_in_output():
    info = ObjectInfo(key="k", metadata={"a": "b"})
    assert "metadata={'a': 'b'}" in repr(info)
