import logging
import os

import pytest
import structlog
from structlog.testing import capture_logs


def pytest_load_initial_conftests(early_config, parser, args):
    """Conditionally append coverage report to GITHUB_STEP_SUMMARY.

    Only applies when running in GitHub Actions.
    """
    summary_file = os.getenv("GITHUB_STEP_SUMMARY")
    if (
        os.getenv("GITHUB_ACTIONS") == "true"
        and summary_file
        and not any(arg.startswith("--cov-report=markdown-append:") for arg in args)
    ):
        args.append(f"--cov-report=markdown-append:{summary_file}")


@pytest.fixture
def log_output():
    """Capture structlog events at every level."""
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG))
    with capture_logs() as logs:
        yield logs
    structlog.reset_defaults()
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING))


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep tests away from the developer's real config.json and PRINTHOST_* variables."""
    for key in list(os.environ):
        if key.startswith("PRINTHOST_"):
            monkeypatch.delenv(key)
    monkeypatch.setattr("platformdirs.user_config_dir", lambda *args, **kwargs: str(tmp_path / "config"))
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("printhost.client.cli.config._settings", None)


@pytest.fixture
def drain_body():
    """Return a helper that reads a streamed upload body from a `responses` callback request.

    Depending on the `responses` version the body is still the streaming object or already bytes.
    """

    def drain(request):
        body = request.body
        return body.read() if hasattr(body, "read") else body

    return drain
