"""Shared pytest fixtures for test suite"""

import json
import os
import subprocess
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

REPO_ROOT = Path(__file__).parent.parent
SCHEMAS_DIR = REPO_ROOT / "schemas"

ENV_VARS = (
    "EDENRED_USERNAME",
    "EDENRED_PASSWORD",
    "EDENRED_OUTPUT",
    "EDENRED_BASE_URL",
    "EDENRED_TIMEOUT",
    "EDENRED_VERBOSE",
)


@dataclass
class CLIResult:
    """Result from running the CLI."""

    exit_code: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        return self.exit_code == 0


def run_cli(*args: str, timeout: int = 30, env: dict[str, str] | None = None) -> CLIResult:
    """Run the edenred CLI in a subprocess.

    EDENRED_* variables from the calling environment are dropped so that
    only ``env`` applies.
    """
    cmd = [sys.executable, "-m", "src.edenred_client.cli", *args]

    run_env = {key: value for key, value in os.environ.items() if key not in ENV_VARS}
    run_env.update(env or {})

    result = subprocess.run(
        cmd,
        capture_output=True,
        text=True,
        timeout=timeout,
        cwd=REPO_ROOT,
        env=run_env,
    )

    return CLIResult(
        exit_code=result.returncode,
        stdout=result.stdout,
        stderr=result.stderr,
    )


def load_schema(name: str) -> dict:
    """Load a JSON schema from the schemas directory."""
    return json.loads((SCHEMAS_DIR / f"{name}.json").read_text())


@dataclass
class FakeEdenredAPI:
    """Canned Edenred API for httpx.MockTransport.

    Records every request so tests can assert on what was sent.
    """

    signin_status: int = 200
    signin_body: Any = field(
        default_factory=lambda: {
            "sessionToken": "session-token",
            "refreshToken": "refresh-token",
            "expiresIn": 3600,
        }
    )
    benefits_status: int = 200
    benefits_body: Any = field(
        default_factory=lambda: {
            "benefits": [
                {"walletType": "main", "balance": 6850},
                {"walletType": "wellness", "balance": 12345},
            ]
        }
    )
    requests: list[httpx.Request] = field(default_factory=list)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.url.path == "/signin":
            return self._respond(self.signin_status, self.signin_body)
        if request.url.path == "/users/me/user-benefits":
            return self._respond(self.benefits_status, self.benefits_body)
        return httpx.Response(404, text="not found")

    @staticmethod
    def _respond(status: int, body: Any) -> httpx.Response:
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)

    def http_client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))

    @property
    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]


@pytest.fixture
def cli_runner() -> Callable[..., CLIResult]:
    """Fixture providing CLI runner function."""
    return run_cli


@pytest.fixture
def fake_api() -> FakeEdenredAPI:
    """Fake Edenred API with a successful sign-in and two wallets"""
    return FakeEdenredAPI()


@pytest.fixture
def clean_env(monkeypatch):
    """Remove EDENRED_* environment variables"""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Mock credential environment variables"""
    monkeypatch.setenv("EDENRED_USERNAME", "env-user@example.com")
    monkeypatch.setenv("EDENRED_PASSWORD", "env-password")
