try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import subprocess
import sys

import httpx
import pytest

from conftest import FakeMonnifyApi, envelope
from monnify import Monnify, MonnifySettings
from monnify.clients.http import AUTH_ENDPOINT
from monnify.clients.sqlite_token_store import SQLiteTokenStore
from monnify.core import config as config_module
from monnify.services import (
    BankService,
    CustomerService,
    PaymentService,
    RefundService,
    SettlementService,
    TransferService,
    WebhookService,
)


def test_sdk_exposes_every_service(settings) -> None:
    with Monnify(settings) as monnify:
        assert isinstance(monnify.payments, PaymentService)
        assert isinstance(monnify.transfers, TransferService)
        assert isinstance(monnify.refunds, RefundService)
        assert isinstance(monnify.settlements, SettlementService)
        assert isinstance(monnify.banks, BankService)
        assert isinstance(monnify.customers, CustomerService)
        assert isinstance(monnify.webhooks, WebhookService)
        assert monnify.is_sandbox
        assert not monnify.is_live


def test_sdk_authenticates_through_shared_store(settings) -> None:
    api = FakeMonnifyApi()
    api.add("POST", AUTH_ENDPOINT, json_body=envelope({"accessToken": "jwt", "expiresIn": 3600}))
    api.add("GET", "/api/v1/banks", json_body=envelope([{"name": "Access Bank", "code": "044"}]))
    http = httpx.Client(base_url=settings.base_url, transport=httpx.MockTransport(api))

    with Monnify(settings, http_client=http) as monnify:
        assert monnify.banks.get_by_code("044").name == "Access Bank"
        assert isinstance(monnify.token_store, SQLiteTokenStore)

    # A second SDK instance over the same storage reuses the cached token.
    api.requests.clear()
    http = httpx.Client(base_url=settings.base_url, transport=httpx.MockTransport(api))
    with Monnify(settings, http_client=http) as monnify:
        monnify.banks.get_all()
    assert [request.url.path for request in api.requests] == ["/api/v1/banks"]


def test_from_env_reads_monnify_variables(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.setenv("MONNIFY_ENVIRONMENT", "live")
    monkeypatch.setenv("MONNIFY_STORAGE_DIR", str(tmp_path))
    monkeypatch.setenv("MONNIFY_LOG_LEVEL", "WARNING")
    config_module.get_settings.cache_clear()
    try:
        monnify = Monnify.from_env()
    finally:
        config_module.get_settings.cache_clear()

    assert monnify.is_live
    assert isinstance(monnify.settings, MonnifySettings)
    assert monnify.settings.storage_dir == tmp_path
    monnify.close()


def test_sdk_imports_without_fcntl(tmp_path) -> None:
    # The file backend needs fcntl; the rest of the SDK must not.
    code = (
        "import sys\n"
        "sys.modules['fcntl'] = None\n"
        "import monnify\n"
        "from monnify.clients import create_token_store\n"
        f"store = create_token_store({str(tmp_path)!r}, backend='sqlite')\n"
        "print(store.backend)\n"
    )
    result = subprocess.run(
        [sys.executable, "-c", code],
        cwd=str(_bootstrap.PROJECT_ROOT),
        capture_output=True,
        text=True,
        timeout=60,
    )

    assert result.returncode == 0, result.stderr
    assert result.stdout.strip() == "sqlite"
