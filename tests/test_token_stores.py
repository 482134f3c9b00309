try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import json
import multiprocessing
import os
import sqlite3
import sys
import threading
import time
from pathlib import Path

import pytest

from monnify.clients import token_store as token_store_module
from monnify.clients.file_token_store import FileTokenStore
from monnify.clients.sqlite_token_store import SQLiteTokenStore
from monnify.clients.token_store import create_token_store
from monnify.core.errors import (
    AuthenticationError,
    ConfigurationError,
    LockTimeoutError,
    MonnifyException,
)
from monnify.models.token import TokenGrant
from monnify.services.token_cipher import TokenCipher

BACKENDS = ["file", "sqlite"]


class FakeClock:
    def __init__(self, now: int = 1_700_000_000) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class CountingRefresh:
    def __init__(self, token: str = "abc", expires_in: int = 3600, delay: float = 0.0) -> None:
        self.token = token
        self.expires_in = expires_in
        self.delay = delay
        self.calls = 0
        self._lock = threading.Lock()

    def __call__(self):
        with self._lock:
            self.calls += 1
            call = self.calls
        if self.delay:
            time.sleep(self.delay)
        token = self.token if call == 1 else f"{self.token}-{call}"
        return {"token": token, "expiresIn": self.expires_in}


def make_store(backend: str, tmp_path: Path, **kwargs):
    if backend == "file":
        return FileTokenStore(tmp_path / "auth.json", **kwargs)
    return SQLiteTokenStore(tmp_path / "auth.sqlite", **kwargs)


@pytest.mark.parametrize("backend", BACKENDS)
def test_empty_store_refreshes_once_then_serves_cache(backend: str, tmp_path) -> None:
    store = make_store(backend, tmp_path)
    refresh = CountingRefresh()

    assert store.get_token(refresh) == "abc"
    assert store.get_token(refresh) == "abc"
    assert refresh.calls == 1


@pytest.mark.parametrize("backend", BACKENDS)
def test_expired_record_triggers_refresh(backend: str, tmp_path) -> None:
    clock = FakeClock()
    store = make_store(backend, tmp_path, clock=clock)
    _seed(store, token="stale", expires_at=clock.now - 1)

    fresh = CountingRefresh(token="fresh")
    assert store.get_token(fresh) == "fresh"
    assert fresh.calls == 1


@pytest.mark.parametrize("backend", BACKENDS)
def test_cache_validity_honours_sixty_second_buffer(backend: str, tmp_path) -> None:
    clock = FakeClock()
    store = make_store(backend, tmp_path, clock=clock)
    refresh = CountingRefresh(expires_in=3600)
    start = clock.now

    store.get_token(refresh)

    clock.now = start + 3600 - 60 - 1
    store.get_token(refresh)
    assert refresh.calls == 1

    clock.now = start + 3600 - 60
    assert store.get_token(refresh) == "abc-2"
    assert refresh.calls == 2


@pytest.mark.parametrize("backend", BACKENDS)
def test_concurrent_threads_refresh_once(backend: str, tmp_path) -> None:
    store = make_store(backend, tmp_path)
    refresh = CountingRefresh(delay=0.2)
    workers = 16
    barrier = threading.Barrier(workers)
    results = []
    errors = []

    def worker() -> None:
        barrier.wait()
        try:
            results.append(store.get_token(refresh))
        except Exception as exc:  # pragma: no cover - surfaced by the assertion below
            errors.append(exc)

    threads = [threading.Thread(target=worker) for _ in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert refresh.calls == 1
    assert results == ["abc"] * workers


def _process_worker(backend: str, directory: str, marker: str, start, queue) -> None:
    def refresh():
        with open(marker, "a", encoding="utf-8") as handle:
            handle.write(f"{os.getpid()}\n")
        time.sleep(0.2)
        return {"token": f"token-{os.getpid()}", "expiresIn": 3600}

    store = make_store(backend, Path(directory))
    start.wait()
    queue.put(store.get_token(refresh))


@pytest.mark.skipif(sys.platform == "win32", reason="fork start method is POSIX only")
@pytest.mark.parametrize("backend", BACKENDS)
def test_concurrent_processes_refresh_once(backend: str, tmp_path) -> None:
    context = multiprocessing.get_context("fork")
    marker = tmp_path / "refreshes.log"
    start = context.Event()
    queue = context.Queue()
    workers = 10

    make_store(backend, tmp_path)
    processes = [
        context.Process(
            target=_process_worker,
            args=(backend, str(tmp_path), str(marker), start, queue),
        )
        for _ in range(workers)
    ]
    for process in processes:
        process.start()
    start.set()

    tokens = [queue.get(timeout=30) for _ in range(workers)]
    for process in processes:
        process.join(timeout=30)
        assert process.exitcode == 0

    refreshes = marker.read_text(encoding="utf-8").splitlines()
    assert len(refreshes) == 1
    assert len(set(tokens)) == 1
    assert tokens[0] == f"token-{refreshes[0]}"


@pytest.mark.parametrize("backend", BACKENDS)
def test_monnify_errors_propagate_unchanged(backend: str, tmp_path) -> None:
    store = make_store(backend, tmp_path)
    original = MonnifyException("Invalid credentials", 401, "AUTH_FAILED")

    def refresh():
        raise original

    with pytest.raises(MonnifyException) as excinfo:
        store.get_token(refresh)

    assert excinfo.value is original


@pytest.mark.parametrize("backend", BACKENDS)
def test_unexpected_refresh_errors_are_wrapped(backend: str, tmp_path) -> None:
    store = make_store(backend, tmp_path)

    def refresh():
        raise RuntimeError("network down")

    with pytest.raises(AuthenticationError) as excinfo:
        store.get_token(refresh)

    assert isinstance(excinfo.value.__cause__, RuntimeError)
    # A failed refresh leaves nothing cached.
    assert store.get_token(CountingRefresh(token="later")) == "later"


@pytest.mark.parametrize("backend", BACKENDS)
@pytest.mark.parametrize(
    "result",
    [{"token": "", "expiresIn": 3600}, {"token": "abc", "expiresIn": 0}, {"expiresIn": 10}, None],
)
def test_malformed_refresh_result_is_rejected(backend: str, tmp_path, result) -> None:
    store = make_store(backend, tmp_path)

    with pytest.raises(AuthenticationError):
        store.get_token(lambda: result)


@pytest.mark.parametrize("backend", BACKENDS)
def test_refresh_may_return_a_token_grant(backend: str, tmp_path) -> None:
    store = make_store(backend, tmp_path)

    assert store.get_token(lambda: TokenGrant(token="grant", expires_in=600)) == "grant"


def test_file_store_treats_corrupt_data_as_missing(tmp_path) -> None:
    store = FileTokenStore(tmp_path / "auth.json")
    store.path.write_text("{not json", encoding="utf-8")

    assert store.get_token(CountingRefresh(token="recovered")) == "recovered"
    assert json.loads(store.path.read_text(encoding="utf-8"))["token"] == "recovered"


def test_file_store_persists_expiry_and_uses_separate_lock_file(tmp_path) -> None:
    clock = FakeClock()
    store = FileTokenStore(tmp_path / "auth.json", clock=clock)

    store.get_token(CountingRefresh(expires_in=3600))

    record = json.loads(store.path.read_text(encoding="utf-8"))
    assert record == {"token": "abc", "expiresAt": clock.now + 3600}
    assert store.lock_path.exists()
    assert store.lock_path != store.path


def test_sqlite_store_keeps_a_single_row(tmp_path) -> None:
    clock = FakeClock()
    store = SQLiteTokenStore(tmp_path / "auth.sqlite", clock=clock)

    store.get_token(CountingRefresh(token="first"))
    clock.now += 7200
    store.get_token(CountingRefresh(token="second"))

    with sqlite3.connect(store.path) as conn:
        rows = conn.execute("SELECT id, token, expiresAt FROM auth").fetchall()
    assert rows == [(1, "second", clock.now + 3600)]


def test_sqlite_store_rolls_back_when_refresh_fails(tmp_path) -> None:
    store = SQLiteTokenStore(tmp_path / "auth.sqlite")

    with pytest.raises(AuthenticationError):
        store.get_token(lambda: {"token": "", "expiresIn": 60})

    # The write lock was released: another connection can write immediately.
    conn = sqlite3.connect(store.path, timeout=0.1, isolation_level=None)
    try:
        conn.execute("BEGIN IMMEDIATE")
        conn.execute("ROLLBACK")
    finally:
        conn.close()


def test_sqlite_store_lock_timeout_is_a_typed_error(tmp_path) -> None:
    store = SQLiteTokenStore(tmp_path / "auth.sqlite", lock_timeout=0.2)
    refreshing = threading.Event()
    release = threading.Event()
    results = {}

    def slow_refresh():
        refreshing.set()
        release.wait(5)
        return {"token": "slow", "expiresIn": 3600}

    def holder() -> None:
        results["holder"] = store.get_token(slow_refresh)

    thread = threading.Thread(target=holder)
    thread.start()
    try:
        assert refreshing.wait(5)
        with pytest.raises(LockTimeoutError) as excinfo:
            store.get_token(CountingRefresh(token="waiter"))
    finally:
        release.set()
        thread.join(5)

    assert isinstance(excinfo.value, MonnifyException)
    assert excinfo.value.error_code == "LOCK_TIMEOUT"
    assert isinstance(excinfo.value.__cause__, sqlite3.OperationalError)
    assert results["holder"] == "slow"



@pytest.mark.parametrize("backend", BACKENDS)
def test_cipher_encrypts_token_at_rest(backend: str, tmp_path) -> None:
    cipher = TokenCipher(secret="at-rest-secret", namespace="ns")
    store = make_store(backend, tmp_path, cipher=cipher)

    assert store.get_token(CountingRefresh(token="plain-token")) == "plain-token"

    raw = _raw_token(store)
    assert raw != "plain-token"
    assert cipher.open(raw) == "plain-token"

    refresh = CountingRefresh(token="unused")
    assert store.get_token(refresh) == "plain-token"
    assert refresh.calls == 0


@pytest.mark.parametrize("backend", BACKENDS)
def test_undecryptable_record_counts_as_missing(backend: str, tmp_path) -> None:
    writer = make_store(backend, tmp_path, cipher=TokenCipher(secret="first-secret"))
    writer.get_token(CountingRefresh(token="old"))

    reader = make_store(backend, tmp_path, cipher=TokenCipher(secret="second-secret"))
    assert reader.get_token(CountingRefresh(token="new")) == "new"


def test_factory_prefers_sqlite_when_available(tmp_path) -> None:
    store = create_token_store(tmp_path / "cache", namespace="abc")

    assert isinstance(store, SQLiteTokenStore)
    assert store.path == tmp_path / "cache" / "auth-abc.sqlite"


def test_factory_falls_back_to_file_store(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(token_store_module, "sqlite_available", lambda: False)

    store = create_token_store(tmp_path, namespace="abc")

    assert isinstance(store, FileTokenStore)
    assert store.path == tmp_path / "auth-abc.json"


def test_factory_honours_explicit_backend(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    assert isinstance(create_token_store(tmp_path, backend="file"), FileTokenStore)

    monkeypatch.setattr(token_store_module, "sqlite_available", lambda: False)
    with pytest.raises(ConfigurationError):
        create_token_store(tmp_path, backend="sqlite")


def _seed(store, *, token: str, expires_at: int) -> None:
    if isinstance(store, FileTokenStore):
        store.path.write_text(
            json.dumps({"token": token, "expiresAt": expires_at}), encoding="utf-8"
        )
        return
    with sqlite3.connect(store.path) as conn:
        conn.execute(
            "REPLACE INTO auth (id, token, expiresAt) VALUES (1, ?, ?)", (token, expires_at)
        )


def _raw_token(store) -> str:
    if isinstance(store, FileTokenStore):
        return json.loads(store.path.read_text(encoding="utf-8"))["token"]
    with sqlite3.connect(store.path) as conn:
        return conn.execute("SELECT token FROM auth WHERE id = 1").fetchone()[0]
