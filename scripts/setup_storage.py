"""Prepare the shared token cache before the SDK is first used.

The tool creates the storage directory, reports which token store backend the
SDK will pick on this interpreter and, when SQLite is selected, creates the
database and its schema so the first request does not pay for it.

Example usages::

    # Use MONNIFY_* variables (or .env) to locate the cache for these credentials.
    python -m scripts.setup_storage

    # Initialise an explicit directory with the file backend.
    python -m scripts.setup_storage --storage-dir /var/lib/monnify --backend file
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Tuple

from monnify.clients.token_store import create_token_store, sqlite_available
from monnify.core.config import MonnifySettings
from monnify.core.errors import ConfigurationError

EXIT_OK = 0
EXIT_CONFIGURATION_ERROR = 2
EXIT_RUNTIME_ERROR = 5


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Create the Monnify token cache and report the selected backend."
    )
    parser.add_argument(
        "--storage-dir",
        type=Path,
        default=None,
        help="Cache directory (default: MONNIFY_STORAGE_DIR or ~/.cache/monnify).",
    )
    parser.add_argument(
        "--backend",
        choices=("auto", "sqlite", "file"),
        default=None,
        help="Token store backend (default: MONNIFY_TOKEN_BACKEND or auto).",
    )
    parser.add_argument(
        "--namespace",
        default="default",
        help="Cache namespace used with --storage-dir when no credentials are loaded.",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Environment file holding MONNIFY_* settings.",
    )
    return parser


def _resolve(args: argparse.Namespace) -> Tuple[Path, str, str]:
    """Return the storage directory, namespace and backend to initialise."""
    if args.storage_dir is not None:
        return args.storage_dir, args.namespace, args.backend or "auto"

    if args.env_file is not None:
        settings = MonnifySettings(_env_file=str(args.env_file))
    else:
        settings = MonnifySettings()  # type: ignore[call-arg]
    return settings.storage_dir, settings.token_namespace, args.backend or settings.token_backend


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        storage_dir, namespace, backend = _resolve(args)
        existed = Path(storage_dir).expanduser().is_dir()
        store = create_token_store(storage_dir, namespace=namespace, backend=backend)
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_CONFIGURATION_ERROR
    except OSError as exc:
        print(f"Could not prepare token storage: {exc}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if not existed:
        print(f"Storage directory created: {storage_dir}")

    if store.backend == "sqlite":
        print(f"SQLite database initialized at {store.path}")
    elif store.backend == "file":
        if not sqlite_available():
            print("SQLite not found. Library will use the file store fallback.")
        print(f"File token store at {store.path} (lock: {store.lock_path})")
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
