"""Command-line interface for said-agent."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version
from typing import Sequence

from said_identity.config import SAIDConfig, load_config
from said_identity.errors import ConfigError, SAIDError, WalletStorageError, WalletValidationError
from said_identity.runtime import Character, LocalRuntime
from said_identity.service import IdentityService
from said_identity.wallet import WalletStore

EXIT_SUCCESS = 0
EXIT_VALIDATION_ERROR = 1
EXIT_STORAGE_ERROR = 2


def _sdk_version() -> str:
    try:
        return pkg_version("said-agent")
    except PackageNotFoundError:
        return "0.0.0+local"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="said-agent")
    parser.add_argument(
        "--version",
        action="version",
        version=f"said-agent {_sdk_version()}",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config TOML (default: ~/.said/config.toml)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    version = sub.add_parser("version", help="Show CLI version")
    version.add_argument("--json", action="store_true", help="Print version details as JSON")

    init = sub.add_parser("init", help="Load or create the agent wallet and register it")
    init.add_argument("--agent-id", required=True, help="Agent identifier naming the wallet file")
    init.add_argument("--name", default=None, help="Display name sent to the directory")
    init.add_argument("--description", default=None, help="Short description sent to the directory")
    init.add_argument("--wallet-dir", default=None, help="Base directory holding said/ wallets")
    init.add_argument("--json", action="store_true", help="Print identity details as JSON")

    show = sub.add_parser("show", help="Show the stored wallet without registering")
    show.add_argument("--agent-id", required=True, help="Agent identifier naming the wallet file")
    show.add_argument("--wallet-dir", default=None, help="Base directory holding said/ wallets")
    show.add_argument("--json", action="store_true", help="Print wallet details as JSON")

    return parser


def _print_error(stderr, prefix: str, message: str, *, code: int) -> int:
    print(f"{prefix}: {message}", file=stderr)
    return code


def _wallet_store(args, config: SAIDConfig) -> WalletStore:
    return WalletStore(args.wallet_dir or config.wallet_dir)


def _run_version(*, as_json: bool, stdout) -> int:
    if as_json:
        print(json.dumps({"cli": "said-agent", "version": _sdk_version()}), file=stdout)
    else:
        print(f"said-agent {_sdk_version()}", file=stdout)
    return EXIT_SUCCESS


def _run_init(*, args, config: SAIDConfig, stdout, stderr) -> int:
    runtime = LocalRuntime(
        agent_id=args.agent_id,
        character=Character(name=args.name, bio=args.description),
    )
    service = IdentityService(runtime, config=config, wallet_store=_wallet_store(args, config))
    try:
        identity = service.initialize()
    except WalletValidationError as exc:
        return _print_error(stderr, "wallet error", str(exc), code=EXIT_VALIDATION_ERROR)
    except ValueError as exc:
        return _print_error(stderr, "wallet error", str(exc), code=EXIT_VALIDATION_ERROR)
    except SAIDError as exc:
        return _print_error(stderr, "identity error", str(exc), code=EXIT_STORAGE_ERROR)
    finally:
        service.stop()

    if args.json:
        print(json.dumps(identity.to_public_dict(), sort_keys=True, indent=2), file=stdout)
        return EXIT_SUCCESS

    print(f"wallet: {identity.wallet}", file=stdout)
    print(f"profile_url: {identity.profile_url}", file=stdout)
    print(f"verified: {str(identity.verified).lower()}", file=stdout)
    print(f"registration: {identity.outcome.value}", file=stdout)
    return EXIT_SUCCESS


def _run_show(*, args, config: SAIDConfig, stdout, stderr) -> int:
    store = _wallet_store(args, config)
    try:
        if not store.exists(args.agent_id):
            return _print_error(
                stderr,
                "wallet error",
                f"no wallet for agent {args.agent_id}; run `said-agent init` first",
                code=EXIT_VALIDATION_ERROR,
            )
        record = store.load(args.agent_id)
    except (WalletValidationError, ValueError) as exc:
        return _print_error(stderr, "wallet error", str(exc), code=EXIT_VALIDATION_ERROR)
    except WalletStorageError as exc:
        return _print_error(stderr, "storage error", str(exc), code=EXIT_STORAGE_ERROR)

    payload = {
        "wallet": record.public_key,
        "profile_url": config.profile_url(record.public_key),
        "created_at": record.created_at,
        "wallet_path": str(store.wallet_path(args.agent_id)),
    }
    if args.json:
        print(json.dumps(payload, sort_keys=True, indent=2), file=stdout)
    else:
        for key, value in payload.items():
            print(f"{key}: {value}", file=stdout)
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None, *, stdout=sys.stdout, stderr=sys.stderr) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), stream=stderr)

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        return _print_error(stderr, "config error", str(exc), code=EXIT_VALIDATION_ERROR)

    if args.command == "version":
        return _run_version(as_json=args.json, stdout=stdout)

    if args.command == "init":
        return _run_init(args=args, config=config, stdout=stdout, stderr=stderr)

    if args.command == "show":
        return _run_show(args=args, config=config, stdout=stdout, stderr=stderr)

    print("unknown command", file=stderr)
    return EXIT_VALIDATION_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
