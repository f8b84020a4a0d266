# Area: Shared
"""
ttt_client.cli — Command-line interface
=======================================

Provides the ``ttt-client`` entry point.

Usage:
    ttt-client --keypair ~/.config/solana/id.json
    ttt-client --config config.json
    python -m ttt_client --keypair id.json --rpc-url http://127.0.0.1:8899

Every setting can also come from the environment (TTT_KEYPAIR_PATH,
TTT_RPC_URL, ...) or a ``.env`` file in the working directory.
"""

import argparse
import logging
import signal
import sys
from typing import List, Optional

from ._client_config import ClientConfig, load_config
from ._ledger.solana_gateway import SolanaGateway, load_keypair
from ._lifecycle.orchestrator import GameOrchestrator
from ._shared.activity_logger import configure_activity_logger
from ._shared.logging_config import (
    disable_interactive_mode,
    enable_interactive_mode,
    setup_logging,
)
from .errors import ConfigError, TransportError
from .prompter import ConsolePrompter, Prompter

logger = logging.getLogger("ttt_client.cli")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Play stake-backed tic-tac-toe against another wallet",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  ttt-client --keypair ~/.config/solana/id.json
  ttt-client --config config.json --log-level DEBUG
  TTT_RPC_URL=http://127.0.0.1:8899 ttt-client --keypair id.json
        """,
    )
    parser.add_argument("--config", type=str, help="Path to JSON config file")
    parser.add_argument(
        "--keypair",
        type=str,
        help="Path to a Solana CLI keypair file (JSON array of 64 bytes)",
    )
    parser.add_argument("--rpc-url", type=str, help="Solana JSON-RPC endpoint")
    parser.add_argument(
        "--log-level",
        type=str,
        help="Log level for the terminal and the log file (default: INFO)",
    )
    return parser.parse_args(argv)


def build_orchestrator(
    config: ClientConfig,
    prompter: Prompter,
) -> GameOrchestrator:
    """Wire keypair, gateway and orchestrator from a validated config."""
    keypair = load_keypair(config.keypair_path)
    gateway = SolanaGateway(config, keypair)
    return GameOrchestrator(
        gateway,
        prompter,
        activity=configure_activity_logger(config.cluster),
        poll_interval=config.poll_interval_seconds,
    )


def install_interrupt_handler(orchestrator: GameOrchestrator) -> None:
    """Ctrl-C stops a running poll; anywhere else it interrupts the program."""

    def handle_sigint(signum, frame):
        if orchestrator.cancel_polling():
            return
        raise KeyboardInterrupt

    signal.signal(signal.SIGINT, handle_sigint)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = parse_args(argv)
    overrides = {
        "keypair_path": args.keypair,
        "rpc_url": args.rpc_url,
        "log_level": args.log_level,
    }
    try:
        config = load_config(args.config, overrides)
    except ConfigError as e:
        print("Error: Invalid configuration", file=sys.stderr)
        for error in e.errors:
            print(f"  {error}", file=sys.stderr)
        return 1

    setup_logging(config.log_file, getattr(logging, config.log_level))
    prompter = ConsolePrompter()

    try:
        orchestrator = build_orchestrator(config, prompter)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        print("Check that the file content is a valid keypair", file=sys.stderr)
        return 1

    install_interrupt_handler(orchestrator)
    enable_interactive_mode()
    try:
        prompter.show(f"User: {orchestrator.gateway.local_address}")
        result = orchestrator.run_menu()
        if result is not None:
            logger.info(
                f"Action {result.action.name} ended in {result.phase.value}"
                + (f" with {result.outcome.value}" if result.outcome else "")
            )
    except TransportError as e:
        logger.error(f"Transport failure: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nExiting...", file=sys.stderr)
        return 130
    finally:
        disable_interactive_mode()
    return 0
