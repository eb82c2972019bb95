"""Provision a MoMo sandbox API user and API key.

This module serves as a CLI wrapper around momo.core.api.UserService.

    python scripts/sandbox.py --host example.com --primary-key <subscription key>
"""
from __future__ import annotations
import argparse
import os
import sys
from pathlib import Path

SCRIPT_DIR = Path(__file__).parent
PROJECT_ROOT = SCRIPT_DIR.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from momo import GlobalConfig, SubscriptionConfig, create_client
from momo.config.settings import DEFAULT_BASE_URL
from momo.core.api.exceptions import MomoError


def main() -> None:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(description="Create a MoMo sandbox API user")
    parser.add_argument("--host", default=os.environ.get("MOMO_CALLBACK_HOST"),
                        help="Provider callback host registered for the user")
    parser.add_argument("--primary-key", default=os.environ.get("MOMO_PRIMARY_KEY"),
                        help="Product subscription key")
    parser.add_argument("--base-url", default=os.environ.get("MOMO_BASE_URL", DEFAULT_BASE_URL))

    args = parser.parse_args()

    if not args.host:
        parser.error("Missing callback host (--host or MOMO_CALLBACK_HOST)")
    if not args.primary_key:
        parser.error("Missing subscription key (--primary-key or MOMO_PRIMARY_KEY)")

    try:
        client = create_client(GlobalConfig(callback_host=args.host, base_url=args.base_url))
        users = client.users(SubscriptionConfig(primary_key=args.primary_key))
        user_id = users.create(args.host)
        credentials = users.login(user_id)
    except MomoError as exc:
        print(f"[sandbox] ✗ {exc}", file=sys.stderr)
        sys.exit(1)

    print(f"Momo sandbox credentials\n  userId: {user_id}\n  userSecret: {credentials['apiKey']}")


if __name__ == "__main__":
    main()
