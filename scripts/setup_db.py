"""Provision the starter kit's PocketBase collections.

Usage:
    uv run python -m scripts.setup_db [--update-existing] [--verbose]

Reads PB_URL, PB_ADMIN_EMAIL, PB_ADMIN_PASS (and optionally
GOOGLE_CLIENT_ID / GOOGLE_CLIENT_SECRET) from the environment or .env and
prompts for any missing admin credential. Exits 1 if the server is
unreachable or provisioning reports errors. Safe to run repeatedly.
"""

import argparse
import asyncio
import getpass
import logging
import sys

from fstack.application.dtos.provisioning import (
    AdminCredentials,
    GoogleAuthSettings,
    ProgressEvent,
    ProvisionOptions,
    ProvisionResult,
    ProvisionSettings,
)
from fstack.core.config import Settings, get_settings
from fstack.domain.enums import ProgressKind
from fstack.domain.registry import DEFAULT_COLLECTIONS
from fstack.infrastructure.services import (
    get_provision_summary,
    probe_health,
    provision_collections,
)
from fstack.shared.telemetry.logging import setup_logging

_MARKS = {
    ProgressKind.CREATED: "✓",
    ProgressKind.SKIPPED: "○",
    ProgressKind.FAILED: "✗",
}


def render_progress(event: ProgressEvent) -> None:
    """Print one progress line, marked by its kind."""
    mark = _MARKS.get(event.kind)
    print(f"  {mark} {event.text}" if mark else f"  {event.text}")


def oauth_settings(settings: Settings) -> ProvisionSettings | None:
    """Google OAuth2 settings when both client id and secret are configured."""
    if not settings.google_auth_enabled:
        return None
    return ProvisionSettings(
        google_auth=GoogleAuthSettings(
            client_id=settings.google_client_id,
            client_secret=settings.google_client_secret,
        )
    )


def read_credentials(settings: Settings) -> AdminCredentials:
    """Admin credentials from settings, prompting for whatever is missing."""
    email = settings.pb_admin_email
    password = (
        settings.pb_admin_pass.get_secret_value() if settings.pb_admin_pass else None
    )
    if email and password:
        print("  Using credentials from environment variables")
    else:
        print("  Enter your PocketBase admin credentials")
        print(f"  (Create an admin at {settings.pb_url}/_/)")
        if not email:
            email = input("  Admin email: ").strip()
        if not password:
            password = getpass.getpass("  Admin password: ")
    return AdminCredentials.from_plain(email, password)


def print_report(result: ProvisionResult, pb_url: str) -> None:
    print()
    if result.success:
        print("Setup complete!")
        if result.created:
            print(f"   Created: {', '.join(result.created)}")
        if result.skipped:
            print(f"   Skipped: {', '.join(result.skipped)} (already exist)")
        return
    print(f"Setup failed: {result.message}", file=sys.stderr)
    for err in result.errors:
        print(f"   {err.collection}: {err.error}", file=sys.stderr)
    print("Troubleshooting:", file=sys.stderr)
    print("  1. Make sure PocketBase is running", file=sys.stderr)
    print("  2. Verify admin credentials are correct", file=sys.stderr)
    print(f"  3. Check PocketBase admin UI: {pb_url}/_/", file=sys.stderr)


async def main(argv: list[str] | None = None) -> int:
    """Run health check and provisioning; return the process exit code."""
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--update-existing",
        action="store_true",
        help="update collections that already exist instead of skipping them",
    )
    parser.add_argument("--verbose", action="store_true", help="enable debug logging")
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)
    pb_url = settings.pb_url

    print("Checking PocketBase server...")
    health = await probe_health(pb_url, timeout=settings.http_timeout_seconds)
    if not health.healthy:
        print(f"Cannot connect to PocketBase at {pb_url}", file=sys.stderr)
        print(f"  {health.message}", file=sys.stderr)
        print("Make sure PocketBase is running:  ./pocketbase serve", file=sys.stderr)
        return 1
    print(f"  Connected to {pb_url}")

    print("Admin authentication required")
    credentials = read_credentials(settings)

    provision_settings = oauth_settings(settings)
    if provision_settings is not None:
        print("  Google OAuth credentials detected in environment")

    print(get_provision_summary(DEFAULT_COLLECTIONS))
    print()
    print("Provisioning collections...")
    result = await provision_collections(
        pb_url,
        credentials,
        DEFAULT_COLLECTIONS,
        ProvisionOptions(
            update_existing=args.update_existing or settings.pb_update_existing,
            settings=provision_settings,
            on_progress=render_progress,
        ),
        timeout=settings.http_timeout_seconds,
    )
    print_report(result, pb_url)
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
