"""Grant the admin claim to a user from a shell.

Usage:
    python -m scripts.grant_admin <uid>
Requires FIREBASE_SERVICE_ACCOUNT_KEY or FIREBASE_SERVICE_ACCOUNT_PATH, and
ADMIN_SETUP_SECRET (read from the environment or .env). The user must sign
in again before the claim appears in their ID token.
"""

import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

from spin_admin.core.config import get_settings
from spin_admin.application.services.privilege_gate import PrivilegeGate
from spin_admin.domain.exceptions import SpinAdminException
from spin_admin.infrastructure.firebase import init_firebase
from spin_admin.shared.telemetry import setup_logging


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


async def main(uid: str) -> int:
    settings = get_settings()
    firebase = init_firebase(settings)
    if firebase is None:
        print("Firebase credentials are not configured", file=sys.stderr)
        return 1
    secret = (
        settings.admin_setup_secret.get_secret_value()
        if settings.admin_setup_secret
        else None
    )
    gate = PrivilegeGate(firebase.auth, secret)
    try:
        granted = await gate.issue_admin_claim(uid, secret)
    except SpinAdminException as e:
        print(f"Refused: {e.message}", file=sys.stderr)
        return 1
    finally:
        await firebase.aclose()
    print(f"Admin claim granted to {granted}; refresh tokens revoked.")
    return 0


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(__doc__, file=sys.stderr)
        sys.exit(2)
    load_dotenv(_project_root() / ".env")
    get_settings.cache_clear()
    setup_logging()
    sys.exit(asyncio.run(main(sys.argv[1])))
