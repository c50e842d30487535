"""Issue a bearer token for a user id (local development only).

Tokens are normally issued by the account service. This signs one with the
local SECRET_KEY so the write endpoints can be exercised by hand.

Usage:
    python -m scripts.issue_dev_token <user_id> [minutes]
"""

import sys
from datetime import timedelta

from app.core.config import get_settings
from app.infrastructure.security.jwt import create_access_token


def main() -> None:
    """Print a signed token whose sub is the given user id."""
    if len(sys.argv) < 2:
        print("Usage: python -m scripts.issue_dev_token <user_id> [minutes]", file=sys.stderr)
        sys.exit(1)
    user_id = sys.argv[1].strip()
    minutes = int(sys.argv[2]) if len(sys.argv) > 2 else None
    if not get_settings().debug:
        print("Refusing to issue a token unless DEBUG=true", file=sys.stderr)
        sys.exit(1)
    expires = timedelta(minutes=minutes) if minutes else None
    print(create_access_token({"sub": user_id}, expires_delta=expires))


if __name__ == "__main__":
    main()
