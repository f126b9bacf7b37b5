"""Authentication / authorization helpers.

Deliberately thin:

- POST /jwt signs whatever identity payload the client sends (normally the
  signed-in user's email) into a one-hour HS256 token.
- `verify_token` gates routes on `Authorization: Bearer <token>` (401).
- `verify_admin` runs after it and checks the stored user's role (403).

Routes attach them as ordered lists: TOKEN_GATE or ADMIN_GATE.
"""

from .deps import ADMIN_GATE, TOKEN_GATE, require_self, verify_admin, verify_token
from .crud import bootstrap_admin_if_needed
from .security import create_access_token

__all__ = [
    "ADMIN_GATE",
    "TOKEN_GATE",
    "require_self",
    "verify_admin",
    "verify_token",
    "bootstrap_admin_if_needed",
    "create_access_token",
]
