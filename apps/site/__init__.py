"""Public site view and admin console over the shared content state."""

from .admin_console import AdminConsole, OutlineResult
from .auth import AuthenticationError, LoginGate
from .public_view import ContactForm, Notice, PublicSite, SiteSnapshot

__all__ = [
    "AdminConsole",
    "AuthenticationError",
    "ContactForm",
    "LoginGate",
    "Notice",
    "OutlineResult",
    "PublicSite",
    "SiteSnapshot",
]
