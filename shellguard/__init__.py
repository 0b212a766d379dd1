"""shellguard - command and content security policy engine."""

__version__ = "0.3.0"
__logo__ = "🛡️"
