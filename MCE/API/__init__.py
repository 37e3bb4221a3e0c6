# =============================================================================
# MCE/API/__init__.py — HTTP adaptor
# =============================================================================
#
# Sub-modules:
#   config.py — ServerConfig dataclass, loaded from environment variables
#   app.py    — create_app(): Flask routes over the CSM core
#   server.py — development server CLI (mce-server)
# =============================================================================

from .app import create_app
from .config import ServerConfig
