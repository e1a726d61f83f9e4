"""cPanel Uploader - Filesystem operations on a cPanel hosting account.

Example usage:
    from cpanel_uploader import RemoteFilesystemClient, load_settings

    settings = load_settings()
    with RemoteFilesystemClient(settings.credentials) as client:
        client.create_directory(settings.web_root_path, "reports")
        result = client.upload_files("public_html/reports", ["summary.txt"])
        print(f"Upload {'succeeded' if result.success else 'failed'}")
"""

from cpanel_uploader._version import __version__
from cpanel_uploader.client import RemoteFilesystemClient
from cpanel_uploader.config import Settings, load_settings
from cpanel_uploader.exceptions import (
    ApplicationError,
    CleanupWarning,
    ConfigurationError,
    CpanelError,
    HttpStatusError,
    TransportError,
)
from cpanel_uploader.models import Credentials, DemoReport, FailureKind, OperationResult

__all__ = [
    "__version__",
    # Main client
    "RemoteFilesystemClient",
    # Configuration
    "Settings",
    "load_settings",
    # Models
    "Credentials",
    "DemoReport",
    "FailureKind",
    "OperationResult",
    # Exceptions
    "CpanelError",
    "ConfigurationError",
    "TransportError",
    "HttpStatusError",
    "ApplicationError",
    "CleanupWarning",
]
