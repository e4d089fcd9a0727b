"""User-visible notices for handled failures."""
from __future__ import annotations

import logging
import sys
from typing import Optional

from .config import NotificationConfig

Logger = logging.Logger

_IS_WINDOWS = sys.platform.startswith("win32")

if _IS_WINDOWS:
    import ctypes
else:  # pragma: no cover - tooling on non-Windows
    ctypes = None  # type: ignore

_MB_OK = 0x0
_MB_ICONWARNING = 0x30
_MB_TOPMOST = 0x40000


class Notifier:
    """Logs each notice and optionally shows a Win32 message box."""

    def __init__(self, config: Optional[NotificationConfig] = None, logger: Optional[Logger] = None) -> None:
        self._config = config or NotificationConfig()
        self._logger = logger or logging.getLogger(__name__)

    def notify(self, message: str) -> None:
        self._logger.warning("%s", message)
        if not (self._config.popup and _IS_WINDOWS):
            return
        try:
            assert ctypes is not None  # noqa: S101 - guarded by _IS_WINDOWS
            ctypes.windll.user32.MessageBoxW(0, message, self._config.title, _MB_OK | _MB_ICONWARNING | _MB_TOPMOST)
        except Exception as exc:  # pragma: no cover - notification is best effort
            self._logger.debug("Message box failed: %s", exc)


__all__ = ["Notifier"]
