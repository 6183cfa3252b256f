"""Administrative privilege detection."""

import ctypes
import logging
import platform

logger = logging.getLogger(__name__)


def is_admin() -> bool:
    """Return True if the current process runs with administrative rights.

    Always False off Windows, where the system-level cleanup cannot run.
    """
    if platform.system() != "Windows":
        return False
    try:
        return bool(ctypes.windll.shell32.IsUserAnAdmin())
    except (AttributeError, OSError) as e:
        logger.debug(f"IsUserAnAdmin unavailable: {e}")
        return False
