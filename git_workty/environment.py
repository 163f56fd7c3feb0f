"""Home and user config directory lookups."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import platformdirs

from git_workty.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Environment:
    """Directories taken from the user's environment.

    Passed explicitly to everything that needs them so tests can point
    them at temporary locations. ``None`` means the directory could not
    be determined.
    """

    home: Optional[Path] = None
    config_dir: Optional[Path] = None

    @classmethod
    def detect(cls) -> "Environment":
        """Build an Environment from the running user's real directories."""
        try:
            home = Path.home()
        except (RuntimeError, KeyError) as e:
            logger.debug(f"Could not determine home directory: {e}")
            home = None

        return cls(home=home, config_dir=platformdirs.user_config_path())


def expand_tilde(path: str, home: Optional[Path]) -> Path:
    """Expand a leading ``~`` or ``~/`` to ``home``.

    Other paths, including ``~user`` forms, come back unchanged, as does
    everything when ``home`` is unknown.
    """
    if home is None:
        return Path(path)
    if path == "~":
        return home
    if path.startswith("~/"):
        return home / path[2:]
    return Path(path)
