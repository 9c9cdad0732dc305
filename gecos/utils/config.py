"""Library configuration.

Settings are stored in a pydantic model, so values supplied by the
caller are validated before the library uses them.
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from gecos.utils import ui


class Settings(BaseModel):
    """User modifiable settings"""

    strict: bool = False
    """Default validation mode.

    If set to ``True``, fields are validated with the same character set
    ``chfn`` uses; forbidding ``=``, ``\\`` and ``"`` on top of the
    characters breaking the passwd format.
    """

    verbosity: int = ui.WARNING
    """Minimum level of the messages printed by the library"""


class Configuration:
    """Global library configuration"""

    def __init__(self, settings: None | Settings = None) -> None:
        self.settings: Settings = settings if settings is not None else Settings()
        """The current settings"""

    def reset(self) -> None:
        """Restore the default settings"""
        self.settings = Settings()

    def update(self, **values: Any) -> Settings:
        """Replace some of the settings.

        Args:
            values: The settings to modify, by name. The remaining settings
                keep their current value.

        Returns:
            The new settings object.

        Raises:
            pydantic.ValidationError: If a value has the wrong type.
        """
        current = dict(self.settings)
        current.update(values)
        self.settings = Settings(**current)
        return self.settings


conf: Configuration
"""Global configuration object, created by `gecos.initlib`"""
