"""Library entry point.

Contains logic that *must* be executed under any invocation method:

- Load the configuration and settings.
- Setup the user interface used for logging.
- Import the public API.
"""
from __future__ import annotations

import gecos.utils
import gecos.utils.config


def initlib(**settings) -> None:
    """Initialize the library.

    Can be called again to re-initialize in another point; for instance
    when running tests.

    Args:
        settings: Values overriding the default settings, see
            :py:class:`gecos.utils.config.Settings`.
    """
    if not hasattr(gecos.utils.config, "conf"):
        gecos.utils.config.conf = gecos.utils.config.Configuration()
    else:
        gecos.utils.config.conf.reset()
    gecos.utils.config.conf.update(**settings)
    gecos.utils.init_ui(gecos.utils.config.conf.settings.verbosity)


initlib()

# Public API -------------------------------------------------------------------
from gecos.errors import (
    ForbiddenCharacter,
    GecosError,
    ParseError,
    ValidationError,
)
from gecos.field import SanitizedField, sanitize
from gecos.record import GecosRecord, SanitizedList
