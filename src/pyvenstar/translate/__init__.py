"""Pure translation between device payloads and the normalized model.

Nothing in this package performs I/O; the controller feeds it snapshots and
sends the writes it produces.
"""

from pyvenstar.translate.command import DEFAULT_SETTINGS, translate_command
from pyvenstar.translate.settings import TranslationSettings
from pyvenstar.translate.snapshot import translate_snapshot
from pyvenstar.translate.temperature import from_canonical, to_canonical

__all__ = [
    "DEFAULT_SETTINGS",
    "TranslationSettings",
    "from_canonical",
    "to_canonical",
    "translate_command",
    "translate_snapshot",
]
