"""Hidden entry classification.

Only the dot-prefix convention is understood.  On Windows there is no
support for hidden files, so nothing is ever classified as hidden there
and the ``--hidden`` flag has no effect.
"""

from __future__ import annotations

import os
import sys
from typing import Optional

HIDDEN_FILES_SUPPORTED = not sys.platform.startswith('win')


def is_hidden(path: str, platform: Optional[str] = None) -> bool:
    """Return ``True`` if the base name of ``path`` starts with a dot.

    ``.`` and names starting with ``..`` are navigation markers and never
    hidden.  ``platform`` defaults to ``sys.platform``.
    """
    if platform is None:
        supported = HIDDEN_FILES_SUPPORTED
    else:
        supported = not platform.startswith('win')
    if not supported:
        return False
    name = os.path.basename(path.rstrip(os.sep)) or '.'
    if name == '.' or name.startswith('..'):
        return False
    return name[:1] == '.'
