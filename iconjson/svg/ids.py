"""Unique ids for icon bodies embedded several times in one document.

The body is never parsed: ids are found and replaced as text, covering the
usual reference forms ``="id"``, ``="#id"`` and ``url(#id)``.
"""

from __future__ import annotations

import itertools
import logging
import random
import re
import time
from collections.abc import Callable

from ..config import DEFAULT_ID_PREFIX, get_config

LOG = logging.getLogger(__name__)

ID_RE = re.compile(r'\sid="([^"\s]+)"')


def run_prefix(label: str | None = None) -> str:
    if not label:
        try:
            label = get_config().id_prefix
        except RuntimeError as e:
            LOG.warning("%s, using %s", e, DEFAULT_ID_PREFIX)
            label = DEFAULT_ID_PREFIX
    return f"{label}-{int(time.time() * 1000):x}-{random.getrandbits(24):x}-"


class IdSequence:
    """Monotonic id source.

    The module-level :data:`DEFAULT_IDS` instance lives for the whole process
    and is never reset. Tests pass their own sequence with a fixed
    ``prefix_factory`` to get predictable ids.
    """

    def __init__(self, start: int = 0, prefix_factory: Callable[[], str] | None = None) -> None:
        self._counter = itertools.count(start)
        self._prefix_factory = prefix_factory or run_prefix

    def new_prefix(self) -> str:
        return self._prefix_factory()

    def next_id(self, prefix: str) -> str:
        return f"{prefix}{next(self._counter)}"


DEFAULT_IDS = IdSequence()


def find_ids(body: str) -> list[str]:
    """Distinct ids declared in ``body``, in order of appearance."""
    return list(dict.fromkeys(ID_RE.findall(body)))


def replace_ids(body: str, ids: IdSequence | None = None) -> str:
    found = find_ids(body)
    if not found:
        return body

    ids = ids or DEFAULT_IDS
    prefix = ids.new_prefix()
    for old_id in found:
        new_id = ids.next_id(prefix)
        body = body.replace(f'="{old_id}"', f'="{new_id}"')
        body = body.replace(f'="#{old_id}"', f'="#{new_id}"')
        body = body.replace(f"(#{old_id})", f"(#{new_id})")
    return body
