"""Display - named text fields standing in for the instrument LCD."""
from __future__ import annotations

import logging
from typing import Callable, Iterable

from rin import canonical

logger = logging.getLogger(__name__)

FIELDS = ("topLeft", "topRight", "bottomLeft", "bottomRight")


class Display:
    """Holds the last text written to each field.

    Writes are best effort: an unknown field is logged and ignored.
    ``on_write(field, text)`` is called after every accepted write, so a
    front end can mirror the fields.
    """

    def __init__(
        self,
        fields: Iterable[str] = FIELDS,
        on_write: Callable[[str, str], None] | None = None,
    ) -> None:
        self._fields = {canonical(f): f for f in fields}
        self._text: dict[str, str] = {ref: "" for ref in self._fields}
        self._on_write = on_write

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(self._fields.values())

    def write(self, field: str, text: object) -> bool:
        ref = canonical(field)
        if ref not in self._fields:
            logger.warning("Display: unknown field '%s'", field)
            return False
        value = "" if text is None else str(text)
        self._text[ref] = value
        if self._on_write is not None:
            self._on_write(self._fields[ref], value)
        return True

    __call__ = write

    def read(self, field: str) -> str | None:
        return self._text.get(canonical(field))

    def clear(self) -> None:
        for ref in self._text:
            self._text[ref] = ""
