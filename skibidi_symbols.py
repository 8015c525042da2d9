# -*- coding: utf-8 -*-
"""Global variable table: name -> int, bounded capacity, fatal on a missing name."""

import logging
from typing import Dict

from skibidi_errors import UndefinedVariableError

log = logging.getLogger(__name__)

MAX_VARS = 100


class SymbolTable:
    def __init__(self, capacity: int = MAX_VARS):
        if capacity < 0:
            raise ValueError("capacity must be >= 0")
        self.capacity = capacity
        self._values: Dict[str, int] = {}

    def set(self, name: str, value: int) -> bool:
        """Insert or update. Returns False (and stores nothing) when a new name does not fit."""
        if name in self._values:
            self._values[name] = value
            return True
        if len(self._values) >= self.capacity:
            log.debug("symbol table full, dropping store to %r", name)
            return False
        self._values[name] = value
        return True

    def get(self, name: str) -> int:
        try:
            return self._values[name]
        except KeyError:
            raise UndefinedVariableError(name) from None

    def snapshot(self) -> Dict[str, int]:
        return dict(self._values)

    def __contains__(self, name) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"SymbolTable({len(self)}/{self.capacity})"
