"""Warning collection for a generation run."""

from __future__ import annotations

import logging
from typing import Dict, List, Tuple

from .domain.reflection import WarningTarget, target_module, target_name
from .logging import log_warning_group


class WarningLog:
    """Accumulates ``(target, text)`` warnings raised while assembling help."""

    def __init__(self) -> None:
        self._entries: List[Tuple[WarningTarget, str]] = []

    def report(self, target: WarningTarget, text: str) -> None:
        self._entries.append((target, text))

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> List[Tuple[WarningTarget, str]]:
        return list(self._entries)

    def grouped(self, module_name: str | None = None) -> Dict[str, List[str]]:
        """Group warning texts by target name, sorted by name.

        With ``module_name`` only targets defined in that module are kept.
        Repeated texts for one target are reported once.
        """
        groups: Dict[str, List[str]] = {}
        for target, text in self._entries:
            if module_name is not None and target_module(target) != module_name:
                continue
            texts = groups.setdefault(target_name(target), [])
            if text not in texts:
                texts.append(text)
        return dict(sorted(groups.items()))

    def log_report(self, logger: logging.Logger, module_name: str | None = None) -> int:
        """Log grouped warnings and return how many targets were reported."""
        groups = self.grouped(module_name)
        for name, texts in groups.items():
            log_warning_group(logger, name, texts)
        return len(groups)


__all__ = ["WarningLog"]
