from __future__ import annotations

from PyQt6.QtGui import QColor

from tomato.core.timer import PhaseKind


GREEN = QColor(64, 145, 108)
RED = QColor(158, 42, 43)


def color_for(phase: PhaseKind) -> QColor:
    """Panel background: red while a work round runs, green otherwise."""
    if phase == PhaseKind.RUNNING:
        return QColor(RED)
    return QColor(GREEN)
