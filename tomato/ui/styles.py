from __future__ import annotations

from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import QApplication


THEME_QSS = """
QWidget {
    color: #f7f3ef;
    font-size: 13px;
}

QLabel, QCheckBox {
    background: transparent;
}

QLabel#RemainingLabel {
    font-size: 34px;
    font-weight: 700;
}

QLabel#CountLabel {
    font-size: 16px;
    font-weight: 600;
}

QLabel#MutedText {
    color: #e2d9d0;
}

QPushButton {
    border: none;
    background: rgba(255, 255, 255, 40);
    border-radius: 16px;
    padding: 8px 18px;
    font-weight: 600;
}

QPushButton:hover {
    background: rgba(255, 255, 255, 70);
}

QPushButton:pressed {
    background: rgba(255, 255, 255, 100);
}

QPushButton#PrimaryButton {
    background: #f7f3ef;
    color: #2f2a26;
    border-radius: 22px;
    padding: 10px 28px;
    min-height: 24px;
    font-size: 15px;
}

QSpinBox {
    background: rgba(255, 255, 255, 50);
    border: none;
    border-radius: 12px;
    padding: 6px 10px;
    min-height: 22px;
}

QCheckBox {
    spacing: 8px;
}

QCheckBox::indicator {
    width: 18px;
    height: 18px;
    border-radius: 9px;
    background: rgba(255, 255, 255, 60);
}

QCheckBox::indicator:checked {
    background: #f7f3ef;
}

QListWidget {
    background: rgba(0, 0, 0, 30);
    border: none;
    border-radius: 12px;
    padding: 6px;
}
"""


def panel_qss(color: QColor) -> str:
    return f"QWidget#Panel {{ background: {color.name()}; }}"


def apply_theme(app: QApplication) -> None:
    app.setStyleSheet(THEME_QSS)
