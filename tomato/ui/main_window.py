from __future__ import annotations

import logging

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import (
    QCheckBox,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from tomato import config
from tomato.core.app_state import AppState, Preferences
from tomato.core.clock import Clock
from tomato.core.effects import TransitionEvent
from tomato.core.timer import PhaseKind, RoundTimer
from tomato.ui.colors import color_for
from tomato.ui.styles import panel_qss


logger = logging.getLogger(__name__)

PHASE_TITLES = {
    PhaseKind.STOPPED: "Stopped",
    PhaseKind.RUNNING: "Focus",
    PhaseKind.BREAK: "Break",
}


class MainWindow(QMainWindow):
    def __init__(self, timer: RoundTimer, clock: Clock, app_state: AppState) -> None:
        super().__init__()
        self.setWindowTitle("Tomato Timer")
        self.resize(420, 520)

        self.timer = timer
        self.clock = clock
        self.app_state = app_state
        self._painted_phase: PhaseKind | None = None

        self._build_ui()
        self._apply_preferences(self.app_state.preferences)
        self._connect_signals()

        self.frame_timer = QTimer(self)
        self.frame_timer.setInterval(config.POLL_INTERVAL_MS)
        self.frame_timer.timeout.connect(self._on_frame)
        self.frame_timer.start()

        self.refresh_history()
        self._on_frame()

    def _build_ui(self) -> None:
        self.panel = QWidget(self)
        self.panel.setObjectName("Panel")
        self.panel.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self.setCentralWidget(self.panel)
        layout = QVBoxLayout(self.panel)

        form = QFormLayout()
        self.round_minutes = QSpinBox()
        self.round_minutes.setRange(0, config.MAX_LENGTH_MINUTES)
        self.round_minutes.setSuffix(" min")
        self.break_minutes = QSpinBox()
        self.break_minutes.setRange(1, config.MAX_LENGTH_MINUTES)
        self.break_minutes.setSuffix(" min")
        self.breaks_check = QCheckBox("Take breaks between rounds")
        form.addRow("Round length:", self.round_minutes)
        form.addRow("Break length:", self.break_minutes)
        form.addRow("", self.breaks_check)
        layout.addLayout(form)

        self.phase_label = QLabel()
        self.phase_label.setObjectName("MutedText")
        self.remaining_label = QLabel()
        self.remaining_label.setObjectName("RemainingLabel")
        self.remaining_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.remaining_label.setWordWrap(True)
        layout.addWidget(self.phase_label, 0, Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.remaining_label, 1)

        controls = QHBoxLayout()
        self.toggle_btn = QPushButton("Start")
        self.toggle_btn.setObjectName("PrimaryButton")
        self.reset_btn = QPushButton("Reset count")
        controls.addStretch()
        controls.addWidget(self.toggle_btn)
        controls.addWidget(self.reset_btn)
        controls.addStretch()
        layout.addLayout(controls)

        self.count_label = QLabel()
        self.count_label.setObjectName("CountLabel")
        self.today_label = QLabel()
        self.today_label.setObjectName("MutedText")
        layout.addWidget(self.count_label, 0, Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.today_label, 0, Qt.AlignmentFlag.AlignCenter)

        self.history_list = QListWidget()
        self.history_list.setMaximumHeight(120)
        layout.addWidget(self.history_list)

        space_action = QAction(self)
        space_action.setShortcut(QKeySequence(Qt.Key.Key_Space))
        space_action.triggered.connect(self.toggle_round)
        self.addAction(space_action)

    def _connect_signals(self) -> None:
        self.toggle_btn.clicked.connect(self.toggle_round)
        self.reset_btn.clicked.connect(self.reset_count)
        self.round_minutes.valueChanged.connect(self._on_lengths_changed)
        self.break_minutes.valueChanged.connect(self._on_lengths_changed)
        self.breaks_check.toggled.connect(self._on_lengths_changed)
        self.app_state.history_changed.connect(self.refresh_history)

    def _apply_preferences(self, preferences: Preferences) -> None:
        self.round_minutes.setValue(preferences.round_minutes)
        self.break_minutes.setValue(preferences.break_minutes)
        self.breaks_check.setChecked(preferences.breaks_enabled)
        self.timer.set_round_length(preferences.round_seconds)
        self.timer.set_break_length(preferences.break_seconds)
        self.timer.set_breaks_enabled(preferences.breaks_enabled)

    def current_preferences(self) -> Preferences:
        return Preferences(
            round_minutes=self.round_minutes.value(),
            break_minutes=self.break_minutes.value(),
            breaks_enabled=self.breaks_check.isChecked(),
        )

    def _on_lengths_changed(self, *_args) -> None:
        preferences = self.current_preferences()
        self.timer.set_round_length(preferences.round_seconds)
        self.timer.set_break_length(preferences.break_seconds)
        self.timer.set_breaks_enabled(preferences.breaks_enabled)
        self.app_state.save_preferences(preferences)

    def toggle_round(self) -> None:
        now = self.clock.now()
        previous = self.timer.phase.kind
        elapsed = self.timer.elapsed(now)
        active = self.timer.toggle(now)
        if previous == PhaseKind.STOPPED and not active:
            self.statusBar().showMessage("Set a round length greater than 0.", 3000)
        elif previous == PhaseKind.RUNNING and elapsed > 0:
            logger.info("Round stopped after %.0f s", elapsed)
            self.app_state.record_round(elapsed, kind="partial")
        self._on_frame()

    def reset_count(self) -> None:
        self.timer.reset_count()
        self._on_frame()

    def _on_frame(self) -> None:
        now = self.clock.now()
        event = self.timer.tick(now)
        if event == TransitionEvent.ROUND_FINISHED:
            self.app_state.record_round(self.timer.round_length)

        snapshot = self.timer.snapshot(now)
        if snapshot.phase != self._painted_phase:
            self._painted_phase = snapshot.phase
            self.panel.setStyleSheet(panel_qss(color_for(snapshot.phase)))
            self.toggle_btn.setText("Start" if snapshot.phase == PhaseKind.STOPPED else "Stop")

        self.phase_label.setText(PHASE_TITLES[snapshot.phase])
        self.remaining_label.setText(snapshot.text if snapshot.phase != PhaseKind.STOPPED else "")
        focus_minutes = int(snapshot.total_focus_seconds // 60)
        self.count_label.setText(f"Rounds completed: {snapshot.completed_rounds} ({focus_minutes} min)")

    def refresh_history(self) -> None:
        total_minutes = self.app_state.total_focus_seconds() // 60
        self.today_label.setText(f"Today: {self.app_state.rounds_today()} rounds · {total_minutes} min focused overall")
        self.history_list.clear()
        for row in self.app_state.recent_rounds():
            mark = "✅" if row.kind == "focus" else "⏹"
            item_text = f"{mark} {row.started_at} · {row.duration_sec // 60}m {row.duration_sec % 60}s"
            QListWidgetItem(item_text, self.history_list)

    def closeEvent(self, event) -> None:  # noqa: N802
        self.frame_timer.stop()
        self.app_state.save_preferences(self.current_preferences())
        event.accept()
