from PySide6.QtWidgets import (
    QMainWindow, QWidget, QHBoxLayout, QVBoxLayout, QFormLayout,
    QLabel, QLineEdit, QComboBox, QPushButton, QPlainTextEdit, QFileDialog
)
from PySide6.QtCore import Qt
from PySide6.QtGui import QFontDatabase

from core import JobController, JobParams
from core.config import Settings, codec_table, load_settings, save_settings
from core.presets import OUTPUT_FORMATS
from ui.bridge import JobEventBridge


_BUTTON_STYLE = """
    QPushButton {
        background-color: %s;
        color: white;
        border: none;
        border-radius: 6px;
        padding: 0 14px;
        font-size: 10pt;
        font-weight: 600;
    }
    QPushButton:hover    { background-color: %s; }
    QPushButton:disabled { background-color: #333; color: #777; }
"""


# ── Main Window ───────────────────────────────────────────────────────────────

class MainWindow(QMainWindow):
    """Top-level application window: clip form, controls and the ffmpeg log."""

    def __init__(self, input_path: str = ""):
        super().__init__()

        self._bridge = JobEventBridge(self)
        self._bridge.progress.connect(self._on_progress)
        self._bridge.error.connect(self._on_error)
        self._bridge.finished.connect(self._on_finished)

        # Picker and builder share one table so every listed selector resolves
        self._codecs = codec_table()
        self.controller = JobController(self._bridge, codecs=self._codecs)
        self._finish_count = 0

        self.setWindowTitle("FFclip")
        self.resize(900, 620)
        self.setMinimumSize(640, 420)
        self.setStyleSheet("background-color: #121212;")

        central = QWidget()
        self.setCentralWidget(central)

        root = QVBoxLayout(central)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(0)

        # ── Header bar ────────────────────────────────────────────────────────
        header_bar = QWidget()
        header_bar.setFixedHeight(56)
        header_bar.setStyleSheet("background-color: #1e1e1e; border-bottom: 1px solid #333;")
        header_layout = QHBoxLayout(header_bar)
        header_layout.setContentsMargins(16, 0, 16, 0)

        page_title = QLabel("Clip")
        page_title.setStyleSheet("color: #e0e0e0; font-size: 14pt; font-weight: 700;")
        header_layout.addWidget(page_title)
        header_layout.addStretch()

        self.start_btn = QPushButton("▶  Start")
        self.start_btn.setFixedHeight(32)
        self.start_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        self.start_btn.setStyleSheet(_BUTTON_STYLE % ("#558B6E", "#67a382"))
        self.start_btn.clicked.connect(self._start)
        header_layout.addWidget(self.start_btn)

        self.stop_btn = QPushButton("■  Stop")
        self.stop_btn.setFixedHeight(32)
        self.stop_btn.setEnabled(False)
        self.stop_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        self.stop_btn.setStyleSheet(_BUTTON_STYLE % ("#a33c3c", "#c04a4a"))
        self.stop_btn.clicked.connect(self._stop)
        header_layout.addWidget(self.stop_btn)

        root.addWidget(header_bar)

        # ── Form ──────────────────────────────────────────────────────────────
        content = QWidget()
        content.setStyleSheet("color: #e0e0e0;")
        col = QVBoxLayout(content)
        col.setContentsMargins(16, 16, 16, 16)
        col.setSpacing(12)
        root.addWidget(content, 1)

        form = QFormLayout()

        self.program_input = QLineEdit()
        form.addRow("FFmpeg:", self.program_input)

        in_layout = QHBoxLayout()
        self.input_path = QLineEdit()
        self.input_path.setPlaceholderText("No file selected")
        in_btn = QPushButton("Browse...")
        in_btn.clicked.connect(self._browse_input)
        in_layout.addWidget(self.input_path, 1)
        in_layout.addWidget(in_btn)
        form.addRow("Input File:", in_layout)

        range_layout = QHBoxLayout()
        self.start_input = QLineEdit("00:00:00")
        self.end_input = QLineEdit("00:00:10")
        range_layout.addWidget(self.start_input)
        range_layout.addWidget(QLabel("→"))
        range_layout.addWidget(self.end_input)
        form.addRow("Range:", range_layout)

        self.format_combo = QComboBox()
        self.format_combo.addItems(OUTPUT_FORMATS)
        form.addRow("Output Format:", self.format_combo)

        self.codec_combo = QComboBox()
        self.codec_combo.addItems(list(self._codecs))
        form.addRow("Codec:", self.codec_combo)

        self.scale_input = QLineEdit()
        self.scale_input.setPlaceholderText("e.g. 1280:720 (empty = keep size)")
        form.addRow("Scale:", self.scale_input)

        col.addLayout(form)

        # ── Log ───────────────────────────────────────────────────────────────
        self.log_view = QPlainTextEdit()
        self.log_view.setReadOnly(True)
        self.log_view.setMaximumBlockCount(5000)
        self.log_view.setFont(QFontDatabase.systemFont(QFontDatabase.SystemFont.FixedFont))
        self.log_view.setStyleSheet(
            "background-color: #1a1a1a; color: #cccccc; border: 1px solid #2e2e2e;"
        )
        col.addWidget(self.log_view, 1)

        self.status_lbl = QLabel("Idle")
        self.status_lbl.setStyleSheet("color: #888; font-size: 9pt;")
        col.addWidget(self.status_lbl)

        self._restore_settings()
        self.input_path.setText(input_path)

    # ── Settings ──────────────────────────────────────────────────────────────

    def _restore_settings(self) -> None:
        settings = load_settings()
        self.program_input.setText(settings.program)
        self.format_combo.setCurrentText(settings.output_format)
        self.codec_combo.setCurrentText(settings.codec)
        self.scale_input.setText(settings.scale)

    def _current_settings(self) -> Settings:
        return Settings(
            program=self.program_input.text().strip(),
            output_format=self.format_combo.currentText(),
            codec=self.codec_combo.currentText(),
            scale=self.scale_input.text().strip(),
        )

    # ── Actions ───────────────────────────────────────────────────────────────

    def _start(self) -> None:
        settings = self._current_settings()
        save_settings(settings)

        params = JobParams(
            program=settings.program or "ffmpeg",
            input_path=self.input_path.text().strip(),
            start_time=self.start_input.text().strip(),
            end_time=self.end_input.text().strip(),
            output_format=settings.output_format,
            codec=settings.codec,
            scale=settings.scale,
        )

        self.log_view.clear()
        self._finish_count = 0
        print(f"[UI] Start requested for '{params.input_path}'")
        if self.controller.start(params) is None:
            return
        self._set_running(True)

    def _stop(self) -> None:
        print("[UI] Stop requested")
        if self.controller.cancel():
            self.status_lbl.setText("Stopping…")

    def _browse_input(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, "Select Input File")
        if path:
            self.input_path.setText(path)

    # ── Controller events (GUI thread) ────────────────────────────────────────

    def _on_progress(self, line: str) -> None:
        self.log_view.appendPlainText(line)

    def _on_error(self, message: str) -> None:
        self.log_view.appendPlainText(message)
        self.status_lbl.setText(message.splitlines()[0])
        self.status_lbl.setStyleSheet("color: #e74c3c; font-size: 9pt;")
        self._set_running(False)

    def _on_finished(self, payload: str) -> None:
        self._finish_count += 1
        self.log_view.appendPlainText(payload)
        if self._finish_count == 1:
            # First finish carries the exit summary, second the command text
            self.status_lbl.setText(payload.splitlines()[0])
            self.status_lbl.setStyleSheet("color: #888; font-size: 9pt;")
        self._set_running(False)

    def _set_running(self, running: bool) -> None:
        self.start_btn.setEnabled(not running)
        self.stop_btn.setEnabled(running)
        if running:
            self.status_lbl.setText("Running…")
            self.status_lbl.setStyleSheet("color: #558B6E; font-size: 9pt;")

    # ── Qt overrides ──────────────────────────────────────────────────────────

    def closeEvent(self, event) -> None:
        if self.controller.busy:
            self.controller.cancel()
            self.controller.join(timeout=2.0)
        super().closeEvent(event)
