"""Main application window for MultiTimer."""

from __future__ import annotations

import logging
import time

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QAction, QColor, QIcon, QKeySequence, QPainter, QPixmap
from PyQt6.QtWidgets import (
    QApplication, QLabel, QMainWindow, QMenu, QMessageBox, QScrollArea,
    QStatusBar, QSystemTrayIcon, QToolBar, QVBoxLayout, QWidget,
)

from .alerts.center import AlertCenter
from .audio.sounds import SoundManager
from .settings import Settings, load_settings, save_settings
from .timer.driver import TickDriver
from .timer.engine import Clock, Timer
from .timer.registry import TimerRegistry
from .ui.add_timer_dialog import AddTimerDialog
from .ui.settings_dialog import SettingsDialog
from .ui.styles import PALETTE, build_stylesheet
from .ui.timer_row import TimerRow


_LOGGER = logging.getLogger(__name__)


def make_app_icon(running: bool = False) -> QIcon:
    """Round clock-face icon, filled green while any timer runs."""
    size = 64
    pixmap = QPixmap(size, size)
    pixmap.fill(QColor(0, 0, 0, 0))
    p = QPainter(pixmap)
    p.setRenderHint(QPainter.RenderHint.Antialiasing)
    colour = QColor(PALETTE["accent"] if running else PALETTE["text_muted"])
    p.setPen(colour.darker(120))
    p.setBrush(colour)
    p.drawEllipse(4, 4, size - 8, size - 8)
    p.setPen(QColor(PALETTE["bg"]))
    p.drawLine(size // 2, size // 2, size // 2, 14)
    p.drawLine(size // 2, size // 2, size - 18, size // 2)
    p.end()
    return QIcon(pixmap)


class MultiTimerApp(QMainWindow):
    """Main application window."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        clock: Clock = time.time,
        sound_manager: SoundManager | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("MultiTimer")
        self.setMinimumSize(380, 420)

        self._geometry_save_timer = QTimer(self)
        self._geometry_save_timer.setSingleShot(True)
        self._geometry_save_timer.setInterval(500)
        self._geometry_save_timer.timeout.connect(self._save_geometry)

        # ── settings ──────────────────────────────────────────────────
        self._settings: Settings = settings if settings is not None else load_settings()

        # ── sound manager ─────────────────────────────────────────────
        self._sound_manager = sound_manager or SoundManager(parent=self)
        self._sound_manager.set_volume(self._settings.sound_volume)
        self._sound_manager.set_enabled(self._settings.sound_enabled)

        # ── tray + alerts ─────────────────────────────────────────────
        self._tray_icon = QSystemTrayIcon(self)
        self._tray_icon.setIcon(make_app_icon(False))
        self._tray_icon.setToolTip("MultiTimer")
        self._tray_icon.activated.connect(self._on_tray_activated)

        self._alerts = AlertCenter(
            self,
            sound_manager=self._sound_manager,
            tray_icon=self._tray_icon,
            clock=clock,
            notifications_enabled=self._settings.notifications_enabled,
        )

        # ── engine ────────────────────────────────────────────────────
        self._registry = TimerRegistry(clock=clock, alerts=self._alerts)
        self._driver = TickDriver(
            self._registry, self,
            clock=clock,
            interval_ms=self._settings.tick_interval_ms,
        )

        # ── widgets ───────────────────────────────────────────────────
        self.setStyleSheet(build_stylesheet())
        self._rows: dict[str, TimerRow] = {}
        self._build_toolbar()
        self._build_list()

        self._status_bar = QStatusBar(self)
        self.setStatusBar(self._status_bar)
        # running count lives in a permanent widget; showMessage is for transient notices
        self._status_label = QLabel(self._status_bar)
        self._status_label.setObjectName("statusCount")
        self._status_bar.addPermanentWidget(self._status_label)

        self._build_tray_menu()
        if QSystemTrayIcon.isSystemTrayAvailable():
            self._tray_icon.show()

        # ── wire signals ──────────────────────────────────────────────
        self._driver.collection_changed.connect(self._sync_rows)
        self._driver.timer_changed.connect(self._on_timer_changed)
        self._driver.timer_started.connect(self._on_timer_started)
        self._driver.timer_finished.connect(self._on_timer_finished)

        # ── restore window state ───────────────────────────────────────
        self._restore_geometry()
        if self._settings.always_on_top:
            self._apply_always_on_top(True)

        self._sync_rows()
        self._driver.start()

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC
    # ══════════════════════════════════════════════════════════════════

    @property
    def registry(self) -> TimerRegistry:
        return self._registry

    @property
    def driver(self) -> TickDriver:
        return self._driver

    @property
    def alerts(self) -> AlertCenter:
        return self._alerts

    def row_for(self, timer_id: str) -> TimerRow | None:
        return self._rows.get(timer_id)

    # ══════════════════════════════════════════════════════════════════
    #  BUILD
    # ══════════════════════════════════════════════════════════════════

    def _build_toolbar(self) -> None:
        toolbar = QToolBar("Timers", self)
        toolbar.setMovable(False)
        self.addToolBar(toolbar)

        self._add_action = QAction("Add Timer", self)
        self._add_action.setShortcut(QKeySequence("Ctrl+N"))
        self._add_action.triggered.connect(self._open_add_dialog)
        toolbar.addAction(self._add_action)

        self._reset_all_action = QAction("Reset All", self)
        self._reset_all_action.setShortcut(QKeySequence("Ctrl+R"))
        self._reset_all_action.triggered.connect(self._reset_all)
        toolbar.addAction(self._reset_all_action)

        toolbar.addSeparator()

        settings_action = QAction("Settings", self)
        settings_action.setMenuRole(QAction.MenuRole.PreferencesRole)
        settings_action.setShortcut(QKeySequence("Ctrl+,"))
        settings_action.triggered.connect(self._open_settings)
        toolbar.addAction(settings_action)

        self._aot_action = QAction("Always on Top", self)
        self._aot_action.setCheckable(True)
        self._aot_action.setChecked(self._settings.always_on_top)
        self._aot_action.triggered.connect(self._toggle_always_on_top)
        toolbar.addAction(self._aot_action)

        quit_action = QAction("Quit MultiTimer", self)
        quit_action.setMenuRole(QAction.MenuRole.QuitRole)
        quit_action.setShortcut(QKeySequence("Ctrl+Q"))
        quit_action.triggered.connect(self._quit_with_confirm)
        self.addAction(quit_action)

    def _build_list(self) -> None:
        scroll = QScrollArea(self)
        scroll.setWidgetResizable(True)
        scroll.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)

        container = QWidget(scroll)
        self._list_layout = QVBoxLayout(container)
        self._list_layout.setContentsMargins(12, 12, 12, 12)
        self._list_layout.setSpacing(10)

        self._empty_hint = QLabel("No timers yet. Press “Add Timer” to create one.", container)
        self._empty_hint.setObjectName("emptyHint")
        self._empty_hint.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._empty_hint.setWordWrap(True)
        self._list_layout.addWidget(self._empty_hint)
        self._list_layout.addStretch()

        scroll.setWidget(container)
        self.setCentralWidget(scroll)

    def _build_tray_menu(self) -> None:
        menu = QMenu(self)

        reset_action = menu.addAction("Reset All")
        reset_action.triggered.connect(self._reset_all)

        menu.addSeparator()

        show_action = menu.addAction("Show MultiTimer")
        show_action.triggered.connect(self._show_window)

        menu.addSeparator()

        quit_action = menu.addAction("Quit")
        quit_action.triggered.connect(self._quit_with_confirm)

        self._tray_icon.setContextMenu(menu)

    # ══════════════════════════════════════════════════════════════════
    #  TIMER LIST
    # ══════════════════════════════════════════════════════════════════

    def _sync_rows(self) -> None:
        """Make the row widgets match the registry, in registry order."""
        timers = self._registry.timers
        live_ids = {t.id for t in timers}

        for timer_id in list(self._rows):
            if timer_id not in live_ids:
                row = self._rows.pop(timer_id)
                self._list_layout.removeWidget(row)
                row.setParent(None)
                row.deleteLater()

        for index, timer in enumerate(timers):
            row = self._rows.get(timer.id)
            if row is None:
                row = TimerRow(timer, self._registry)
                row.delete_requested.connect(self._remove_timer)
                self._rows[timer.id] = row
            else:
                self._list_layout.removeWidget(row)
            # slot 0 is the empty-state hint
            self._list_layout.insertWidget(index + 1, row)

        self._empty_hint.setVisible(not timers)
        self._update_status()

    def _on_timer_changed(self, timer: Timer) -> None:
        row = self._rows.get(timer.id)
        if row is not None:
            row.refresh()
        self._update_status()

    def _on_timer_started(self, timer_id: str) -> None:
        self._sound_manager.play("timer_start")

    def _on_timer_finished(self, timer_id: str, name: str) -> None:
        self._status_bar.showMessage(f"{name} is done", 10_000)

    def _update_status(self) -> None:
        running = self._registry.running_count
        total = len(self._registry)
        if total == 0:
            text = "No timers"
        elif running == 0:
            text = f"{total} timer{'s' if total != 1 else ''}, none running"
        else:
            text = f"{running} of {total} running"
        self._status_label.setText(text)
        self._tray_icon.setIcon(make_app_icon(running > 0))
        self._tray_icon.setToolTip(f"MultiTimer — {text}")

    # ══════════════════════════════════════════════════════════════════
    #  ACTIONS
    # ══════════════════════════════════════════════════════════════════

    def _open_add_dialog(self) -> None:
        dialog = AddTimerDialog(self, default_name=self._settings.default_timer_name)
        if dialog.exec() == AddTimerDialog.DialogCode.Accepted and dialog.result_value:
            name, duration = dialog.result_value
            self._registry.add(name, duration)

    def _remove_timer(self, timer_id: str) -> None:
        self._registry.remove(timer_id)

    def _reset_all(self) -> None:
        self._registry.reset_all()

    def _open_settings(self) -> None:
        dialog = SettingsDialog(
            self._settings, self,
            sound_preview_callback=lambda: self._sound_manager.play("click"),
        )
        dialog.exec()
        self._apply_settings()

    def _apply_settings(self) -> None:
        s = self._settings
        self._sound_manager.set_enabled(s.sound_enabled)
        self._sound_manager.set_volume(s.sound_volume)
        self._alerts.set_notifications_enabled(s.notifications_enabled)
        self._driver.set_interval(s.tick_interval_ms)
        app = QApplication.instance()
        if app is not None:
            app.setQuitOnLastWindowClosed(not s.minimize_to_tray)

    # ══════════════════════════════════════════════════════════════════
    #  SYSTEM TRAY
    # ══════════════════════════════════════════════════════════════════

    def _on_tray_activated(self, reason: QSystemTrayIcon.ActivationReason) -> None:
        """Left-click on tray icon → show the window."""
        if reason == QSystemTrayIcon.ActivationReason.Trigger:
            self._show_window()

    def _show_window(self) -> None:
        self.show()
        self.raise_()
        self.activateWindow()

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW STATE
    # ══════════════════════════════════════════════════════════════════

    def _restore_geometry(self) -> None:
        s = self._settings
        if s.window_x is not None and s.window_y is not None:
            self.move(s.window_x, s.window_y)
        if s.window_width and s.window_height:
            self.resize(s.window_width, s.window_height)

    def _save_geometry(self) -> None:
        if not self.isVisible():
            return
        pos = self.pos()
        size = self.size()
        self._settings.window_x = pos.x()
        self._settings.window_y = pos.y()
        self._settings.window_width = size.width()
        self._settings.window_height = size.height()
        save_settings(self._settings)

    def _toggle_always_on_top(self) -> None:
        new_val = not self._settings.always_on_top
        self._settings.always_on_top = new_val
        save_settings(self._settings)
        self._aot_action.setChecked(new_val)
        self._apply_always_on_top(new_val)

    def _apply_always_on_top(self, on_top: bool) -> None:
        flags = self.windowFlags()
        if on_top:
            flags |= Qt.WindowType.WindowStaysOnTopHint
        else:
            flags &= ~Qt.WindowType.WindowStaysOnTopHint
        self.setWindowFlags(flags)
        self.show()  # setWindowFlags hides the window

    # ══════════════════════════════════════════════════════════════════
    #  QUIT
    # ══════════════════════════════════════════════════════════════════

    def _should_quit(self) -> bool:
        """Ask first if a timer is running and the setting says so."""
        if not self._settings.confirm_quit_when_running:
            return True
        if self._registry.running_count == 0:
            return True
        reply = QMessageBox.question(
            self,
            "Quit MultiTimer?",
            "Timers are still running. Quit anyway?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            QMessageBox.StandardButton.No,
        )
        return reply == QMessageBox.StandardButton.Yes

    def _quit_with_confirm(self) -> None:
        if not self._should_quit():
            return
        self._save_geometry()
        self._shutdown()
        QApplication.instance().quit()

    def _shutdown(self) -> None:
        """Stop ticking and drop pending alerts.  Timers are not saved."""
        self._driver.detach()
        self._alerts.clear()
        self._tray_icon.hide()
        _LOGGER.info("Shutting down with %d timer(s)", len(self._registry))

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW EVENTS
    # ══════════════════════════════════════════════════════════════════

    def closeEvent(self, event) -> None:  # type: ignore[override]
        """Hide to the tray if enabled, otherwise quit (with confirmation)."""
        self._save_geometry()
        if self._settings.minimize_to_tray and self._tray_icon.isVisible():
            event.ignore()
            self.hide()
            return
        if not self._should_quit():
            event.ignore()
            return
        self._shutdown()
        event.accept()
        app = QApplication.instance()
        if app is not None and not app.quitOnLastWindowClosed():
            # tray hiding was on but no tray is shown
            app.quit()

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self._geometry_save_timer.start()

    def moveEvent(self, event) -> None:  # type: ignore[override]
        super().moveEvent(event)
        self._geometry_save_timer.start()
