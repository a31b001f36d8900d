"""Tests for the widgets and the main window.

Covers:
- TimerRow display and button wiring
- AddTimerDialog validation boundary
- SettingsDialog saving
- MultiTimerApp row syncing, reset-all, status text and quit logic
"""

from __future__ import annotations

import pytest
from PyQt6.QtWidgets import QMessageBox

from multitimer.app import MultiTimerApp
from multitimer.audio.sounds import SoundManager
from multitimer.settings import Settings, load_settings
from multitimer.timer.engine import TimerState
from multitimer.ui.add_timer_dialog import AddTimerDialog
from multitimer.ui.settings_dialog import SettingsDialog
from multitimer.ui.timer_row import PROGRESS_STEPS, TimerRow

from helpers import FakeClock


# ═══════════════════════════════════════════════════════════════════════
#  TIMER ROW
# ═══════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp")
class TestTimerRow:

    def test_initial_display(self, registry):
        t = registry.add("Tea", 180)
        row = TimerRow(t, registry)
        assert row._name_label.text() == "Tea"
        assert row._time_label.text() == "00:03:00"
        assert row._toggle_btn.text() == "Start"
        assert row._progress.value() == 0

    def test_toggle_button_starts_and_pauses(self, registry, clock):
        t = registry.add("Tea", 180)
        row = TimerRow(t, registry)

        row._toggle_btn.click()
        assert t.state == TimerState.RUNNING
        row.refresh()
        assert row._toggle_btn.text() == "Pause"

        clock.advance(60)
        row._toggle_btn.click()
        assert t.state == TimerState.PAUSED
        row.refresh()
        assert row._toggle_btn.text() == "Resume"
        assert row._time_label.text() == "00:02:00"
        assert row._progress.value() == round(PROGRESS_STEPS / 3)

    def test_reset_button(self, registry):
        t = registry.add("Tea", 180)
        registry.start(t.id, now=0)
        row = TimerRow(t, registry)
        row._reset_btn.click()
        assert t.state == TimerState.IDLE

    def test_delete_button_requests_removal(self, registry):
        t = registry.add("Tea", 180)
        row = TimerRow(t, registry)
        received = []
        row.delete_requested.connect(received.append)
        row._delete_btn.click()
        assert received == [t.id]
        assert t.id in registry

    def test_finished_disables_toggle(self, registry):
        t = registry.add("Tea", 10)
        registry.start(t.id, now=0)
        registry.tick(10)
        row = TimerRow(t, registry)
        assert not row._toggle_btn.isEnabled()
        assert row._time_label.text() == "00:00:00"
        assert row._progress.value() == PROGRESS_STEPS

    def test_rename_ignores_blank(self, registry):
        t = registry.add("Tea", 180)
        row = TimerRow(t, registry)
        row.rename("   ")
        assert t.name == "Tea"
        row.rename(" Chai ")
        assert t.name == "Chai"


# ═══════════════════════════════════════════════════════════════════════
#  ADD TIMER DIALOG
# ═══════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp")
class TestAddTimerDialog:

    def test_default_name(self):
        dialog = AddTimerDialog(default_name="Oven")
        assert dialog._name_edit.text() == "Oven"

    def test_zero_duration_rejected_inline(self):
        dialog = AddTimerDialog()
        dialog._add_btn.click()
        assert dialog.result_value is None
        assert "duration" in dialog.error_text

    def test_empty_name_rejected_inline(self):
        dialog = AddTimerDialog()
        dialog.set_values("  ", 0, 1, 0)
        dialog._add_btn.click()
        assert dialog.result_value is None
        assert "name" in dialog.error_text

    def test_valid_input_accepted(self):
        dialog = AddTimerDialog()
        dialog.set_values("Eggs", 0, 7, 30)
        dialog._add_btn.click()
        assert dialog.result_value == ("Eggs", 450.0)
        assert dialog.result() == AddTimerDialog.DialogCode.Accepted

    def test_picker_ranges(self):
        dialog = AddTimerDialog()
        assert dialog._hours_spin.maximum() == 23
        assert dialog._minutes_spin.maximum() == 59
        assert dialog._seconds_spin.maximum() == 59


# ═══════════════════════════════════════════════════════════════════════
#  SETTINGS DIALOG
# ═══════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp")
class TestSettingsDialog:

    def test_populates_from_settings(self):
        s = Settings(default_timer_name="Oven", sound_volume=33, sound_enabled=False)
        dialog = SettingsDialog(s)
        assert dialog._name_edit.text() == "Oven"
        assert dialog._vol_slider.value() == 33
        assert dialog._sound_cb.isChecked() is False

    def test_changes_save_immediately(self):
        s = Settings()
        dialog = SettingsDialog(s)
        dialog._vol_slider.setValue(12)
        dialog._notif_cb.setChecked(False)
        loaded = load_settings()
        assert loaded.sound_volume == 12
        assert loaded.notifications_enabled is False

    def test_blank_default_name_is_reverted(self):
        s = Settings(default_timer_name="Oven")
        dialog = SettingsDialog(s)
        dialog._name_edit.setText("")
        dialog._on_name_changed()
        assert s.default_timer_name == "Oven"
        assert dialog._name_edit.text() == "Oven"


# ═══════════════════════════════════════════════════════════════════════
#  MAIN WINDOW
# ═══════════════════════════════════════════════════════════════════════


@pytest.fixture
def window(qapp, tmp_path):
    clock = FakeClock()
    w = MultiTimerApp(
        Settings(),
        clock=clock,
        sound_manager=SoundManager(sounds_dir=tmp_path / "sounds"),
    )
    w.test_clock = clock
    yield w
    w._shutdown()
    w.deleteLater()


class TestMainWindow:

    def test_starts_empty_with_hint(self, window):
        assert len(window.registry) == 0
        assert not window._empty_hint.isHidden()
        assert window.driver.is_active

    def test_adding_creates_rows_in_order(self, window):
        a = window.registry.add("A", 10)
        b = window.registry.add("B", 20)
        assert window.row_for(a.id) is not None
        assert window.row_for(b.id) is not None
        assert window._empty_hint.isHidden()
        assert window._list_layout.indexOf(window.row_for(a.id)) < \
            window._list_layout.indexOf(window.row_for(b.id))

    def test_delete_removes_row_and_timer(self, window):
        t = window.registry.add("A", 10)
        window.row_for(t.id)._delete_btn.click()
        assert t.id not in window.registry
        assert window.row_for(t.id) is None

    def test_tick_updates_row(self, window):
        t = window.registry.add("Tea", 180)
        window.registry.start(t.id)
        window.test_clock.advance(61)
        window.driver._on_tick()
        assert window.row_for(t.id)._time_label.text() == "00:01:59"

    def test_reset_all(self, window):
        a = window.registry.add("A", 10)
        b = window.registry.add("B", 20)
        window.registry.start(a.id)
        window.registry.start(b.id)
        window.test_clock.advance(15)
        window.driver._on_tick()
        window._reset_all()
        assert all(t.state == TimerState.IDLE for t in window.registry)

    def test_status_text(self, window):
        assert window._status_label.text() == "No timers"
        t = window.registry.add("A", 10)
        window.registry.add("B", 10)
        assert window._status_label.text() == "2 timers, none running"
        window.registry.start(t.id)
        assert window._status_label.text() == "1 of 2 running"

    def test_finished_message(self, window):
        t = window.registry.add("Tea", 5)
        window.registry.start(t.id)
        window.test_clock.advance(5)
        window.driver._on_tick()
        assert window.statusBar().currentMessage() == "Tea is done"
        assert window.alerts.pending_ids == []

    def test_done_notice_survives_ticks_of_other_running_timers(self, window):
        tea = window.registry.add("Tea", 5)
        pasta = window.registry.add("Pasta", 600)
        window.registry.start(tea.id)
        window.registry.start(pasta.id)

        window.test_clock.advance(5)
        window.driver._on_tick()
        window.test_clock.advance(1)
        window.driver._on_tick()

        assert window.statusBar().currentMessage() == "Tea is done"
        assert window._status_label.text() == "1 of 2 running"
        assert pasta.state == TimerState.RUNNING

    def test_quit_without_running_timers_needs_no_confirmation(self, window, monkeypatch):
        def _fail(*args, **kwargs):
            raise AssertionError("should not ask")
        monkeypatch.setattr(QMessageBox, "question", _fail)
        window.registry.add("A", 10)
        assert window._should_quit() is True

    def test_quit_with_running_timers_asks(self, window, monkeypatch):
        monkeypatch.setattr(
            QMessageBox, "question",
            lambda *a, **k: QMessageBox.StandardButton.No,
        )
        t = window.registry.add("A", 10)
        window.registry.start(t.id)
        assert window._should_quit() is False

    def test_apply_settings(self, window):
        window._settings.notifications_enabled = False
        window._settings.tick_interval_ms = 500
        window._apply_settings()
        assert window.alerts.notifications_enabled is False
        assert window.driver.interval_ms == 500

    def test_apply_settings_updates_quit_on_last_window_closed(self, window, qapp):
        before = qapp.quitOnLastWindowClosed()
        try:
            window._settings.minimize_to_tray = True
            window._apply_settings()
            assert qapp.quitOnLastWindowClosed() is False
            window._settings.minimize_to_tray = False
            window._apply_settings()
            assert qapp.quitOnLastWindowClosed() is True
        finally:
            qapp.setQuitOnLastWindowClosed(before)
