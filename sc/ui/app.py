import sys
from PySide6.QtCore import Qt, QEvent, QTimer
from PySide6.QtGui import QFontDatabase
from PySide6.QtWidgets import (
    QApplication,
    QMainWindow,
    QMessageBox,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)
from sc.common.logger import log
from sc.common.setup import PATHS
from sc.core import config
from sc.core.app_state import ScoreCounterApp
from sc.core.storage import LocalStorage
from sc.ui.dialogs.counter_dialog import CounterDialog
from sc.ui.row_factory import RowFactory
from sc.ui.theme import THEMES, SIZES, DEFAULT_THEME, DEFAULT_SIZE, build_stylesheet
from sc.ui.ui_blueprint import UIBlueprint

_PREFERRED_FONTS = ("Segoe UI", "Inter", "Helvetica Neue", "Arial")


# ---------------------------------------------------------------------------
# Main window
# ---------------------------------------------------------------------------

# Main window of the score counter. Pure renderer: draws whatever ViewState the app publishes and forwards clicks,
# presses and releases back into the app.
class MainWindow(QMainWindow):

    def __init__(self, app: ScoreCounterApp):
        super().__init__()
        self.app = app
        self.settings = app.settings
        self.setWindowTitle("Score Counter")
        self.resize(self.settings["window_width"], self.settings["window_height"])
        if self.settings["always_on_top"]:
            self.setWindowFlags(self.windowFlags() | Qt.WindowStaysOnTopHint)

        families = set(QFontDatabase.families())
        self.font_family = next((f for f in _PREFERRED_FONTS if f in families), QApplication.font().family())
        self.blueprint = UIBlueprint.compute(DEFAULT_THEME, THEMES[DEFAULT_THEME], SIZES[DEFAULT_SIZE], self.font_family)

        self._widgets = {}          # counter id -> widget dict
        self._press_controls = {}   # pill button -> control id (counter_id, sign)
        self._layout_key = None     # (id, name, color) per row, as last drawn
        self._rebuild_pending = False

        # -- Build UI skeleton --
        central = QWidget()
        self.setCentralWidget(central)
        self._main_lay = QVBoxLayout(central)
        pad = self.blueprint.size["frame_pad"]
        self._main_lay.setContentsMargins(pad, pad, pad, pad)
        self._main_lay.setSpacing(self.blueprint.spacing)

        hud, hud_widgets = RowFactory.header(self.blueprint, self.app.view.summary)
        self._summary_lbl = hud_widgets["summary"]
        self._main_lay.addWidget(hud)

        self._scroll = QScrollArea()
        self._scroll.setWidgetResizable(True)
        self._scroll.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self._rows_host = QWidget()
        self._rows_host.setObjectName("rowsHost")
        self._rows = QVBoxLayout(self._rows_host)
        self._rows.setContentsMargins(0, 0, 0, 0)
        self._rows.setSpacing(0)
        self._scroll.setWidget(self._rows_host)
        self._main_lay.addWidget(self._scroll, 1)

        footer, _ = RowFactory.footer(self.blueprint, on_add=self._on_add)
        self._main_lay.addWidget(footer)

        self.setStyleSheet(build_stylesheet(DEFAULT_THEME))
        self._unsubscribe = self.app.subscribe(self._on_view)
        self._rebuild_rows()

    # ------------------------------------------------------------------ #
    #  Rendering                                                           #
    # ------------------------------------------------------------------ #

    def _viewport_height(self):
        return max(1, self._scroll.viewport().height())

    def _on_view(self, view):
        self._summary_lbl.setText(view.summary)
        layout_key = tuple((c.id, c.name, c.color) for c in view.counters)
        if layout_key != self._layout_key:
            # Deferred: this can fire from inside a pill's own event filter, and that pill is about to be deleted.
            if not self._rebuild_pending:
                self._rebuild_pending = True
                QTimer.singleShot(0, self._rebuild_rows)
            return
        for counter in view.counters:
            self._update_score(counter, view.is_negative(counter))

    def _update_score(self, counter, negative):
        w = self._widgets.get(counter.id)
        if w is None:
            return
        lbl = w["score"]
        lbl.setText(str(counter.score))
        if lbl.property("negative") != negative:
            lbl.setProperty("negative", negative)
            lbl.style().unpolish(lbl)
            lbl.style().polish(lbl)

    def _rebuild_rows(self):
        """Tear down and recreate every counter row."""
        self._rebuild_pending = False
        self.app.cancel_all_presses()
        self._widgets.clear()
        self._press_controls.clear()

        while self._rows.count():
            item = self._rows.takeAt(0)
            w = item.widget()
            if w:
                w.hide()
                w.deleteLater()

        view = self.app.view
        self._layout_key = tuple((c.id, c.name, c.color) for c in view.counters)
        self._summary_lbl.setText(view.summary)

        if not view.counters:
            empty, _ = RowFactory.empty_state(self.blueprint, on_add=self._on_add)
            self._rows.addWidget(empty, 1)
            return

        height = int(view.row_height(self._viewport_height()))
        for counter in view.counters:
            rc, wd = RowFactory.counter(
                self.blueprint, counter, view.row_count, height,
                on_edit=self._on_edit,
                on_delete=self._on_delete,
            )
            for key, sign in (("minus", -1), ("plus", 1)):
                btn = wd[key]
                self._press_controls[btn] = (counter.id, sign)
                btn.installEventFilter(self)
            self._widgets[counter.id] = wd
            self._rows.addWidget(rc)
        self._rows.addStretch()

    def _resize_rows(self):
        view = self.app.view
        if not view.counters:
            return
        height = int(view.row_height(self._viewport_height()))
        for w in self._widgets.values():
            w["container"].setFixedHeight(height)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        QTimer.singleShot(0, self._resize_rows)

    # ------------------------------------------------------------------ #
    #  Press handling for the -/+ pills                                    #
    # ------------------------------------------------------------------ #

    def eventFilter(self, obj, event):
        control_id = self._press_controls.get(obj)
        if control_id is not None:
            etype = event.type()
            if etype == QEvent.MouseButtonPress and event.button() == Qt.LeftButton:
                self.app.pointer_down(control_id)
            elif etype == QEvent.MouseButtonRelease and event.button() == Qt.LeftButton:
                # Releasing after dragging off the pill is a cancel, not a tap.
                if obj.rect().contains(event.position().toPoint()):
                    self.app.pointer_up(control_id)
                else:
                    self.app.pointer_leave_or_cancel(control_id)
            elif etype in (QEvent.Leave, QEvent.TouchCancel):
                self.app.pointer_leave_or_cancel(control_id)
        # Never consume, the button still needs the events to paint its pressed state.
        return super().eventFilter(obj, event)

    def changeEvent(self, event):
        if event.type() == QEvent.ActivationChange and not self.isActiveWindow():
            self.app.cancel_all_presses()
        super().changeEvent(event)

    # ------------------------------------------------------------------ #
    #  Button handlers                                                     #
    # ------------------------------------------------------------------ #

    def _on_add(self):
        self.app.open_add()
        self._run_dialog()

    def _on_edit(self, counter_id):
        self.app.open_edit(counter_id)
        self._run_dialog()

    def _on_delete(self, counter_id):
        if self.settings["confirm_delete"]:
            counter = self.app.store.get(counter_id)
            if counter is None:
                return
            if QMessageBox.question(
                    self, "Confirm Delete",
                    f"Delete '{counter.name}'?"
            ) != QMessageBox.Yes:
                return
        self.app.delete_counter(counter_id)

    def _run_dialog(self):
        if not self.app.dialog.is_open:
            return
        dlg = CounterDialog(self, self.app, font_family=self.font_family)
        dlg.setStyleSheet(build_stylesheet(DEFAULT_THEME))
        dlg.exec()

    # ------------------------------------------------------------------ #
    #  Window close                                                        #
    # ------------------------------------------------------------------ #

    def closeEvent(self, event):
        self._unsubscribe()
        self.settings["window_width"] = self.width()
        self.settings["window_height"] = self.height()
        try:
            config.save_settings(self.settings)
        except OSError:
            log.warning("Failed to save settings on exit.", exc_info=True)
        event.accept()


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main():
    qt_app = QApplication(sys.argv)
    app = ScoreCounterApp(LocalStorage(PATHS.current), settings=config.load_settings())
    app.load()
    window = MainWindow(app)
    window.show()
    sys.exit(qt_app.exec())
