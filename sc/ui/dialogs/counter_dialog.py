"""Add/edit dialog for a single counter."""

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QFont
from PySide6.QtWidgets import (
    QColorDialog,
    QDialog,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
)
from sc.core.dialog import DialogMode
from sc.core.palette import PALETTE
from sc.ui.theme import THEMES, DEFAULT_THEME

# Modal form over the main window. It holds no state of its own: every keystroke and swatch click goes straight to
# the app's draft, and the buttons map to save / cancel / delete on the app. Closing the window any other way
# (Esc, title-bar X) counts as cancel.
class CounterDialog(QDialog):

    def __init__(self, parent, app, font_family="Segoe UI"):
        super().__init__(parent)
        self.app = app
        draft = app.view.draft
        editing = app.dialog.mode is DialogMode.EDITING
        self.setWindowTitle("Edit counter" if editing else "Add counter")
        self.setModal(True)
        self._swatches = {}
        self._theme = THEMES[DEFAULT_THEME]

        label_font = QFont(font_family, 11, QFont.Bold)
        field_font = QFont(font_family, 11)

        outer = QVBoxLayout(self)
        outer.setSpacing(8)

        title = QLabel(self.windowTitle())
        title.setFont(QFont(font_family, 14, QFont.Bold))
        outer.addWidget(title)

        # Name
        lbl = QLabel("Name")
        lbl.setFont(label_font)
        outer.addWidget(lbl)
        self._name = QLineEdit(draft.name)
        self._name.setFont(field_font)
        self._name.setPlaceholderText("Player name")
        self._name.textEdited.connect(lambda text: self.app.draft_field_changed("name", text))
        outer.addWidget(self._name)

        # Score. Text that isn't a whole number is left in the box but never reaches the draft.
        lbl = QLabel("Score")
        lbl.setFont(label_font)
        outer.addWidget(lbl)
        self._score = QLineEdit(str(draft.score))
        self._score.setFont(field_font)
        self._score.setInputMethodHints(Qt.ImhFormattedNumbersOnly)
        self._score.textEdited.connect(lambda text: self.app.draft_field_changed("score", text))
        outer.addWidget(self._score)

        # Color
        lbl = QLabel("Color")
        lbl.setFont(label_font)
        outer.addWidget(lbl)
        palette_row = QHBoxLayout()
        palette_row.setSpacing(4)
        for swatch in PALETTE:
            btn = QPushButton()
            btn.setFixedSize(28, 28)
            btn.setToolTip(swatch)
            btn.clicked.connect(lambda _=False, c=swatch: self.app.draft_field_changed("color", c))
            self._swatches[swatch] = btn
            palette_row.addWidget(btn)
        self._custom_btn = QPushButton("Custom...")
        self._custom_btn.setFont(field_font)
        self._custom_btn.clicked.connect(self._pick_custom_color)
        palette_row.addWidget(self._custom_btn)
        palette_row.addStretch()
        outer.addLayout(palette_row)

        # Actions
        btn_row = QHBoxLayout()
        if editing:
            delete_btn = QPushButton("Delete")
            delete_btn.setObjectName("danger")
            delete_btn.setFont(field_font)
            delete_btn.clicked.connect(self._on_delete)
            btn_row.addWidget(delete_btn)
        btn_row.addStretch()
        cancel_btn = QPushButton("Cancel")
        cancel_btn.setFont(field_font)
        cancel_btn.clicked.connect(self.reject)
        btn_row.addWidget(cancel_btn)
        save_btn = QPushButton("Save")
        save_btn.setObjectName("primary")
        save_btn.setFont(field_font)
        save_btn.setDefault(True)
        save_btn.clicked.connect(self._on_save)
        btn_row.addWidget(save_btn)
        outer.addLayout(btn_row)

        self._refresh_color(draft.color)
        self._unsubscribe = app.subscribe(self._on_view)

    def _on_view(self, view):
        if view.draft is not None:
            self._refresh_color(view.draft.color)

    # Outlines the selected swatch and tints the custom button with the current color.
    def _refresh_color(self, current):
        for swatch, btn in self._swatches.items():
            border = (f"3px solid {self._theme['swatch_selected']}" if swatch == current
                      else f"1px solid {self._theme['button_border']}")
            btn.setStyleSheet(f"background-color: {swatch}; border: {border}; border-radius: 14px;")
        if current in self._swatches:
            self._custom_btn.setStyleSheet("")
        else:
            self._custom_btn.setStyleSheet(f"background-color: {current};")

    def _pick_custom_color(self):
        draft = self.app.view.draft
        initial = QColor(draft.color) if draft is not None else QColor(255, 255, 255)
        color = QColorDialog.getColor(initial, self, "Counter color")
        if color.isValid():
            self.app.draft_field_changed("color", color.name())

    def _on_save(self):
        self.app.save_draft()
        self.accept()

    def _on_delete(self):
        self.app.delete_counter()
        self.accept()

    # Every way out (save, delete, cancel, Esc, X) ends up here.
    def done(self, result):
        self._unsubscribe()
        self.app.close_dialog()
        super().done(result)
