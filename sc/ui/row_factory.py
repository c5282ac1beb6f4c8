from typing import Any
from collections.abc import Callable
from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)
from sc.core.counter import Counter
from sc.ui.theme import build_row_stylesheet
from sc.ui.ui_blueprint import UIBlueprint

# Purely organizational class to group functions to build the pieces of the main view (header, counter rows, empty
# state, footer). Each builder returns a (container, widget_dict) tuple. The widget_dict maps logical names to
# sub-widgets for later in-place updates.
class RowFactory:
    @staticmethod
    # Title bar with the app name, usage hint, and "N counters" summary.
    def header(blueprint: UIBlueprint, summary: str):
        hud = QWidget()
        hud.setObjectName("hud")
        hud.setAttribute(Qt.WA_StyledBackground, True)
        hud_layout = QHBoxLayout(hud)
        hud_layout.setContentsMargins(blueprint.spacing, blueprint.spacing, blueprint.spacing, blueprint.spacing)

        branding = QVBoxLayout()
        title_lbl = QLabel("Score Counter")
        title_lbl.setFont(blueprint.title_font)
        hint_lbl = QLabel("Press to adjust, hold for quick +5/-5.")
        hint_lbl.setObjectName("hint")
        hint_lbl.setFont(blueprint.hint_font)
        branding.addWidget(title_lbl)
        branding.addWidget(hint_lbl)
        hud_layout.addLayout(branding, 1)

        summary_lbl = QLabel(summary)
        summary_lbl.setObjectName("summary")
        summary_lbl.setFont(blueprint.action_font)
        summary_lbl.setAlignment(Qt.AlignRight | Qt.AlignVCenter)
        hud_layout.addWidget(summary_lbl)

        return hud, {"summary": summary_lbl}

    @staticmethod
    # Shown in place of the rows while there are no counters.
    def empty_state(blueprint: UIBlueprint, on_add: Callable[..., Any]):
        container = QWidget()
        container.setObjectName("emptyState")
        container.setAttribute(Qt.WA_StyledBackground, True)
        layout = QVBoxLayout(container)
        layout.setAlignment(Qt.AlignCenter)
        layout.setSpacing(blueprint.spacing)

        heading = QLabel("No counters yet")
        heading.setFont(blueprint.title_font)
        heading.setAlignment(Qt.AlignCenter)
        body = QLabel("Create your first row to start tracking scores.")
        body.setObjectName("hint")
        body.setFont(blueprint.hint_font)
        body.setAlignment(Qt.AlignCenter)

        add_btn = QPushButton("+ Add counter")
        add_btn.setObjectName("primary")
        add_btn.setFont(blueprint.action_font)
        add_btn.clicked.connect(lambda _=False: on_add())

        layout.addWidget(heading)
        layout.addWidget(body)
        layout.addWidget(add_btn, 0, Qt.AlignCenter)
        return container, {"add_btn": add_btn}

    @staticmethod
    # Given a UIBlueprint and a counter, builds its full-width row. The minus/plus pills are returned bare: the caller
    # wires them into the press classifier through an event filter, since taps and holds need raw press/release.
    def counter(blueprint: UIBlueprint,
                counter: Counter,
                total: int,
                height: int,
                on_edit: Callable[..., Any],
                on_delete: Callable[..., Any]):

        row_container = QWidget()
        row_container.setObjectName("rowBg")
        row_container.setAttribute(Qt.WA_StyledBackground, True)
        row_container.setStyleSheet(build_row_stylesheet(counter.color, blueprint.theme_name))
        row_container.setFixedHeight(height)
        row_container.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)
        row_layout = QVBoxLayout(row_container)
        row_layout.setContentsMargins(blueprint.spacing, blueprint.spacing // 2, blueprint.spacing, blueprint.spacing // 2)
        row_layout.setSpacing(0)

        # Top strip: edit / delete
        actions = QHBoxLayout()
        actions.addStretch()
        edit_btn = QPushButton("Edit")
        edit_btn.setFont(blueprint.action_font)
        edit_btn.clicked.connect(lambda _=False: on_edit(counter.id))
        delete_btn = QPushButton("Delete")
        delete_btn.setFont(blueprint.action_font)
        delete_btn.clicked.connect(lambda _=False: on_delete(counter.id))
        actions.addWidget(edit_btn)
        actions.addWidget(delete_btn)
        row_layout.addLayout(actions)

        # Main strip: minus | name, score, hint | plus
        content = QHBoxLayout()
        content.setSpacing(blueprint.spacing)

        minus_btn = QPushButton("-")
        minus_btn.setObjectName("pill")
        minus_btn.setFont(blueprint.pill_font)
        minus_btn.setFixedWidth(blueprint.pill_w)
        minus_btn.setSizePolicy(QSizePolicy.Fixed, QSizePolicy.Expanding)
        content.addWidget(minus_btn)

        center = QVBoxLayout()
        center.setSpacing(0)
        name_lbl = QLabel(counter.name)
        name_lbl.setFont(blueprint.name_font)
        name_lbl.setAlignment(Qt.AlignCenter)
        score_lbl = QLabel(str(counter.score))
        score_lbl.setObjectName("score")
        score_lbl.setFont(blueprint.score_font)
        score_lbl.setAlignment(Qt.AlignCenter)
        score_lbl.setProperty("negative", counter.score < 0)
        hint_lbl = QLabel(f"{total} rows • hold for ±5")
        hint_lbl.setFont(blueprint.hint_font)
        hint_lbl.setAlignment(Qt.AlignCenter)
        center.addWidget(name_lbl)
        center.addWidget(score_lbl)
        center.addWidget(hint_lbl)
        content.addLayout(center, 1)

        plus_btn = QPushButton("+")
        plus_btn.setObjectName("pill")
        plus_btn.setFont(blueprint.pill_font)
        plus_btn.setFixedWidth(blueprint.pill_w)
        plus_btn.setSizePolicy(QSizePolicy.Fixed, QSizePolicy.Expanding)
        content.addWidget(plus_btn)

        row_layout.addLayout(content, 1)

        widget_dict = {
            "name": name_lbl, "score": score_lbl, "hint": hint_lbl,
            "minus": minus_btn, "plus": plus_btn,
            "edit": edit_btn, "delete": delete_btn,
            "container": row_container,
        }
        return row_container, widget_dict

    @staticmethod
    # Bottom bar holding the always-available add button.
    def footer(blueprint: UIBlueprint, on_add: Callable[..., Any]):
        footer = QWidget()
        footer.setObjectName("footer")
        footer.setStyleSheet("#footer { background: transparent; }")
        f_lay = QHBoxLayout(footer)
        f_lay.setContentsMargins(0, 0, 0, 0)
        f_lay.addStretch()

        add_btn = QPushButton("+ Add")
        add_btn.setObjectName("primary")
        add_btn.setFont(blueprint.action_font)
        add_btn.setToolTip("Add a new counter")
        add_btn.clicked.connect(lambda _=False: on_add())
        f_lay.addWidget(add_btn)

        return footer, {"add_btn": add_btn}
