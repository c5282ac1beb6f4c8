"""Tests for counter row styling.

Covers: sc.ui.theme.stylesheet, sc.ui.row_factory
"""

import os
import unittest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtGui import QPalette
from PySide6.QtWidgets import QApplication, QVBoxLayout, QWidget

from sc.core.counter import Counter
from sc.ui.row_factory import RowFactory
from sc.ui.theme import DEFAULT_SIZE, DEFAULT_THEME, SIZES, THEMES, build_row_stylesheet, build_stylesheet
from sc.ui.ui_blueprint import UIBlueprint


class TestRowStylesheet(unittest.TestCase):

    def test_negative_rule_follows_label_rule(self):
        sheet = build_row_stylesheet("#0f172a")
        label_rule = sheet.index("QLabel {")
        negative_rule = sheet.index('QLabel#score[negative="true"]')
        self.assertLess(label_rule, negative_rule)
        self.assertIn(THEMES[DEFAULT_THEME]["negative_score"], sheet[negative_rule:])

    def test_text_color_tracks_background(self):
        t = THEMES[DEFAULT_THEME]
        self.assertIn(f"QLabel {{ color: {t['text']}; }}", build_row_stylesheet("#0f172a"))
        self.assertIn(f"QLabel {{ color: {t['text_dark']}; }}", build_row_stylesheet("#ffffff"))


class TestCounterRowRendering(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.qapp = QApplication.instance() or QApplication([])

    def _score_color(self, score):
        host = QWidget()
        host.setStyleSheet(build_stylesheet(DEFAULT_THEME))
        layout = QVBoxLayout(host)
        blueprint = UIBlueprint.compute(DEFAULT_THEME, THEMES[DEFAULT_THEME], SIZES[DEFAULT_SIZE], "Segoe UI")
        counter = Counter(id="a", name="Ann", score=score, color="#0f172a")
        container, widgets = RowFactory.counter(blueprint, counter, 1, 120, lambda _id: None, lambda _id: None)
        layout.addWidget(container)
        widgets["score"].ensurePolished()
        color = widgets["score"].palette().color(QPalette.WindowText).name()
        host.deleteLater()
        return color

    def test_negative_score_uses_negative_color(self):
        self.assertEqual(self._score_color(-3), THEMES[DEFAULT_THEME]["negative_score"])

    def test_positive_score_uses_row_text_color(self):
        self.assertEqual(self._score_color(3), THEMES[DEFAULT_THEME]["text"])


if __name__ == "__main__":
    unittest.main()
