"""Catalog UI: gradient background and clickable career path cards."""

from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import Qt, QPoint
from PySide6.QtGui import QColor, QLinearGradient, QPainter, QRadialGradient
from PySide6.QtWidgets import (
    QFrame,
    QGraphicsDropShadowEffect,
    QHBoxLayout,
    QLabel,
    QVBoxLayout,
    QWidget,
)

from vazhi.core.paths import CareerPath
from vazhi.ui.colors import DARK, Palette, accent_or_default, blend_hex, path_icon, rgba


class GradientBackground(QWidget):
    """Diagonal gradient with two soft glows, repainted on theme change."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._palette = DARK
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)

    def set_palette(self, palette: Palette) -> None:
        self._palette = palette
        self.update()

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)

        gradient = QLinearGradient(0, 0, self.width(), self.height())
        gradient.setColorAt(0.0, QColor(self._palette.bg_top))
        gradient.setColorAt(1.0, QColor(self._palette.bg_bottom))
        painter.fillRect(self.rect(), gradient)

        painter.setPen(Qt.NoPen)
        for x_ratio, y_ratio, radius in ((0.85, 0.15, 220), (0.12, 0.82, 170)):
            center = QPoint(int(self.width() * x_ratio), int(self.height() * y_ratio))
            glow = QRadialGradient(self.width() * x_ratio, self.height() * y_ratio, radius)
            glow.setColorAt(0, QColor(255, 255, 255, 40))
            glow.setColorAt(1, QColor(255, 255, 255, 0))
            painter.setBrush(glow)
            painter.drawEllipse(center, radius, radius)


class PathCard(QFrame):
    """A clickable card for one career path: icon, name, description and badges."""

    def __init__(
        self,
        path: CareerPath,
        *,
        palette: Palette,
        on_click: Callable[[CareerPath], None],
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._path = path
        self._on_click = on_click
        self._accent = accent_or_default(path.color)

        self.setObjectName("pathCard")
        self.setCursor(Qt.PointingHandCursor)
        self.setMinimumSize(260, 220)

        icon = QLabel(path_icon(path.icon))
        icon.setObjectName("pathCardIcon")
        icon.setAlignment(Qt.AlignCenter)
        icon.setFixedSize(56, 56)

        name = QLabel(path.name)
        name.setObjectName("pathCardName")
        name.setWordWrap(True)

        description = QLabel(path.description)
        description.setObjectName("pathCardDescription")
        description.setWordWrap(True)

        badges = QHBoxLayout()
        badges.setSpacing(8)
        for text in (f"{path.milestone_count} Milestones", f"{path.total_days} Days"):
            badge = QLabel(text)
            badge.setObjectName("pathCardBadge")
            badges.addWidget(badge)
        badges.addStretch(1)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 20, 20, 20)
        layout.setSpacing(10)
        layout.addWidget(icon, 0, Qt.AlignLeft)
        layout.addWidget(name)
        layout.addWidget(description, 1)
        layout.addLayout(badges)

        shadow = QGraphicsDropShadowEffect(self)
        shadow.setBlurRadius(24)
        shadow.setOffset(0, 8)
        shadow.setColor(QColor(15, 23, 42, 80))
        self.setGraphicsEffect(shadow)

        self.apply_palette(palette)

    def apply_palette(self, palette: Palette) -> None:
        hover = blend_hex(self._accent, "#FFFFFF", 0.25)
        self.setStyleSheet(
            f"""
            QFrame#pathCard {{
                background: {palette.card_bg};
                border: 1px solid {palette.card_border};
                border-top: 4px solid {self._accent};
                border-radius: 16px;
            }}
            QFrame#pathCard:hover {{
                border: 1px solid {hover};
                border-top: 4px solid {hover};
            }}
            QLabel#pathCardIcon {{
                background: {rgba(self._accent, 0.12)};
                border-radius: 14px;
                font-size: 28px;
            }}
            QLabel#pathCardName {{
                color: {palette.text_primary};
                font-size: 18px;
                font-weight: 800;
            }}
            QLabel#pathCardDescription {{
                color: {palette.text_secondary};
                font-size: 13px;
            }}
            QLabel#pathCardBadge {{
                color: {self._accent};
                background: {rgba(self._accent, 0.12)};
                border-radius: 10px;
                padding: 4px 10px;
                font-size: 12px;
                font-weight: 700;
            }}
            """
        )

    def mousePressEvent(self, event) -> None:
        if event.button() == Qt.LeftButton:
            self._on_click(self._path)
        super().mousePressEvent(event)
