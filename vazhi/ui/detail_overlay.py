"""In-window milestone detail panel."""

from __future__ import annotations

from typing import List, Optional

from PySide6.QtCore import Qt, QUrl, Signal
from PySide6.QtGui import QColor, QDesktopServices
from PySide6.QtWidgets import (
    QFrame,
    QGraphicsDropShadowEffect,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QScrollArea,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from vazhi.core.paths import Milestone, Resource
from vazhi.ui.colors import DARK, Palette, accent_or_default, resource_icon, rgba


class MilestoneDetailOverlay(QWidget):
    """Detail panel over a dimmed backdrop. A click on the backdrop closes it."""

    close_requested = Signal()
    toggle_requested = Signal()

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._palette = DARK
        self._accent = accent_or_default("")
        self._resource_buttons: List[QPushButton] = []

        main_layout = QGridLayout(self)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)
        main_layout.setRowStretch(0, 1)
        main_layout.setColumnStretch(0, 1)

        self._backdrop = QWidget(self)
        self._backdrop.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self._backdrop.setMinimumSize(1, 1)
        self._backdrop.mousePressEvent = lambda _e: self.close_requested.emit()
        main_layout.addWidget(self._backdrop, 0, 0)

        self._panel = QFrame(self)
        self._panel.setObjectName("detailPanel")
        self._panel.setMinimumWidth(420)
        self._panel.setMaximumWidth(520)
        shadow = QGraphicsDropShadowEffect(self._panel)
        shadow.setBlurRadius(24)
        shadow.setOffset(0, 8)
        shadow.setColor(QColor(0, 0, 0, 90))
        self._panel.setGraphicsEffect(shadow)

        panel_layout = QVBoxLayout(self._panel)
        panel_layout.setContentsMargins(28, 24, 28, 24)
        panel_layout.setSpacing(16)

        header = QHBoxLayout()
        self._title = QLabel("")
        self._title.setObjectName("detailTitle")
        self._title.setWordWrap(True)
        close_btn = QPushButton("✕")
        close_btn.setObjectName("detailClose")
        close_btn.setCursor(Qt.PointingHandCursor)
        close_btn.setFixedSize(32, 32)
        close_btn.clicked.connect(self.close_requested)
        header.addWidget(self._title, 1)
        header.addWidget(close_btn, 0, Qt.AlignTop)
        panel_layout.addLayout(header)

        self._description = QLabel("")
        self._description.setObjectName("detailDescription")
        self._description.setWordWrap(True)
        panel_layout.addWidget(self._description)

        meta = QHBoxLayout()
        self._days_badge = QLabel("")
        self._days_badge.setObjectName("detailBadge")
        self._resources_badge = QLabel("")
        self._resources_badge.setObjectName("detailBadge")
        meta.addWidget(self._days_badge)
        meta.addWidget(self._resources_badge)
        meta.addStretch(1)
        panel_layout.addLayout(meta)

        self._toggle_btn = QPushButton("")
        self._toggle_btn.setObjectName("detailToggle")
        self._toggle_btn.setCursor(Qt.PointingHandCursor)
        self._toggle_btn.clicked.connect(self.toggle_requested)
        panel_layout.addWidget(self._toggle_btn)

        resources_title = QLabel("Learning Resources")
        resources_title.setObjectName("detailSection")
        panel_layout.addWidget(resources_title)

        resources_host = QWidget()
        self._resources_layout = QVBoxLayout(resources_host)
        self._resources_layout.setContentsMargins(0, 0, 0, 0)
        self._resources_layout.setSpacing(8)
        self._resources_layout.addStretch(1)
        scroll = QScrollArea()
        scroll.setObjectName("detailResources")
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QFrame.NoFrame)
        scroll.setWidget(resources_host)
        panel_layout.addWidget(scroll, 1)

        main_layout.addWidget(self._panel, 0, 0, Qt.AlignmentFlag.AlignCenter)
        self.hide()

    def set_milestone(self, milestone: Milestone, completed: bool, color: str, palette: Palette) -> None:
        self._palette = palette
        self._accent = accent_or_default(color)
        self._title.setText(milestone.title)
        self._description.setText(milestone.description)
        self._days_badge.setText(f"📅 {milestone.estimated_days} days")
        self._resources_badge.setText(f"📚 {len(milestone.resources)} resources")
        self._toggle_btn.setText("✓ Completed" if completed else "Mark as Complete")
        self._set_resources(milestone.resources)
        self._apply_styles(completed)

    def _set_resources(self, resources) -> None:
        for button in self._resource_buttons:
            self._resources_layout.removeWidget(button)
            button.deleteLater()
        self._resource_buttons = []
        for resource in resources:
            button = QPushButton(f"{resource_icon(resource.type)}  {resource.title}   ·  {resource.type}")
            button.setObjectName("detailResource")
            button.setCursor(Qt.PointingHandCursor)
            button.setToolTip(resource.url)
            button.clicked.connect(lambda _checked=False, r=resource: self._open(r))
            self._resources_layout.insertWidget(self._resources_layout.count() - 1, button)
            self._resource_buttons.append(button)

    def _open(self, resource: Resource) -> None:
        QDesktopServices.openUrl(QUrl(resource.url))

    def _apply_styles(self, completed: bool) -> None:
        p = self._palette
        toggle_bg = self._accent if completed else "transparent"
        toggle_fg = "#ffffff" if completed else self._accent
        self._backdrop.setStyleSheet(f"background: {p.overlay_bg};")
        self._panel.setStyleSheet(
            f"""
            QFrame#detailPanel {{
                background: {p.panel_bg};
                border: 1px solid {p.card_border};
                border-radius: 20px;
            }}
            QLabel#detailTitle {{
                color: {p.text_primary};
                font-size: 20px;
                font-weight: 800;
            }}
            QPushButton#detailClose {{
                background: transparent;
                color: {p.text_muted};
                border: none;
                font-size: 18px;
            }}
            QLabel#detailDescription {{
                color: {p.text_secondary};
                font-size: 13px;
            }}
            QLabel#detailBadge {{
                color: {p.text_secondary};
                background: {rgba(self._accent, 0.12)};
                border-radius: 8px;
                padding: 4px 10px;
            }}
            QPushButton#detailToggle {{
                background: {toggle_bg};
                color: {toggle_fg};
                border: 2px solid {self._accent};
                border-radius: 12px;
                padding: 10px 16px;
                font-weight: 700;
            }}
            QLabel#detailSection {{
                color: {p.text_primary};
                font-size: 14px;
                font-weight: 700;
            }}
            QScrollArea#detailResources {{
                background: transparent;
            }}
            QPushButton#detailResource {{
                text-align: left;
                background: {p.card_bg};
                color: {p.text_primary};
                border: 1px solid {p.card_border};
                border-radius: 10px;
                padding: 10px 12px;
            }}
            QPushButton#detailResource:hover {{
                border-color: {self._accent};
            }}
            """
        )
