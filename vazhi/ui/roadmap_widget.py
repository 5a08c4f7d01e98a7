"""Roadmap UI: the connecting curve and the list of milestone checkpoints."""

from __future__ import annotations

from typing import Callable, List, Optional

from PySide6.QtCore import Qt, QPointF
from PySide6.QtGui import QColor, QPainter, QPainterPath, QPen
from PySide6.QtWidgets import QFrame, QHBoxLayout, QLabel, QVBoxLayout, QWidget

from vazhi.core.roadmap import BASE_LENGTH, MilestoneNode, RoadmapView
from vazhi.ui.colors import DARK, Palette, accent_or_default, rgba

# Control points of the S-curve in a 100 x 600 box
_CURVE = (
    ((50, 0), (80, 100), (50, 200)),
    ((50, 200), (20, 300), (50, 400)),
    ((50, 400), (80, 500), (50, 600)),
)
_SAMPLES = 120


class PathCurve(QWidget):
    """Vertical S-curve whose filled part tracks the path fill offset."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._fill_offset = BASE_LENGTH
        self._color = QColor(DARK.accent)
        self._track = QColor(DARK.progress_track)
        self.setFixedWidth(64)

    def set_state(self, fill_offset: int, color: str, track: str) -> None:
        self._fill_offset = fill_offset
        self._color = QColor(color)
        self._track = QColor(track)
        self.update()

    def _curve(self) -> QPainterPath:
        sx = self.width() / 100.0
        sy = max(1, self.height()) / 600.0
        path = QPainterPath(QPointF(_CURVE[0][0][0] * sx, 0))
        for _start, ctrl, end in _CURVE:
            path.quadTo(QPointF(ctrl[0] * sx, ctrl[1] * sy), QPointF(end[0] * sx, end[1] * sy))
        return path

    def paintEvent(self, event) -> None:
        super().paintEvent(event)
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        curve = self._curve()

        painter.setPen(QPen(self._track, 6, Qt.SolidLine, Qt.RoundCap))
        painter.drawPath(curve)

        filled = max(0.0, min(1.0, (BASE_LENGTH - self._fill_offset) / float(BASE_LENGTH)))
        if filled <= 0.0:
            return
        steps = max(2, int(_SAMPLES * filled))
        fill = QPainterPath(curve.pointAtPercent(0.0))
        for i in range(1, steps + 1):
            fill.lineTo(curve.pointAtPercent(filled * i / steps))
        painter.setPen(QPen(self._color, 6, Qt.SolidLine, Qt.RoundCap))
        painter.drawPath(fill)


class MilestoneRow(QFrame):
    """One checkpoint: numbered (or checked) badge, title, description and badges."""

    def __init__(
        self,
        node: MilestoneNode,
        *,
        accent: str,
        palette: Palette,
        on_click: Callable[[str], None],
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._milestone_id = node.milestone.id
        self._on_click = on_click
        self.setObjectName("milestoneRow")
        self.setCursor(Qt.PointingHandCursor)

        checkpoint = QLabel(node.label)
        checkpoint.setObjectName("milestoneCheckpoint")
        checkpoint.setAlignment(Qt.AlignCenter)
        checkpoint.setFixedSize(44, 44)

        title = QLabel(node.milestone.title)
        title.setObjectName("milestoneTitle")
        title.setWordWrap(True)

        description = QLabel(node.milestone.description)
        description.setObjectName("milestoneDescription")
        description.setWordWrap(True)

        footer = QHBoxLayout()
        footer.setSpacing(8)
        for text in (
            f"{node.milestone.estimated_days} days",
            f"{len(node.milestone.resources)} resources",
        ):
            badge = QLabel(text)
            badge.setObjectName("milestoneBadge")
            footer.addWidget(badge)
        footer.addStretch(1)

        content = QVBoxLayout()
        content.setSpacing(6)
        content.addWidget(title)
        content.addWidget(description)
        content.addLayout(footer)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(16, 14, 16, 14)
        layout.setSpacing(16)
        layout.addWidget(checkpoint, 0, Qt.AlignTop)
        layout.addLayout(content, 1)

        border = accent if node.active else palette.card_border
        checkpoint_bg = accent if node.completed else rgba(accent, 0.15)
        checkpoint_fg = "#ffffff" if node.completed else accent
        self.setStyleSheet(
            f"""
            QFrame#milestoneRow {{
                background: {palette.card_bg};
                border: {2 if node.active else 1}px solid {border};
                border-radius: 14px;
            }}
            QFrame#milestoneRow:hover {{
                border: 2px solid {accent};
            }}
            QLabel#milestoneCheckpoint {{
                background: {checkpoint_bg};
                color: {checkpoint_fg};
                border: 2px solid {accent};
                border-radius: 22px;
                font-size: 16px;
                font-weight: 900;
            }}
            QLabel#milestoneTitle {{
                color: {palette.text_primary};
                font-size: 15px;
                font-weight: 800;
            }}
            QLabel#milestoneDescription {{
                color: {palette.text_secondary};
                font-size: 12px;
            }}
            QLabel#milestoneBadge {{
                color: {palette.text_muted};
                background: {rgba(accent, 0.10)};
                border-radius: 8px;
                padding: 2px 8px;
                font-size: 11px;
            }}
            """
        )

    def mousePressEvent(self, event) -> None:
        if event.button() == Qt.LeftButton:
            self._on_click(self._milestone_id)
        super().mousePressEvent(event)


class MilestoneMap(QWidget):
    """Curve on the left, checkpoints on the right, rebuilt from a RoadmapView."""

    def __init__(self, on_select: Callable[[str], None], parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._on_select = on_select
        self._rows: List[MilestoneRow] = []

        self._curve = PathCurve()
        self._list_layout = QVBoxLayout()
        self._list_layout.setSpacing(14)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(12)
        layout.addWidget(self._curve)
        layout.addLayout(self._list_layout, 1)

    def set_view(self, view: RoadmapView, color: str, palette: Palette) -> None:
        accent = accent_or_default(color)
        self._curve.set_state(view.fill_offset, accent, palette.progress_track)
        for row in self._rows:
            self._list_layout.removeWidget(row)
            row.deleteLater()
        self._rows = []
        for node in view.nodes:
            row = MilestoneRow(node, accent=accent, palette=palette, on_click=self._on_select)
            self._list_layout.addWidget(row)
            self._rows.append(row)
