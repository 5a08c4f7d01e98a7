from __future__ import annotations

from typing import List, Optional, Tuple

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QKeyEvent
from PySide6.QtWidgets import (
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QProgressBar,
    QPushButton,
    QScrollArea,
    QFrame,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from vazhi.core.navigation import CLOSE_DETAIL, SEARCH, Navigator, Screen
from vazhi.ui.colors import Palette, accent_or_default, palette_for, path_icon, rgba
from vazhi.ui.detail_overlay import MilestoneDetailOverlay
from vazhi.ui.path_cards import GradientBackground, PathCard
from vazhi.ui.roadmap_widget import MilestoneMap

APP_TITLE = "Vazhi"
_GRID_COLUMNS = 3


class MainWindow(QMainWindow):
    """Welcome, catalog and roadmap screens plus the milestone detail overlay.

    The window holds no state of its own beyond widgets: every redraw reads
    the navigator, and every click is forwarded to it.
    """

    def __init__(self, navigator: Navigator) -> None:
        super().__init__()
        self._nav = navigator
        self._theme: Optional[str] = None
        self._catalog_key: Optional[Tuple] = None
        self._cards: List[PathCard] = []

        self._root: Optional[GradientBackground] = None
        self._stack: Optional[QStackedWidget] = None
        self._welcome_screen: Optional[QWidget] = None
        self._catalog_screen: Optional[QWidget] = None
        self._roadmap_screen: Optional[QWidget] = None
        self._theme_button: Optional[QPushButton] = None
        self._search_input: Optional[QLineEdit] = None
        self._back_button: Optional[QPushButton] = None
        self._cards_layout: Optional[QGridLayout] = None
        self._empty_label: Optional[QLabel] = None
        self._path_icon_label: Optional[QLabel] = None
        self._path_title_label: Optional[QLabel] = None
        self._path_subtitle_label: Optional[QLabel] = None
        self._percent_label: Optional[QLabel] = None
        self._days_label: Optional[QLabel] = None
        self._milestones_label: Optional[QLabel] = None
        self._progress_bar: Optional[QProgressBar] = None
        self._milestone_map: Optional[MilestoneMap] = None
        self._overlay: Optional[MilestoneDetailOverlay] = None

        self.setWindowTitle(APP_TITLE)
        self._build_ui()
        self._nav.add_listener(self._render)
        self._render()
        QTimer.singleShot(0, self.showMaximized)

    def _build_ui(self) -> None:
        self._root = GradientBackground()
        self.setCentralWidget(self._root)
        root_layout = QVBoxLayout(self._root)
        root_layout.setContentsMargins(32, 20, 32, 20)
        root_layout.setSpacing(16)

        top_bar = QHBoxLayout()
        brand = QLabel(f"⚡ {APP_TITLE.upper()}")
        brand.setObjectName("brand")
        top_bar.addWidget(brand)
        top_bar.addStretch(1)

        self._search_input = QLineEdit()
        self._search_input.setObjectName("searchInput")
        self._search_input.setPlaceholderText("Search career paths...")
        self._search_input.setClearButtonEnabled(True)
        self._search_input.setMinimumWidth(320)
        self._search_input.textChanged.connect(self._on_search_changed)
        top_bar.addWidget(self._search_input)

        self._back_button = QPushButton("← Back to Paths")
        self._back_button.setObjectName("secondaryButton")
        self._back_button.setCursor(Qt.PointingHandCursor)
        self._back_button.clicked.connect(self._nav.back)
        top_bar.addWidget(self._back_button)

        self._theme_button = QPushButton("")
        self._theme_button.setObjectName("themeButton")
        self._theme_button.setCursor(Qt.PointingHandCursor)
        self._theme_button.setFixedSize(40, 40)
        self._theme_button.clicked.connect(self._nav.toggle_theme)
        top_bar.addWidget(self._theme_button)
        root_layout.addLayout(top_bar)

        self._stack = QStackedWidget()
        self._welcome_screen = self._build_welcome_screen()
        self._catalog_screen = self._build_catalog_screen()
        self._roadmap_screen = self._build_roadmap_screen()
        for screen in (self._welcome_screen, self._catalog_screen, self._roadmap_screen):
            self._stack.addWidget(screen)
        root_layout.addWidget(self._stack, 1)

        self._overlay = MilestoneDetailOverlay(self._root)
        self._overlay.close_requested.connect(self._close_detail)
        self._overlay.toggle_requested.connect(self._nav.toggle_selected)

    def _build_welcome_screen(self) -> QWidget:
        screen = QWidget()
        layout = QVBoxLayout(screen)
        layout.addStretch(1)

        logo = QLabel("⚡")
        logo.setObjectName("welcomeLogo")
        logo.setAlignment(Qt.AlignCenter)
        title = QLabel(APP_TITLE.upper())
        title.setObjectName("welcomeTitle")
        title.setAlignment(Qt.AlignCenter)
        subtitle = QLabel("Your Interactive Career Journey Starts Here")
        subtitle.setObjectName("welcomeSubtitle")
        subtitle.setAlignment(Qt.AlignCenter)
        description = QLabel(
            "Choose your path, unlock milestones, and level up your engineering career "
            "with curated resources and visual progress tracking"
        )
        description.setObjectName("welcomeDescription")
        description.setAlignment(Qt.AlignCenter)
        description.setWordWrap(True)
        description.setMaximumWidth(560)

        explore = QPushButton("Explore Career Paths  ›")
        explore.setObjectName("primaryButton")
        explore.setCursor(Qt.PointingHandCursor)
        explore.clicked.connect(self._nav.explore)

        for widget in (logo, title, subtitle, description):
            layout.addWidget(widget, 0, Qt.AlignHCenter)
        layout.addSpacing(24)
        layout.addWidget(explore, 0, Qt.AlignHCenter)
        layout.addStretch(1)
        return screen

    def _build_catalog_screen(self) -> QWidget:
        host = QWidget()
        host.setObjectName("transparentHost")
        self._cards_layout = QGridLayout(host)
        self._cards_layout.setContentsMargins(0, 0, 0, 0)
        self._cards_layout.setSpacing(20)

        self._empty_label = QLabel("No career paths found")
        self._empty_label.setObjectName("emptyLabel")
        self._empty_label.setAlignment(Qt.AlignCenter)

        scroll = QScrollArea()
        scroll.setObjectName("transparentScroll")
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QFrame.NoFrame)
        scroll.setWidget(host)

        screen = QWidget()
        layout = QVBoxLayout(screen)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self._empty_label)
        layout.addWidget(scroll, 1)
        return screen

    def _build_roadmap_screen(self) -> QWidget:
        header = QFrame()
        header.setObjectName("progressHeader")
        header_layout = QHBoxLayout(header)
        header_layout.setContentsMargins(20, 16, 20, 16)
        header_layout.setSpacing(16)

        self._path_icon_label = QLabel("")
        self._path_icon_label.setObjectName("pathIconLarge")
        self._path_icon_label.setAlignment(Qt.AlignCenter)
        self._path_icon_label.setFixedSize(64, 64)
        header_layout.addWidget(self._path_icon_label)

        info = QVBoxLayout()
        self._path_title_label = QLabel("")
        self._path_title_label.setObjectName("pathTitle")
        self._path_subtitle_label = QLabel("")
        self._path_subtitle_label.setObjectName("pathSubtitle")
        self._path_subtitle_label.setWordWrap(True)
        info.addWidget(self._path_title_label)
        info.addWidget(self._path_subtitle_label)
        header_layout.addLayout(info, 1)

        def _stat(caption: str) -> QLabel:
            column = QVBoxLayout()
            value = QLabel("")
            value.setObjectName("statValue")
            value.setAlignment(Qt.AlignCenter)
            label = QLabel(caption)
            label.setObjectName("statLabel")
            label.setAlignment(Qt.AlignCenter)
            column.addWidget(value)
            column.addWidget(label)
            header_layout.addLayout(column)
            return value

        self._percent_label = _stat("Complete")
        self._days_label = _stat("Days")
        self._milestones_label = _stat("Milestones")

        self._progress_bar = QProgressBar()
        self._progress_bar.setObjectName("pathProgress")
        self._progress_bar.setRange(0, 100)
        self._progress_bar.setTextVisible(False)
        self._progress_bar.setFixedHeight(10)

        self._milestone_map = MilestoneMap(on_select=self._nav.select_milestone)
        map_host = QWidget()
        map_host.setObjectName("transparentHost")
        map_layout = QVBoxLayout(map_host)
        map_layout.setContentsMargins(0, 0, 0, 0)
        map_layout.addWidget(self._milestone_map)
        map_layout.addStretch(1)
        scroll = QScrollArea()
        scroll.setObjectName("transparentScroll")
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QFrame.NoFrame)
        scroll.setWidget(map_host)

        screen = QWidget()
        layout = QVBoxLayout(screen)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(16)
        layout.addWidget(header)
        layout.addWidget(self._progress_bar)
        layout.addWidget(scroll, 1)
        return screen

    def _on_search_changed(self, text: str) -> None:
        if SEARCH in self._nav.available_actions():
            self._nav.set_search(text)

    def _close_detail(self) -> None:
        if CLOSE_DETAIL in self._nav.available_actions():
            self._nav.close_detail()

    def keyPressEvent(self, event: QKeyEvent) -> None:
        if event.key() == Qt.Key_Escape and self._nav.state.detail_open:
            self._close_detail()
            return
        super().keyPressEvent(event)

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        if self._overlay is not None and self._root is not None:
            self._overlay.setGeometry(self._root.rect())

    def _render(self) -> None:
        state = self._nav.state
        palette = palette_for(state.theme)
        if state.theme != self._theme:
            self._theme = state.theme
            self._apply_theme(palette)

        screens = {
            Screen.WELCOME: self._welcome_screen,
            Screen.CATALOG: self._catalog_screen,
            Screen.ROADMAP: self._roadmap_screen,
        }
        self._stack.setCurrentWidget(screens[state.screen])
        self._search_input.setVisible(state.screen is Screen.CATALOG)
        self._back_button.setVisible(state.screen is Screen.ROADMAP)

        if state.screen is Screen.CATALOG:
            self._render_catalog(palette)
        if state.screen is Screen.ROADMAP:
            self._render_roadmap(palette)
        self._render_detail(palette)

    def _render_catalog(self, palette: Palette) -> None:
        paths = self._nav.visible_paths()
        key = (tuple(p.id for p in paths), self._theme)
        if key == self._catalog_key:
            return
        self._catalog_key = key
        for card in self._cards:
            self._cards_layout.removeWidget(card)
            card.deleteLater()
        self._cards = []
        for i, path in enumerate(paths):
            card = PathCard(path, palette=palette, on_click=self._nav.select_path)
            self._cards_layout.addWidget(card, i // _GRID_COLUMNS, i % _GRID_COLUMNS)
            self._cards.append(card)
        self._empty_label.setVisible(not paths)

    def _render_roadmap(self, palette: Palette) -> None:
        path = self._nav.state.selected_path
        if path is None:
            return
        accent = accent_or_default(path.color)
        view = self._nav.roadmap()
        self._path_icon_label.setText(path_icon(path.icon))
        self._path_icon_label.setStyleSheet(
            f"background: {rgba(accent, 0.12)}; border-radius: 16px; font-size: 32px;"
        )
        self._path_title_label.setText(path.name)
        self._path_subtitle_label.setText(path.description)
        self._percent_label.setText(f"{view.percent}%")
        self._days_label.setText(f"{view.completed_days}/{view.total_days}")
        self._milestones_label.setText(f"{view.completed_milestones}/{view.total_milestones}")
        self._progress_bar.setValue(view.percent)
        self._progress_bar.setStyleSheet(
            f"""
            QProgressBar#pathProgress {{
                border: none;
                border-radius: 5px;
                background: {palette.progress_track};
            }}
            QProgressBar#pathProgress::chunk {{
                border-radius: 5px;
                background: {accent};
            }}
            """
        )
        self._milestone_map.set_view(view, accent, palette)

    def _render_detail(self, palette: Palette) -> None:
        state = self._nav.state
        if not state.detail_open:
            self._overlay.hide()
            return
        self._overlay.set_milestone(
            state.selected_milestone,
            self._nav.selected_milestone_completed(),
            state.selected_path.color,
            palette,
        )
        self._overlay.setGeometry(self._root.rect())
        self._overlay.show()
        self._overlay.raise_()

    def _apply_theme(self, palette: Palette) -> None:
        self._root.set_palette(palette)
        self._theme_button.setText("☀" if self._theme == "dark" else "☾")
        self._root.setStyleSheet(
            f"""
            QLabel#brand {{
                color: {palette.text_primary};
                font-size: 20px;
                font-weight: 900;
            }}
            QLabel#welcomeLogo {{
                color: {palette.accent};
                font-size: 72px;
            }}
            QLabel#welcomeTitle {{
                color: {palette.text_primary};
                font-size: 48px;
                font-weight: 900;
            }}
            QLabel#welcomeSubtitle {{
                color: {palette.accent};
                font-size: 20px;
                font-weight: 700;
            }}
            QLabel#welcomeDescription, QLabel#emptyLabel {{
                color: {palette.text_secondary};
                font-size: 14px;
            }}
            QPushButton#primaryButton {{
                background: {palette.accent};
                color: #ffffff;
                border: none;
                border-radius: 14px;
                padding: 14px 28px;
                font-size: 15px;
                font-weight: 800;
            }}
            QPushButton#secondaryButton, QPushButton#themeButton {{
                background: {palette.card_bg};
                color: {palette.text_primary};
                border: 1px solid {palette.card_border};
                border-radius: 12px;
                padding: 8px 14px;
                font-weight: 700;
            }}
            QLineEdit#searchInput {{
                background: {palette.card_bg};
                color: {palette.text_primary};
                border: 1px solid {palette.card_border};
                border-radius: 12px;
                padding: 8px 12px;
            }}
            QWidget#transparentHost, QScrollArea#transparentScroll {{
                background: transparent;
            }}
            QFrame#progressHeader {{
                background: {palette.card_bg};
                border: 1px solid {palette.card_border};
                border-radius: 16px;
            }}
            QLabel#pathTitle {{
                color: {palette.text_primary};
                font-size: 22px;
                font-weight: 800;
            }}
            QLabel#pathSubtitle, QLabel#statLabel {{
                color: {palette.text_muted};
                font-size: 12px;
            }}
            QLabel#statValue {{
                color: {palette.text_primary};
                font-size: 22px;
                font-weight: 900;
            }}
            """
        )
