"""Application entry point and setup for the Vazhi career roadmap browser."""

import logging
import sys

from PySide6.QtWidgets import QApplication

from vazhi.core.config import load_settings
from vazhi.core.navigation import Navigator
from vazhi.core.paths import PathCatalog
from vazhi.core.progress import ProgressTracker
from vazhi.ui.http_client import QtHttpBackend
from vazhi.ui.main_window import APP_TITLE, MainWindow


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def run() -> None:
    """Read settings, wire the backend into the navigator and start the main window."""
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName(APP_TITLE)
    app.setApplicationDisplayName(APP_TITLE)

    settings = load_settings()
    logging.info("Using backend %s as user %s", settings.base_url, settings.user_id)

    backend = QtHttpBackend(settings.base_url)
    catalog = PathCatalog(backend)
    tracker = ProgressTracker(backend, settings.user_id)
    navigator = Navigator(catalog, tracker, theme=settings.theme)

    window = MainWindow(navigator)
    window.show()
    catalog.load()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
