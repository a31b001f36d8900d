"""Allow running MultiTimer as a module: python -m multitimer."""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from .app import MultiTimerApp, make_app_icon
from .settings import load_settings


def configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), None)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)

    app = QApplication(sys.argv)
    app.setApplicationName("MultiTimer")
    app.setOrganizationName("MultiTimer")
    app.setWindowIcon(make_app_icon(False))
    # Keep ticking while hidden in the tray
    app.setQuitOnLastWindowClosed(not settings.minimize_to_tray)

    window = MultiTimerApp(settings)
    window.show()
    logging.getLogger(__name__).info("MultiTimer ready")

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
