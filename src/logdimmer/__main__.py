"""Main entry point for the LogDimmer application."""

import logging
import sys
from pathlib import Path

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QApplication

from logdimmer.logging_config import configure_logging
from logdimmer.main_window import MainWindow


def main() -> int:
    """Run the LogDimmer application.

    Files given on the command line are opened in tabs.

    Returns:
        Exit code
    """
    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    configure_logging()

    logger = logging.getLogger(__name__)
    logger.info("Starting LogDimmer application")

    app = QApplication(sys.argv)
    app.setApplicationName("LogDimmer")
    app.setOrganizationName("LogDimmer")

    window = MainWindow()
    for argument in app.arguments()[1:]:
        window.open_file(Path(argument))
    window.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
