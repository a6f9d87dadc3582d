"""
Application Initialization
==========================
This module constructs the MVC (Model-View-Controller) architecture and starts
the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Instantiates the simulation owner (LabSession).
2. Instantiates the assistant gateway from the environment.
3. Instantiates the Main Window (View) and passes both in.
4. Prevents circular import errors by being the orchestrator.
"""
import logging
import sys
from PySide6.QtWidgets import QApplication

from condenserlab.config import GatewaySettings
from condenserlab.controller.gateway import AssistantGateway
from condenserlab.controller.session import LabSession
from condenserlab.logging_config import setup_logging_from_env
from condenserlab.view.main_window import MainWindow

logger = logging.getLogger(__name__)


def main() -> None:
    # 1. Setup Logging (CONDENSERLAB_LOG_LEVEL / CONDENSERLAB_LOG_FILE)
    setup_logging_from_env()

    # 2. Create the Qt Application
    app = QApplication(sys.argv)
    app.setApplicationName("Condenser Lab")

    # 3. Initialize the simulation and the assistant
    session = LabSession()
    settings = GatewaySettings.from_env()
    if not settings.has_credentials:
        logger.warning("API_KEY is not set; the lab assistant will answer with a fallback message.")
    gateway = AssistantGateway(settings)

    # 4. Initialize the Main Window, passing the model
    window = MainWindow(session, gateway)
    window.show()

    # 5. Start Event Loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
