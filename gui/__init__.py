# GUI package

from .main_window import MainWindow
from .gui_utils import GuiUtils
from .popup_windows import (
    CreateProjectWindow,
    SettingsWindow,
    ProjectListWindow,
)

__all__ = [
    "MainWindow",
    "GuiUtils",
    "CreateProjectWindow",
    "SettingsWindow",
    "ProjectListWindow",
]
