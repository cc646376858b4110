"""
Main Window GUI Components for the Quick Folder Launcher
"""

import tkinter as tk
from tkinter import messagebox, filedialog
from typing import Optional, Callable, Dict, List

from config.config import get_gui_config
from config.templates import DEFAULT_APPLICATION_KEYS, APPLICATION_DISPLAY_NAMES
from gui.gui_utils import GuiUtils
from models.folder_record import FolderRecord

_gui = get_gui_config()
WINDOW_TITLE = _gui.window_title
MAIN_WINDOW_SIZE = _gui.main_window_size
COLORS = _gui.colors
FONTS = _gui.fonts


class MainWindow:
    """Main window GUI components and layout management"""

    def __init__(self):
        # Initialize main window
        self.window = tk.Tk()
        self.window.title(WINDOW_TITLE)
        self.window.geometry(MAIN_WINDOW_SIZE)
        self.window.configure(bg=COLORS["background"])

        # GUI components
        self.folder_list_frame = None
        self.path_var = tk.StringVar()
        self.status_label = None
        self.template_label = None

        # Callbacks for main window operations
        self.open_folder_callback = None
        self.scan_folder_callback = None
        self.scan_all_callback = None
        self.delete_folder_callback = None
        self.add_folder_callback = None
        self.launch_application_callback = None
        self.open_create_project_window_callback = None
        self.open_settings_window_callback = None

    def set_callbacks(self, callbacks: Dict[str, Callable]):
        """Set callback functions for GUI events"""
        self.open_folder_callback = callbacks.get("open_folder")
        self.scan_folder_callback = callbacks.get("scan_folder")
        self.scan_all_callback = callbacks.get("scan_all")
        self.delete_folder_callback = callbacks.get("delete_folder")
        self.add_folder_callback = callbacks.get("add_folder")
        self.launch_application_callback = callbacks.get("launch_application")
        self.open_create_project_window_callback = callbacks.get(
            "open_create_project_window"
        )
        self.open_settings_window_callback = callbacks.get("open_settings_window")

    def setup_window_protocol(self, on_close_callback: Callable):
        """Set up window close protocol"""
        self.window.protocol("WM_DELETE_WINDOW", on_close_callback)

    def create_gui(self):
        """Create the main GUI layout"""
        self._create_header()
        self._create_application_bar()
        self._create_project_section()
        self._create_add_folder_section()

        list_header = GuiUtils.create_styled_frame(self.window)
        list_header.pack(fill="x", padx=10, pady=(10, 0))
        GuiUtils.create_styled_label(
            list_header, text="Saved Folders", font_key="header", color_key="text"
        ).pack(side="left")
        GuiUtils.create_styled_button(
            list_header, text="Scan All", command=self._scan_all, style="scan"
        ).pack(side="right")

        # Create main frame with scrollbar
        main_frame = GuiUtils.create_styled_frame(self.window)
        main_frame.pack(fill=tk.BOTH, expand=True, padx=10, pady=10)
        _, self.folder_list_frame, _ = GuiUtils.create_scrollable_frame(main_frame)

        self.status_label = GuiUtils.create_styled_label(self.window, text="Ready")
        self.status_label.pack(fill="x", padx=10, pady=(0, 6))

    def _create_header(self):
        header = GuiUtils.create_styled_frame(self.window)
        header.pack(fill="x", padx=10, pady=(10, 5))

        GuiUtils.create_styled_label(
            header, text="Quick Folder Launcher", font_key="title", color_key="text"
        ).pack(side="left")

        GuiUtils.create_styled_button(
            header,
            text="Settings",
            command=self._open_settings_window,
            style="settings",
        ).pack(side="right")

    def _create_application_bar(self):
        """One launch button per application slot"""
        bar = GuiUtils.create_styled_frame(self.window)
        bar.pack(fill="x", padx=10, pady=5)

        for key in DEFAULT_APPLICATION_KEYS:
            GuiUtils.create_styled_button(
                bar,
                text=APPLICATION_DISPLAY_NAMES.get(key, key),
                command=lambda k=key: self._launch_application(k),
                style="launch",
            ).pack(side="left", padx=(0, 5), expand=True, fill="x")

    def _create_project_section(self):
        section = GuiUtils.create_styled_frame(self.window)
        section.pack(fill="x", padx=10, pady=5)

        GuiUtils.create_styled_button(
            section,
            text="Create New Project",
            command=self._open_create_project_window,
            style="primary",
            font=FONTS["button_large"],
        ).pack(side="left")

        self.template_label = GuiUtils.create_styled_label(section, text="")
        self.template_label.pack(side="left", padx=10)

    def _create_add_folder_section(self):
        section = GuiUtils.create_styled_frame(self.window)
        section.pack(fill="x", padx=10, pady=5)

        entry = GuiUtils.create_styled_entry(section, textvariable=self.path_var)
        entry.pack(side="left", fill="x", expand=True, ipady=4)
        entry.bind("<Return>", lambda e: self._add_folder())

        GuiUtils.create_styled_button(
            section, text="Browse", command=self._browse_folder, style="browse"
        ).pack(side="left", padx=(5, 0))
        GuiUtils.create_styled_button(
            section, text="Add", command=self._add_folder, style="save"
        ).pack(side="left", padx=(5, 0))

    def _browse_folder(self):
        folder = filedialog.askdirectory(parent=self.window, title="Select Folder")
        if folder:
            self.path_var.set(folder)

    def _add_folder(self):
        path = self.path_var.get().strip()
        if not path:
            messagebox.showwarning(
                "Add Folder", "Please enter a folder path or click Browse"
            )
            return
        if self.add_folder_callback:
            self.add_folder_callback(path)

    def clear_path(self):
        self.path_var.set("")

    def _scan_all(self):
        if self.scan_all_callback:
            self.scan_all_callback()

    def _launch_application(self, key: str):
        if self.launch_application_callback:
            self.launch_application_callback(key)

    def _open_create_project_window(self):
        """Handle create project button click"""
        if self.open_create_project_window_callback:
            self.open_create_project_window_callback()

    def _open_settings_window(self):
        """Handle settings button click"""
        if self.open_settings_window_callback:
            self.open_settings_window_callback()

    def set_active_template(self, display_name: str):
        if self.template_label is not None:
            self.template_label.config(text=f"Template: {display_name}")

    def update_status(self, message: str, color: Optional[str] = None):
        """Show a progress message under the folder list"""
        if self.status_label is not None:
            self.status_label.config(text=message, fg=color or COLORS["muted"])

    def populate_folders(self, folders: List[FolderRecord]):
        """Rebuild the folder list"""
        GuiUtils.clear_children(self.folder_list_frame)

        if not folders:
            GuiUtils.create_styled_label(
                self.folder_list_frame,
                text="No folders saved yet. Add a folder or create a project.",
            ).pack(pady=20)
            return

        for record in folders:
            self._create_folder_row(record)

    def _create_folder_row(self, record: FolderRecord):
        row = GuiUtils.create_styled_frame(
            self.folder_list_frame,
            bg_color="panel",
            highlightbackground=COLORS["border"],
            highlightthickness=1,
        )
        row.pack(fill="x", pady=3, padx=2)

        info = GuiUtils.create_styled_frame(row, bg_color="panel")
        info.pack(side="left", fill="x", expand=True, padx=8, pady=6)

        name_text = record.name
        if record.template:
            name_text = f"{record.name}  [{record.template}]"
        GuiUtils.create_styled_label(
            info,
            text=name_text,
            font_key="folder_name",
            color_key="text",
            bg=COLORS["panel"],
            anchor="w",
        ).pack(fill="x")
        GuiUtils.create_styled_label(
            info,
            text=record.path,
            bg=COLORS["panel"],
            anchor="w",
        ).pack(fill="x")

        buttons = GuiUtils.create_styled_frame(row, bg_color="panel")
        buttons.pack(side="right", padx=6)

        GuiUtils.create_styled_button(
            buttons,
            text="Open",
            command=lambda r=record: self.open_folder_callback(r),
            style="folder",
        ).pack(side="left", padx=2)
        GuiUtils.create_styled_button(
            buttons,
            text="Scan",
            command=lambda r=record: self.scan_folder_callback(r),
            style="scan",
        ).pack(side="left", padx=2)
        GuiUtils.create_styled_button(
            buttons,
            text="X",
            command=lambda r=record: self._confirm_delete(r),
            style="delete",
        ).pack(side="left", padx=2)

    def _confirm_delete(self, record: FolderRecord):
        if messagebox.askyesno(
            "Remove Folder",
            f"Remove '{record.name}' from the list?\n\nThe folder on disk is not deleted.",
            parent=self.window,
        ):
            if self.delete_folder_callback:
                self.delete_folder_callback(record)

    def run(self):
        """Start the GUI main loop"""
        self.window.mainloop()
