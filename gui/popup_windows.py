"""
Popup windows for creating projects, editing settings and listing scan results
"""

import tkinter as tk
from tkinter import messagebox, ttk, filedialog
from typing import Callable, Dict, List, Optional

from config.config import get_gui_config
from config.templates import (
    DEFAULT_APPLICATION_KEYS,
    APPLICATION_DISPLAY_NAMES,
    DEFAULT_PLACEHOLDER_NAME,
)
from gui.gui_utils import GuiUtils
from models.app_settings import AppSettings
from models.project import ScannedProject
from models.template import Template

_gui = get_gui_config()
COLORS = _gui.colors
FONTS = _gui.fonts
POPUP_WINDOW_SIZE = _gui.popup_window_size


def _open_modal(parent_window: tk.Tk, title: str, size: str = POPUP_WINDOW_SIZE) -> tk.Toplevel:
    """Create a centered modal Toplevel"""
    window = tk.Toplevel(parent_window)
    window.title(title)
    window.configure(bg=COLORS["background"])
    window.transient(parent_window)
    window.grab_set()
    width, height = GuiUtils.parse_geometry(size)
    GuiUtils.center_window(window, width, height)
    return window


class CreateProjectWindow:
    """A popup window for creating a project from a template"""

    def __init__(
        self,
        parent_window: tk.Tk,
        templates: List[Template],
        active_template_id: str,
        on_create_callback: Callable[[str, str, str], None],
        custom_folder: Optional[str] = None,
    ):
        self.parent_window = parent_window
        self.templates = templates
        self.active_template_id = active_template_id
        self.on_create_callback = on_create_callback
        self.custom_folder = custom_folder
        self.window = None
        self.location_var = None
        self.name_var = None
        self.template_var = None
        self.preview_label = None

    def create_window(self):
        """Create the create project window"""
        if self.window:
            return

        self.window = _open_modal(self.parent_window, "Create New Project")

        main_frame = GuiUtils.create_styled_frame(self.window)
        main_frame.pack(fill=tk.BOTH, expand=True, padx=20, pady=20)

        GuiUtils.create_styled_label(
            main_frame, text="Create New Project", font_key="header", color_key="text"
        ).pack(pady=(0, 15))

        # Location
        GuiUtils.create_styled_label(main_frame, text="Location:").pack(anchor="w")
        location_frame = GuiUtils.create_styled_frame(main_frame)
        location_frame.pack(fill="x", pady=(5, 10))
        self.location_var = tk.StringVar()
        GuiUtils.create_styled_entry(location_frame, textvariable=self.location_var).pack(
            side="left", fill="x", expand=True, ipady=3
        )
        GuiUtils.create_styled_button(
            location_frame, text="Browse", command=self._browse_location, style="browse"
        ).pack(side="right", padx=(5, 0))

        # Project name
        GuiUtils.create_styled_label(main_frame, text="Project Name:").pack(anchor="w")
        self.name_var = tk.StringVar()
        name_entry = GuiUtils.create_styled_entry(main_frame, textvariable=self.name_var)
        name_entry.pack(fill="x", pady=(5, 10), ipady=3)
        name_entry.focus()

        # Template
        GuiUtils.create_styled_label(main_frame, text="Template:").pack(anchor="w")
        self.template_var = tk.StringVar()
        names = [template.display_name for template in self.templates]
        selector = ttk.Combobox(
            main_frame,
            state="readonly",
            values=names,
            textvariable=self.template_var,
            font=FONTS["info"],
        )
        selector.pack(fill="x", pady=(5, 10))
        selector.bind("<<ComboboxSelected>>", lambda e: self._update_preview())

        active_index = next(
            (i for i, t in enumerate(self.templates) if t.id == self.active_template_id),
            0,
        )
        selector.current(active_index)

        self.preview_label = GuiUtils.create_styled_label(
            main_frame, text="", font_key="mono", justify="left", anchor="w"
        )
        self.preview_label.pack(fill="x", pady=(0, 10))
        self._update_preview()

        buttons_frame = GuiUtils.create_styled_frame(main_frame)
        buttons_frame.pack(fill="x", side="bottom")

        GuiUtils.create_styled_button(
            buttons_frame,
            text="Cancel",
            command=self._cancel,
            style="close",
            font=FONTS["button_large"],
            padx=20,
            pady=5,
        ).pack(side="right", padx=(10, 0))
        GuiUtils.create_styled_button(
            buttons_frame,
            text="Create Project",
            command=self._create_project,
            style="primary",
            font=FONTS["button_large"],
            padx=20,
            pady=5,
        ).pack(side="right")

        self.window.bind("<Return>", lambda e: self._create_project())
        self.window.bind("<Escape>", lambda e: self._cancel())

    def _selected_template(self) -> Template:
        display_name = self.template_var.get()
        return next(
            (t for t in self.templates if t.display_name == display_name),
            self.templates[0],
        )

    def _update_preview(self):
        """Show the folder tree the template creates"""
        if self.custom_folder:
            text = f"Custom template folder:\n{self.custom_folder}"
        else:
            template = self._selected_template()
            name = self.name_var.get().strip() or "ProjectName"
            lines = [f"{name}/"] + [
                f"  {entry.name}{'' if entry.is_file else '/'}"
                for entry in template.entries
            ]
            text = "\n".join(lines)
        self.preview_label.config(text=text)

    def _browse_location(self):
        folder = filedialog.askdirectory(
            parent=self.window, title="Select Project Location"
        )
        if folder:
            self.location_var.set(folder)

    def _create_project(self):
        """Handle create button click"""
        location = self.location_var.get().strip()
        project_name = self.name_var.get().strip()

        if not location:
            messagebox.showerror("Error", "Please choose a project location", parent=self.window)
            return

        if not project_name:
            messagebox.showerror("Error", "Please enter a project name", parent=self.window)
            return

        template_id = None if self.custom_folder else self._selected_template().id
        self.on_create_callback(location, project_name, template_id)
        self.destroy()

    def _cancel(self):
        """Handle cancel button click"""
        self.destroy()

    def destroy(self):
        """Clean up and destroy the window"""
        if self.window:
            self.window.destroy()
            self.window = None


class SettingsWindow:
    """A popup window for editing applications, template and folder structure"""

    def __init__(
        self,
        parent_window: tk.Tk,
        settings: AppSettings,
        templates: List[Template],
        on_save_callback: Callable[[AppSettings], None],
    ):
        self.parent_window = parent_window
        # Edit a copy so Cancel leaves the live settings untouched
        self.settings = AppSettings.from_dict(settings.to_dict())
        self.templates = templates
        self.on_save_callback = on_save_callback
        self.window = None
        self.notebook = None
        self.application_vars: Dict[str, tk.StringVar] = {}
        self.structure_vars: Dict[str, tk.BooleanVar] = {}
        self.template_var = None
        self.use_custom_var = None
        self.custom_path_var = None
        self.placeholder_var = None

    def create_window(self):
        """Create the settings window with tabbed interface"""
        if self.window:
            return

        self.window = _open_modal(self.parent_window, "Settings")

        main_frame = GuiUtils.create_styled_frame(self.window)
        main_frame.pack(fill=tk.BOTH, expand=True, padx=20, pady=20)

        GuiUtils.create_styled_label(
            main_frame, text="Settings", font_key="header", color_key="text"
        ).pack(pady=(0, 15))

        self.notebook = ttk.Notebook(main_frame)
        self.notebook.pack(fill=tk.BOTH, expand=True, pady=(0, 15))

        self._create_applications_tab()
        self._create_template_tab()
        self._create_structure_tab()

        buttons_frame = GuiUtils.create_styled_frame(main_frame)
        buttons_frame.pack(fill="x")

        GuiUtils.create_styled_button(
            buttons_frame,
            text="Cancel",
            command=self._cancel,
            style="close",
            font=FONTS["button_large"],
            padx=20,
            pady=5,
        ).pack(side="right", padx=(10, 0))
        GuiUtils.create_styled_button(
            buttons_frame,
            text="Save",
            command=self._save,
            style="save",
            font=FONTS["button_large"],
            padx=20,
            pady=5,
        ).pack(side="right")

        self.window.bind("<Escape>", lambda e: self._cancel())

    def _create_tab(self, title: str) -> tk.Frame:
        tab = GuiUtils.create_styled_frame(self.notebook)
        self.notebook.add(tab, text=title)
        return tab

    def _create_applications_tab(self):
        tab = self._create_tab("Applications")
        keys = list(DEFAULT_APPLICATION_KEYS) + [
            key for key in self.settings.applications if key not in DEFAULT_APPLICATION_KEYS
        ]
        for key in keys:
            var = tk.StringVar(value=self.settings.applications.get(key, ""))
            self._create_path_setting(
                tab, APPLICATION_DISPLAY_NAMES.get(key, key), var, directory=False
            )
            self.application_vars[key] = var

    def _create_template_tab(self):
        tab = self._create_tab("Template")

        GuiUtils.create_styled_label(tab, text="Active template:").pack(
            anchor="w", padx=10, pady=(10, 0)
        )
        self.template_var = tk.StringVar()
        selector = ttk.Combobox(
            tab,
            state="readonly",
            values=[t.display_name for t in self.templates],
            textvariable=self.template_var,
            font=FONTS["info"],
        )
        selector.pack(fill="x", padx=10, pady=(5, 15))
        active_index = next(
            (
                i
                for i, t in enumerate(self.templates)
                if t.id == self.settings.template.name
            ),
            0,
        )
        selector.current(active_index)

        selection = self.settings.template
        self.use_custom_var = tk.BooleanVar(value=selection.use_custom_path)
        tk.Checkbutton(
            tab,
            text="Copy a custom template folder instead",
            variable=self.use_custom_var,
            bg=COLORS["background"],
            fg=COLORS["text"],
            selectcolor=COLORS["panel"],
            activebackground=COLORS["background"],
            font=FONTS["info"],
        ).pack(anchor="w", padx=10)

        self.custom_path_var = tk.StringVar(value=selection.custom_path)
        self._create_path_setting(tab, "Custom template folder", self.custom_path_var)

        GuiUtils.create_styled_label(
            tab, text="Placeholder replaced by the project name:"
        ).pack(anchor="w", padx=10)
        self.placeholder_var = tk.StringVar(value=selection.placeholder_name)
        GuiUtils.create_styled_entry(tab, textvariable=self.placeholder_var).pack(
            fill="x", padx=10, pady=(5, 0), ipady=3
        )

    def _create_structure_tab(self):
        tab = self._create_tab("Folder Structure")
        GuiUtils.create_styled_label(
            tab, text="Entries created when scaffolding a project:"
        ).pack(anchor="w", padx=10, pady=(10, 5))

        for name, option in sorted(self.settings.folder_structure.items()):
            var = tk.BooleanVar(value=option.enabled)
            label = name if option.description in ("", name) else f"{name} - {option.description}"
            tk.Checkbutton(
                tab,
                text=label,
                variable=var,
                bg=COLORS["background"],
                fg=COLORS["text"],
                selectcolor=COLORS["panel"],
                activebackground=COLORS["background"],
                font=FONTS["info"],
                anchor="w",
            ).pack(fill="x", padx=10)
            self.structure_vars[name] = var

    def _create_path_setting(self, parent, label_text, var, directory: bool = True):
        """Create a path input setting with browse button"""
        frame = GuiUtils.create_styled_frame(parent)
        frame.pack(fill="x", padx=10, pady=(10, 0))

        GuiUtils.create_styled_label(frame, text=label_text).pack(anchor="w")

        path_frame = GuiUtils.create_styled_frame(frame)
        path_frame.pack(fill="x", pady=(5, 0))

        GuiUtils.create_styled_entry(path_frame, textvariable=var).pack(
            side="left", fill="x", expand=True, ipady=3
        )
        GuiUtils.create_styled_button(
            path_frame,
            text="Browse",
            command=lambda: self._browse_path(var, directory),
            style="browse",
        ).pack(side="right", padx=(5, 0))

    def _browse_path(self, var: tk.StringVar, directory: bool):
        if directory:
            path = filedialog.askdirectory(parent=self.window)
        else:
            path = filedialog.askopenfilename(parent=self.window)
        if path:
            var.set(path)

    def _collect_settings(self) -> AppSettings:
        settings = self.settings
        settings.applications = {
            key: var.get().strip()
            for key, var in self.application_vars.items()
            if var.get().strip()
        }
        display_name = self.template_var.get()
        template = next(
            (t for t in self.templates if t.display_name == display_name), None
        )
        if template is not None:
            settings.template.name = template.id
        settings.template.use_custom_path = self.use_custom_var.get()
        settings.template.custom_path = self.custom_path_var.get().strip()
        settings.template.placeholder_name = (
            self.placeholder_var.get().strip() or DEFAULT_PLACEHOLDER_NAME
        )
        for name, var in self.structure_vars.items():
            settings.folder_structure[name].enabled = var.get()
        return settings

    def _save(self):
        """Handle save button click"""
        if self.use_custom_var.get() and not self.custom_path_var.get().strip():
            messagebox.showerror(
                "Error", "Please choose a custom template folder", parent=self.window
            )
            return
        self.on_save_callback(self._collect_settings())
        self.destroy()

    def _cancel(self):
        """Handle cancel button click"""
        self.destroy()

    def destroy(self):
        """Clean up and destroy the window"""
        if self.window:
            self.window.destroy()
            self.window = None


class ProjectListWindow:
    """Lists scanned project files; double-click launches one"""

    def __init__(
        self,
        parent_window: tk.Tk,
        title: str,
        projects: List[ScannedProject],
        on_launch_callback: Callable[[ScannedProject], None],
    ):
        self.parent_window = parent_window
        self.title = title
        self.projects = projects
        self.on_launch_callback = on_launch_callback
        self.window = None
        self.tree = None

    def create_window(self):
        """Create the project list window"""
        if self.window:
            return

        self.window = tk.Toplevel(self.parent_window)
        self.window.title(f"Projects - {self.title}")
        self.window.configure(bg=COLORS["background"])
        width, height = GuiUtils.parse_geometry(POPUP_WINDOW_SIZE)
        GuiUtils.center_window(self.window, width, height)

        main_frame = GuiUtils.create_styled_frame(self.window)
        main_frame.pack(fill=tk.BOTH, expand=True, padx=15, pady=15)

        GuiUtils.create_styled_label(
            main_frame,
            text=f"{self.title} ({len(self.projects)} projects)",
            font_key="header",
            color_key="text",
        ).pack(anchor="w", pady=(0, 10))

        if not self.projects:
            GuiUtils.create_styled_label(
                main_frame, text="No After Effects or Premiere Pro projects found."
            ).pack(pady=20)
        else:
            self._create_project_tree(main_frame)

        buttons_frame = GuiUtils.create_styled_frame(main_frame)
        buttons_frame.pack(fill="x", pady=(10, 0))
        GuiUtils.create_styled_button(
            buttons_frame, text="Close", command=self.destroy, style="close"
        ).pack(side="right")
        if self.projects:
            GuiUtils.create_styled_button(
                buttons_frame,
                text="Open Project",
                command=self._launch_selected,
                style="launch",
            ).pack(side="right", padx=(0, 10))

        self.window.bind("<Escape>", lambda e: self.destroy())

    def _create_project_tree(self, parent):
        columns = ("type", "name", "folder", "date")
        self.tree = ttk.Treeview(parent, columns=columns, show="headings", height=15)
        for column, heading, width in (
            ("type", "Type", 50),
            ("name", "Name", 220),
            ("folder", "Folder", 120),
            ("date", "Created", 70),
        ):
            self.tree.heading(column, text=heading)
            self.tree.column(column, width=width, anchor="w")

        for index, project in enumerate(self.projects):
            self.tree.insert(
                "",
                "end",
                iid=str(index),
                values=(
                    project.type_label,
                    project.name,
                    project.folder,
                    project.short_date,
                ),
            )

        self.tree.pack(fill=tk.BOTH, expand=True)
        self.tree.bind("<Double-1>", lambda e: self._launch_selected())

    def _launch_selected(self):
        if self.tree is None:
            return
        selection = self.tree.selection()
        if not selection:
            messagebox.showinfo("Open Project", "Select a project first", parent=self.window)
            return
        self.on_launch_callback(self.projects[int(selection[0])])

    def destroy(self):
        """Clean up and destroy the window"""
        if self.window:
            self.window.destroy()
            self.window = None
