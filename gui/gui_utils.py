"""
GUI utilities for common operations
"""

import contextlib
import tkinter as tk
from tkinter import ttk
from typing import Callable

from config.config import get_gui_config

_gui = get_gui_config()
COLORS = _gui.colors
FONTS = _gui.fonts
BUTTON_STYLES = _gui.button_styles


class GuiUtils:
    """Utility class for common GUI operations"""

    @staticmethod
    def create_styled_button(
        parent, text: str, command: Callable, style: str = "close", **kwargs
    ) -> tk.Button:
        """Create a button with predefined styling"""
        button_style = BUTTON_STYLES.get(style, BUTTON_STYLES["close"])

        default_config = {
            "text": text,
            "command": command,
            "font": FONTS["button"],
            "relief": "flat",
            "padx": 10,
            "pady": 4,
            **button_style,
        } | kwargs
        return tk.Button(parent, **default_config)

    @staticmethod
    def create_styled_label(
        parent, text: str, font_key: str = "info", color_key: str = "muted", **kwargs
    ) -> tk.Label:
        """Create a label with predefined styling"""
        default_config = {
            "text": text,
            "font": FONTS[font_key],
            "bg": COLORS["background"],
            "fg": COLORS[color_key],
        } | kwargs
        return tk.Label(parent, **default_config)

    @staticmethod
    def create_styled_frame(parent, bg_color: str = "background", **kwargs) -> tk.Frame:
        """Create a frame with predefined styling"""
        default_config = {"bg": COLORS[bg_color]} | kwargs
        return tk.Frame(parent, **default_config)

    @staticmethod
    def create_styled_entry(parent, textvariable: tk.StringVar = None, **kwargs) -> tk.Entry:
        """Create a dark entry field"""
        default_config = {
            "textvariable": textvariable,
            "font": FONTS["info"],
            "bg": COLORS["panel"],
            "fg": COLORS["text"],
            "insertbackground": COLORS["text"],
            "relief": "flat",
        } | kwargs
        return tk.Entry(parent, **default_config)

    @staticmethod
    def parse_geometry(size: str) -> tuple[int, int]:
        """Split a 'WIDTHxHEIGHT' string"""
        width, height = size.lower().split("x", 1)
        return int(width), int(height)

    @staticmethod
    def center_window(window, width: int, height: int):
        """Center a window on screen"""
        window.update_idletasks()
        x = (window.winfo_screenwidth() // 2) - (width // 2)
        y = (window.winfo_screenheight() // 2) - (height // 2)
        window.geometry(f"{width}x{height}+{x}+{y}")

    @staticmethod
    def create_scrollable_frame(parent) -> tuple[tk.Canvas, tk.Frame, ttk.Scrollbar]:
        """Create a scrollable frame setup"""
        canvas = tk.Canvas(parent, bg=COLORS["background"], highlightthickness=0)
        scrollbar = ttk.Scrollbar(parent, orient="vertical", command=canvas.yview)
        scrollable_frame = GuiUtils.create_styled_frame(canvas)

        scrollable_frame.bind(
            "<Configure>", lambda e: canvas.configure(scrollregion=canvas.bbox("all"))
        )

        window_id = canvas.create_window((0, 0), window=scrollable_frame, anchor="nw")
        canvas.bind(
            "<Configure>", lambda e: canvas.itemconfigure(window_id, width=e.width)
        )
        canvas.configure(yscrollcommand=scrollbar.set)

        canvas.pack(side="left", fill="both", expand=True)
        scrollbar.pack(side="right", fill="y")

        def _on_mousewheel(event):
            with contextlib.suppress(tk.TclError):
                if canvas.winfo_exists():
                    canvas.yview_scroll(int(-1 * (event.delta / 120)), "units")

        # Bind while the pointer is over the canvas only
        canvas.bind("<Enter>", lambda e: canvas.bind_all("<MouseWheel>", _on_mousewheel))
        canvas.bind("<Leave>", lambda e: canvas.unbind_all("<MouseWheel>"))

        return canvas, scrollable_frame, scrollbar

    @staticmethod
    def clear_children(widget):
        """Destroy every child widget"""
        for child in widget.winfo_children():
            child.destroy()
