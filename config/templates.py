"""
Built-in project templates for the Quick Folder Launcher

Each template lists the folders (and files, for names containing a '.')
created when a project is scaffolded from it.
"""

# The catalog must always contain this template
DEFAULT_TEMPLATE_ID = "default"

# Placeholder replaced by the project name when copying a custom template folder
DEFAULT_PLACEHOLDER_NAME = "Temp"

TEMPLATE_DEFINITIONS = [
    {
        "id": "default",
        "name": "Default",
        "description": "Minimal motion design layout with project and pre-production folders",
        "profession": "General",
        "icon": "📁",
        "color": "#0078d4",
        "entries": ["AEP", "prePro"],
    },
    {
        "id": "vfx-artist",
        "name": "VFX Artist",
        "description": "Compositing workflow with comps, scripts, plates and renders",
        "profession": "Visual Effects",
        "icon": "🎬",
        "color": "#9999ff",
        "entries": [
            "AE_Comps",
            "Nuke_Scripts",
            "Renders",
            "Plates_Raw",
            "Elements_CGI",
            "References",
        ],
    },
    {
        "id": "3d-artist",
        "name": "3D Artist",
        "description": "Scene files, textures and exported models for 3D production",
        "profession": "3D Modeling & Animation",
        "icon": "🧊",
        "color": "#f39c12",
        "entries": [
            "Maya_Scenes",
            "Blender_Files",
            "Textures",
            "Renders",
            "Models_Export",
            "References",
        ],
    },
    {
        "id": "developer",
        "name": "Developer",
        "description": "Source, documentation, tests and build output for software projects",
        "profession": "Software Development",
        "icon": "💻",
        "color": "#27ae60",
        "entries": ["src", "docs", "tests", "assets", "build", "README.md"],
    },
    {
        "id": "graphic-designer",
        "name": "Graphic Designer",
        "description": "Adobe suite working files, exports and font assets",
        "profession": "Graphic Design",
        "icon": "🎨",
        "color": "#e67e22",
        "entries": [
            "Photoshop_Files",
            "Illustrator_Files",
            "InDesign_Files",
            "Final_Exports",
            "Assets_Fonts",
            "References",
        ],
    },
    {
        "id": "video-editor",
        "name": "Video Editor",
        "description": "Editing projects, raw footage, audio and motion graphics",
        "profession": "Video Editing",
        "icon": "🎞️",
        "color": "#ea77ff",
        "entries": [
            "Premiere_Projects",
            "DaVinci_Projects",
            "Raw_Footage",
            "Audio",
            "Final_Exports",
            "Graphics_Motion",
        ],
    },
    {
        "id": "photographer",
        "name": "Photographer",
        "description": "RAW captures, catalog, edits and client delivery",
        "profession": "Photography",
        "icon": "📷",
        "color": "#16a085",
        "entries": [
            "RAW_Files",
            "Lightroom_Catalog",
            "Edited_Photos",
            "Final_Delivery",
            "Contact_Sheets",
        ],
    },
]

# Human readable descriptions for the folder structure toggles in settings
ENTRY_DESCRIPTIONS = {
    "AEP": "After Effects project files",
    "prePro": "Pre-production material",
    "Renders": "Rendered output",
    "References": "Reference material",
    "README.md": "Project readme",
}

# Logical application slots shown in the launcher
DEFAULT_APPLICATION_KEYS = ["afterEffects", "premierePro", "app3", "app4"]

APPLICATION_DISPLAY_NAMES = {
    "afterEffects": "After Effects",
    "premierePro": "Premiere Pro",
    "app3": "Application 3",
    "app4": "Application 4",
}
