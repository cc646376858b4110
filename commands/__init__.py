"""
Command Modules
Async commands run from the GUI and the web view
"""

from .project_commands import (
    CreateProjectCommand,
    ScanProjectsCommand,
    LaunchPathCommand,
    OpenFolderCommand,
    AddFolderCommand,
)

__all__ = [
    "CreateProjectCommand",
    "ScanProjectsCommand",
    "LaunchPathCommand",
    "OpenFolderCommand",
    "AddFolderCommand",
]
