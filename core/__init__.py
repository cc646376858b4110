# Core package for the launcher GUI wiring

from .callback_handler import CallbackHandler
from .operation_manager import OperationManager

__all__ = ["CallbackHandler", "OperationManager"]
