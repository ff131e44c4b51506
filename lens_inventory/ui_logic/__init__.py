"""
Framework-agnostic engine logic for the lens inventory front ends.

Nothing in this package imports a UI framework; the Streamlit app and the CLI
both drive the same managers.

- StateManager: owns engine state and notifies listeners on change
- MutationManager: paint/edit interaction state machine
- DataManager: blob persistence and the autosave observer
- ValidationManager: field-level feedback for forms
"""

from .state_manager import StateManager
from .mutation_manager import MutationManager, InteractionMode
from .data_manager import BlobStore, DataManager
from .validation_manager import ValidationManager

__all__ = [
    "StateManager",
    "MutationManager",
    "InteractionMode",
    "BlobStore",
    "DataManager",
    "ValidationManager",
]
