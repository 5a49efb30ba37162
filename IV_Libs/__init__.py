"""
IV_Libs - Image Viewer Library Modules

This package contains core functionality for the Image Viewer application,
organized into specialized sub-packages:

- ImageEditingLib: Image models, filters, crop extraction and file codec
- HistoryLib: Edit commands and the linear undo/redo history
- SessionLib: Image state, effect preview controller and the edit session
- ViewerLib: PyQt5 windows, dialogs and toolkit adapters
"""

__version__ = "0.1.0"
