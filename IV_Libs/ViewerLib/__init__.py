"""
ViewerLib - PyQt5 user interface

This package holds the toolkit-facing side of the Image Viewer: the main
window, the effect preview and paint dialogs, the rubber-band selection label
and the adapters converting between numpy images, QImage and the clipboard.

Modules are imported directly (e.g. ``IV_Libs.ViewerLib.main_window``) so the
core libraries stay usable without importing Qt widgets.
"""
