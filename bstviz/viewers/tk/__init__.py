from .tree_viewer import TkTreeViewer

__all__ = ["TkTreeViewer"]
