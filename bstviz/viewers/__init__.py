"""Interactive viewers for tree scenes."""


def __getattr__(name: str):
    # Tk is imported lazily so headless installs can use the rest of the package.
    if name == "TkTreeViewer":
        from .tk.tree_viewer import TkTreeViewer

        return TkTreeViewer
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["TkTreeViewer"]
