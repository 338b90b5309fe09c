from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from typing import List

from bulkreplace.errors import PlatformUnavailable

logger = logging.getLogger(__name__)


class DirectorySelector(ABC):
    @abstractmethod
    def select(self) -> List[str]:
        """Return the chosen directories, or an empty list on cancel."""
        raise NotImplementedError


class TkDirectorySelector(DirectorySelector):
    """Native folder chooser built on tkinter.

    Tk's chooser takes one folder at a time, so the dialog is reopened after
    each pick for as long as the user answers yes to "add another folder?".
    """

    def __init__(
        self,
        title: str = "Select a folder",
        multiple: bool = True,
        initial_dir: str | None = None,
    ) -> None:
        self.title = title
        self.multiple = multiple
        self.initial_dir = initial_dir

    def select(self) -> List[str]:
        try:
            import tkinter as tk
            from tkinter import filedialog, messagebox
        except ImportError as exc:
            raise PlatformUnavailable("tkinter is not available on this system") from exc

        try:
            root = tk.Tk()
        except tk.TclError as exc:
            raise PlatformUnavailable(f"Cannot open the folder chooser: {exc}") from exc
        root.withdraw()

        chosen: List[str] = []
        try:
            initial = self.initial_dir or os.path.expanduser("~")
            while True:
                picked = filedialog.askdirectory(
                    parent=root, title=self.title, initialdir=initial, mustexist=True
                )
                if not picked:
                    break
                path = os.path.abspath(picked)
                if path not in chosen:
                    chosen.append(path)
                if not self.multiple:
                    break
                if not messagebox.askyesno(
                    parent=root,
                    title=self.title,
                    message=f"{len(chosen)} folder(s) selected.\nAdd another folder?",
                ):
                    break
                initial = os.path.dirname(path)
        finally:
            root.destroy()

        if not chosen:
            logger.debug("Folder selection cancelled")
        return chosen
