"""Static file serving with private directories."""

import os
from collections.abc import Iterable
from pathlib import Path

from starlette.staticfiles import StaticFiles


class RelayStaticFiles(StaticFiles):
    """StaticFiles that answers 404 for anything inside ``hidden`` directories."""

    def __init__(self, *, hidden: Iterable[Path] = (), **kwargs) -> None:
        super().__init__(**kwargs)
        self.hidden = [Path(p).resolve() for p in hidden]

    def lookup_path(self, path: str) -> tuple[str, os.stat_result | None]:
        full_path, stat_result = super().lookup_path(path)
        if stat_result is not None and self._is_hidden(Path(full_path)):
            return "", None
        return full_path, stat_result

    def _is_hidden(self, full_path: Path) -> bool:
        resolved = full_path.resolve()
        return any(resolved.is_relative_to(hidden) for hidden in self.hidden)
