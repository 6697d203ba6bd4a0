from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

from dependents_crawler.core.interfaces import ResultStorage
from dependents_crawler.core.models import ResultSet


class JsonFileStorage(ResultStorage):
    """Rewrite the whole result set as a pretty-printed JSON array.

    The array is written to a temporary file next to `path` and renamed over
    it, so a reader never sees a half-written file.
    """

    def __init__(self, path: str | Path, indent: int = 2) -> None:
        self.path = Path(path)
        self.indent = indent

    def save(self, results: ResultSet) -> str:
        out_dir = self.path.parent
        out_dir.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(results.to_list(), indent=self.indent, ensure_ascii=False)

        fd, tmp_name = tempfile.mkstemp(
            dir=out_dir, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        return str(self.path)

    def load(self) -> list:
        """Read back what was last saved ([] if nothing was saved yet)."""
        try:
            return json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return []
