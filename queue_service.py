from __future__ import annotations

from pathlib import Path

from models import InputFile


class FileQueue:
    """Ordered files picked for the next translation batch.

    Duplicates are kept: every entry is translated on its own.
    """

    def __init__(self) -> None:
        self._files: list[InputFile] = []

    def __len__(self) -> int:
        return len(self._files)

    @property
    def files(self) -> list[InputFile]:
        return list(self._files)

    def clear(self) -> None:
        self._files.clear()

    def add_paths(self, paths: list[str]) -> tuple[int, int]:
        """Append the regular files among ``paths``; returns ``(added, skipped)``."""
        accepted: list[InputFile] = []
        for raw_path in paths:
            if not raw_path or not raw_path.strip():
                continue
            resolved = Path(raw_path).expanduser().resolve()
            if resolved.is_file():
                accepted.append(InputFile.from_path(str(resolved)))

        self._files.extend(accepted)
        return len(accepted), len(paths) - len(accepted)

    def remove(self, indices: list[int]) -> int:
        doomed = {index for index in indices if 0 <= index < len(self._files)}
        self._files = [item for index, item in enumerate(self._files) if index not in doomed]
        return len(doomed)

    def move(self, indices: list[int], step: int) -> list[int]:
        """Shift the selected rows one place up (``step=-1``) or down (``step=1``).

        Returns the new positions of the selection. A selection already at
        the edge it moves towards stays where it is.
        """
        if step not in (-1, 1):
            raise ValueError(f"step must be -1 or 1, got {step}")

        selected = sorted({index for index in indices if 0 <= index < len(self._files)})
        if not selected:
            return []
        edge = 0 if step < 0 else len(self._files) - 1
        if edge in selected:
            return selected

        for index in selected if step < 0 else reversed(selected):
            target = index + step
            self._files[index], self._files[target] = self._files[target], self._files[index]
        return [index + step for index in selected]
