"""
Run-scoped, append-only log of produced artifacts.
"""

from typing import Any, Dict, Iterable, Iterator, List, Mapping, Union

from .exceptions import ValidationError
from .models import Artifact


ArtifactLike = Union[Artifact, Mapping[str, Any]]


class ArtifactAccumulator:
    """
    Collects artifacts in the order their producing steps ran.

    There is no removal API and no deduplication; callers keep paths unique.
    """

    def __init__(self) -> None:
        self._items: List[Artifact] = []

    def append(self, item: ArtifactLike) -> Artifact:
        """Add one artifact"""
        artifact = self._coerce(item)
        self._items.append(artifact)
        return artifact

    def extend(self, items: Iterable[ArtifactLike]) -> None:
        """Add several artifacts, preserving their order"""
        for item in items:
            self.append(item)

    def collect(self, task_result: Mapping[str, Any]) -> None:
        """Add every artifact a task result carries (missing list means none)"""
        self.extend(task_result.get("artifacts") or [])

    def as_files(self) -> List[Dict[str, Any]]:
        """Checkpoint `files` payload"""
        return [artifact.to_dict() for artifact in self._items]

    def to_list(self) -> List[Dict[str, Any]]:
        return self.as_files()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Artifact]:
        return iter(list(self._items))

    def __getitem__(self, index: int) -> Artifact:
        return self._items[index]

    @staticmethod
    def _coerce(item: ArtifactLike) -> Artifact:
        if isinstance(item, Artifact):
            return item
        if isinstance(item, Mapping) and item.get("path"):
            return Artifact.from_dict(dict(item))
        raise ValidationError(
            "Artifact must be an Artifact or a mapping with a 'path'",
            field="artifacts",
            value=item,
        )
