import re
import typing as T
from dataclasses import dataclass

from graphql.pyutils import Path

from gqlsteps.errors import InvariantViolation, assert_true

Segment = T.Union[str, int]

_SEGMENT_RE = re.compile(r"/([^/\[\]]+)|\[(0|[1-9]\d*)\]")


@dataclass(frozen=True)
class ResultPath:
    """Field names and list indices from the root of the result to a node.

    Renders as /pets[0][1]/name. The root path has no segments and renders
    as the empty string.
    """

    segments: tuple[Segment, ...] = ()

    @classmethod
    def root(cls) -> "ResultPath":
        return _ROOT

    @classmethod
    def from_list(cls, segments: T.Iterable[Segment]) -> "ResultPath":
        segments = tuple(segments)
        for s in segments:
            assert_true(
                isinstance(s, (str, int)) and not isinstance(s, bool),
                lambda: f"invalid path segment {s!r}",
            )
        return cls(segments=segments)

    @classmethod
    def parse(cls, path_string: str) -> "ResultPath":
        path_string = path_string.strip()
        segments: list[Segment] = []
        pos = 0
        for match in _SEGMENT_RE.finditer(path_string):
            if match.start() != pos:
                break
            name, index = match.groups()
            segments.append(name if name is not None else int(index))
            pos = match.end()
        if pos != len(path_string):
            raise InvariantViolation(f"invalid path string '{path_string}'")
        return cls(segments=tuple(segments))

    def segment(self, name: str) -> "ResultPath":
        return ResultPath(segments=(*self.segments, name))

    def index(self, index: int) -> "ResultPath":
        assert_true(
            isinstance(index, int) and not isinstance(index, bool),
            lambda: f"list index must be an int, got {index!r}",
        )
        assert_true(index >= 0, lambda: f"list index must be >= 0, got {index}")
        return ResultPath(segments=(*self.segments, index))

    @property
    def parent(self) -> T.Optional["ResultPath"]:
        if not self.segments:
            return None
        return ResultPath(segments=self.segments[:-1])

    def sibling(self, name: str) -> "ResultPath":
        assert_true(not self.is_root_path(), "the root path has no siblings")
        return ResultPath(segments=(*self.segments[:-1], name))

    def path_without_list_end(self) -> "ResultPath":
        segments = self.segments
        while segments and isinstance(segments[-1], int):
            segments = segments[:-1]
        return ResultPath(segments=segments)

    def is_root_path(self) -> bool:
        return not self.segments

    def is_list_segment(self) -> bool:
        return bool(self.segments) and isinstance(self.segments[-1], int)

    def is_named_segment(self) -> bool:
        return bool(self.segments) and isinstance(self.segments[-1], str)

    @property
    def segment_name(self) -> str:
        assert_true(self.is_named_segment(), lambda: f"{self} does not end in a name")
        return T.cast(str, self.segments[-1])

    @property
    def segment_index(self) -> int:
        assert_true(self.is_list_segment(), lambda: f"{self} does not end in an index")
        return T.cast(int, self.segments[-1])

    @property
    def level(self) -> int:
        """number of named segments; list indices do not count"""
        return sum(1 for s in self.segments if isinstance(s, str))

    def to_list(self) -> list[Segment]:
        return list(self.segments)

    def as_graphql_path(self) -> Path | None:
        path: Path | None = None
        for s in self.segments:
            path = Path(path, s, None)
        return path

    def __str__(self) -> str:
        return "".join(
            f"[{s}]" if isinstance(s, int) else f"/{s}" for s in self.segments
        )


_ROOT = ResultPath()


__all__ = ["ResultPath", "Segment"]
