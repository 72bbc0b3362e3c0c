import typing as T
from dataclasses import dataclass

import graphql

from gqlsteps.errors import assert_true


def _result_key(node: graphql.FieldNode) -> str:
    return node.alias.value if node.alias else node.name.value


@dataclass(frozen=True)
class MergedField:
    """All the query field nodes that share a response key and so execute as one field.

    eg `{ pet { name } pet { age } }` gives one MergedField with two nodes.
    """

    fields: tuple[graphql.FieldNode, ...]

    def __post_init__(self) -> None:
        assert_true(len(self.fields) > 0, "a merged field needs at least one field")
        key = _result_key(self.fields[0])
        for node in self.fields[1:]:
            assert_true(
                _result_key(node) == key,
                lambda: f"cannot merge field '{_result_key(node)}' into '{key}'",
            )

    @classmethod
    def of(cls, *nodes: graphql.FieldNode) -> "MergedField":
        return cls(fields=tuple(nodes))

    @property
    def single_field(self) -> graphql.FieldNode:
        return self.fields[0]

    @property
    def name(self) -> str:
        return self.single_field.name.value

    @property
    def result_key(self) -> str:
        return _result_key(self.single_field)

    @property
    def arguments(self) -> tuple[graphql.ArgumentNode, ...]:
        return tuple(self.single_field.arguments or ())

    def is_single_field(self) -> bool:
        return len(self.fields) == 1

    def with_field(self, node: graphql.FieldNode) -> "MergedField":
        return MergedField(fields=(*self.fields, node))

    def __iter__(self) -> T.Iterator[graphql.FieldNode]:
        return iter(self.fields)


__all__ = ["MergedField"]
