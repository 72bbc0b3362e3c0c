import dataclasses
import functools
import logging
import typing as T

import graphql
from pydantic import TypeAdapter

from gqlsteps import type_utils
from gqlsteps.errors import assert_not_null, assert_true
from gqlsteps.merged_field import MergedField
from gqlsteps.path import ResultPath

logger = logging.getLogger(__name__)

ArgType = T.TypeVar("ArgType")


class Arguments(T.Mapping[str, T.Any]):
    """Read-only copy of resolved argument values.

    An argument given as null is kept as a key with value None, so
    `"id" in arguments` tells "passed as null" apart from "not passed".
    """

    __slots__ = ("_values",)

    def __init__(self, values: T.Mapping[str, T.Any] | None = None):
        self._values: dict[str, T.Any] = dict(values) if values else {}

    def __getitem__(self, key: str) -> T.Any:
        return self._values[key]

    def __iter__(self) -> T.Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Arguments({self._values!r})"


_NO_ARGUMENTS = Arguments()


@functools.lru_cache(maxsize=256)
def _type_adapter(as_type: T.Any) -> TypeAdapter:
    return TypeAdapter(as_type)


@dataclasses.dataclass(frozen=True, eq=False, repr=False)
class StepInfo:
    """
    As a query executes it forms a hierarchy from parent fields (and their type) to child
    fields (and their type) until a leaf type is reached. The static schema knows nothing
    about that hierarchy, nor about which positions are non null on the current path, so
    the executor records it here, one StepInfo per field or list element.

    A StepInfo is either a field or an element of a list of objects/interfaces/unions. It
    is never a scalar/enum inside a list: execution does not descend into leaf lists.

    For Query.pets: [[Pet]] resolved to [[Dog1], [Cat1]] and the query {pets {name}}:
        /pets              [[Pet]]  (the field Query.pets)
        /pets[0]           [Pet]
        /pets[0][0]        Dog      (after runtime type resolution)
        /pets[1][0]        Cat
        /pets[0][0]/name   String   (the field Dog.name)

    For list elements `field`, `field_definition`, `object_type` and `arguments` are
    those of the field returning the list.
    """

    type: graphql.GraphQLOutputType
    field_definition: graphql.GraphQLField | None = None
    field: MergedField | None = None
    path: ResultPath = ResultPath()
    parent: T.Optional["StepInfo"] = None
    arguments: T.Mapping[str, T.Any] = dataclasses.field(
        default_factory=lambda: _NO_ARGUMENTS
    )
    # the object type declaring field_definition. for __typename this type does not
    # actually contain the field definition
    object_type: graphql.GraphQLObjectType | None = None

    def __post_init__(self) -> None:
        assert_not_null(self.type, "you must provide a graphql type")
        if self.path is None:
            object.__setattr__(self, "path", ResultPath.root())
        if not isinstance(self.arguments, Arguments):
            object.__setattr__(self, "arguments", Arguments(self.arguments))

    @classmethod
    def builder(cls, existing: T.Optional["StepInfo"] = None) -> "StepInfoBuilder":
        return StepInfoBuilder(existing)

    def unwrapped_non_null_type(self) -> graphql.GraphQLOutputType:
        return T.cast(graphql.GraphQLOutputType, type_utils.unwrap_non_null(self.type))

    def is_non_null_type(self) -> bool:
        return type_utils.is_non_null(self.type)

    def is_list_type(self) -> bool:
        return type_utils.is_list(self.type)

    def list_depth(self) -> int:
        return type_utils.list_depth(self.type)

    def has_parent(self) -> bool:
        return self.parent is not None

    def is_root(self) -> bool:
        return self.parent is None

    def is_list_element(self) -> bool:
        return self.path.is_list_segment()

    def ancestors(self) -> T.Iterator["StepInfo"]:
        current = self.parent
        while current is not None:
            yield current
            current = current.parent

    def result_key(self) -> str:
        field = assert_not_null(
            self.field, lambda: f"no field associated with the step at '{self.path}'"
        )
        return field.result_key

    @T.overload
    def get_argument(self, name: str) -> T.Any: ...

    @T.overload
    def get_argument(
        self, name: str, as_type: T.Type[ArgType], default: ArgType | None = None
    ) -> ArgType | None: ...

    def get_argument(
        self, name: str, as_type: T.Any = None, default: T.Any = None
    ) -> T.Any:
        """the named argument, or `default` if it was not passed.

        Pass `as_type` to have the value validated (and coerced) by pydantic instead of
        trusting the caller's idea of what it is. An argument passed as null comes
        back as None without validation.
        """
        if name not in self.arguments:
            return default
        value = self.arguments[name]
        if as_type is None or value is None:
            return value
        return _type_adapter(as_type).validate_python(value)

    def transform(
        self,
        builder_fn: T.Callable[["StepInfoBuilder"], T.Any] | None = None,
        **overrides: T.Any,
    ) -> "StepInfo":
        """a copy with some fields replaced, this StepInfo is left as it is"""
        if builder_fn is None:
            return dataclasses.replace(self, **overrides)
        builder = StepInfoBuilder(self)
        builder_fn(builder)
        return dataclasses.replace(builder.build(), **overrides)

    def with_replaced_type(self, new_type: graphql.GraphQLOutputType) -> "StepInfo":
        """Swap the type while keeping the parent and the non null-ness.

        Used to turn an interface/union into the object type found by type resolution.
        `new_type` must be the bare type: it is wrapped again here if needed.
        """
        assert_not_null(new_type, "you must provide a graphql type")
        assert_true(
            not type_utils.is_non_null(new_type), "new_type can't be non null"
        )
        if self.is_non_null_type():
            new_type = type_utils.non_null(new_type)
        logger.debug(f"{self.path}: replacing {self.simple_print()} with {new_type}")
        return dataclasses.replace(self, type=new_type)

    def simple_print(self) -> str:
        return type_utils.simple_print(self.type)

    def __repr__(self) -> str:
        field_def = (
            f"{self.object_type}.{self.field.name}"
            if self.object_type and self.field
            else self.field_definition
        )
        return (
            f"StepInfo(path='{self.path}', type={self.simple_print()},"
            f" field_definition={field_def})"
        )


class StepInfoBuilder:
    def __init__(self, existing: StepInfo | None = None):
        self._type: graphql.GraphQLOutputType | None = None
        self._field_definition: graphql.GraphQLField | None = None
        self._field: MergedField | None = None
        self._path: ResultPath = ResultPath.root()
        self._parent: StepInfo | None = None
        self._arguments: T.Mapping[str, T.Any] = _NO_ARGUMENTS
        self._object_type: graphql.GraphQLObjectType | None = None
        if existing is not None:
            self._type = existing.type
            self._field_definition = existing.field_definition
            self._field = existing.field
            self._path = existing.path
            self._parent = existing.parent
            self._arguments = existing.arguments
            self._object_type = existing.object_type

    def type(self, gql_type: graphql.GraphQLOutputType) -> "StepInfoBuilder":
        self._type = gql_type
        return self

    def field_definition(self, field_definition: graphql.GraphQLField | None) -> "StepInfoBuilder":
        self._field_definition = field_definition
        return self

    def field(self, field: MergedField | None) -> "StepInfoBuilder":
        self._field = field
        return self

    def path(self, path: ResultPath) -> "StepInfoBuilder":
        self._path = path
        return self

    def parent(self, parent: StepInfo | None) -> "StepInfoBuilder":
        self._parent = parent
        return self

    def arguments(self, arguments: T.Mapping[str, T.Any] | None) -> "StepInfoBuilder":
        self._arguments = arguments if arguments is not None else _NO_ARGUMENTS
        return self

    def object_type(self, object_type: graphql.GraphQLObjectType | None) -> "StepInfoBuilder":
        self._object_type = object_type
        return self

    def build(self) -> StepInfo:
        return StepInfo(
            type=self._type,
            field_definition=self._field_definition,
            field=self._field,
            path=self._path,
            parent=self._parent,
            arguments=self._arguments,
            object_type=self._object_type,
        )


def new_step_info(
    type: graphql.GraphQLOutputType,
    field_definition: graphql.GraphQLField | None = None,
    field: MergedField | None = None,
    path: ResultPath | None = None,
    parent: StepInfo | None = None,
    arguments: T.Mapping[str, T.Any] | None = None,
    object_type: graphql.GraphQLObjectType | None = None,
) -> StepInfo:
    return StepInfo(
        type=type,
        field_definition=field_definition,
        field=field,
        path=path if path is not None else ResultPath.root(),
        parent=parent,
        arguments=arguments if arguments is not None else _NO_ARGUMENTS,
        object_type=object_type,
    )


def with_replaced_type(
    existing: StepInfo, new_type: graphql.GraphQLOutputType
) -> StepInfo:
    return existing.with_replaced_type(new_type)


__all__ = [
    "Arguments",
    "StepInfo",
    "StepInfoBuilder",
    "new_step_info",
    "with_replaced_type",
]
