import logging
import typing as T

import graphql
from graphql.execution.values import get_argument_values

from gqlsteps import type_utils
from gqlsteps.errors import (
    InvariantViolation,
    NonNullableFieldWasNull,
    StepError,
    assert_not_null,
    assert_true,
)
from gqlsteps.merged_field import MergedField
from gqlsteps.path import ResultPath
from gqlsteps.step_info import StepInfo

logger = logging.getLogger(__name__)

ValueType = T.TypeVar("ValueType")


class StepInfoFactory:
    """Derives the StepInfo for each step the executor takes.

    Holds the un-changing config for one operation, so one instance can be shared by
    every branch of that operation's execution.
    """

    def __init__(
        self,
        *,
        schema: graphql.GraphQLSchema,
        variable_values: dict[str, T.Any] | None = None,
    ):
        self.schema = schema
        self.variable_values = variable_values or {}

    def root_type(
        self, operation: graphql.OperationType | str
    ) -> graphql.GraphQLObjectType:
        operation = graphql.OperationType(operation)
        root_type = {
            graphql.OperationType.QUERY: self.schema.query_type,
            graphql.OperationType.MUTATION: self.schema.mutation_type,
            graphql.OperationType.SUBSCRIPTION: self.schema.subscription_type,
        }[operation]
        return assert_not_null(
            root_type, lambda: f"schema is not configured for {operation.value}"
        )

    def for_operation(
        self, operation: graphql.OperationType | str = graphql.OperationType.QUERY
    ) -> StepInfo:
        return (
            StepInfo.builder()
            .type(type_utils.non_null(self.root_type(operation)))
            .path(ResultPath.root())
            .build()
        )

    def field_definition(
        self, parent_type: graphql.GraphQLObjectType, field_name: str
    ) -> graphql.GraphQLField:
        if field_name == "__typename":
            return graphql.TypeNameMetaFieldDef
        if parent_type is self.schema.query_type:
            if field_name == "__schema":
                return graphql.SchemaMetaFieldDef
            if field_name == "__type":
                return graphql.TypeMetaFieldDef
        return assert_not_null(
            parent_type.fields.get(field_name),
            lambda: f"field '{field_name}' is not defined on '{parent_type.name}'",
        )

    def for_field(
        self,
        parent: StepInfo,
        field: MergedField,
        parent_type: graphql.GraphQLObjectType,
    ) -> StepInfo:
        """the step for a field selected on the object at `parent`

        `parent_type` is the concrete object type, which differs from the parent's type
        when that was an interface/union.
        """
        assert_true(
            not parent.is_list_type(),
            lambda: f"cannot select field '{field.name}' on list at '{parent.path}'",
        )
        field_def = self.field_definition(parent_type, field.name)
        # raises GraphQLError when a value can't be coerced, that is for the caller
        arguments = get_argument_values(
            field_def, field.single_field, self.variable_values
        )
        return (
            StepInfo.builder()
            .type(field_def.type)
            .field_definition(field_def)
            .field(field)
            .path(parent.path.segment(field.result_key))
            .parent(parent)
            .arguments(arguments)
            .object_type(parent_type)
            .build()
        )

    def for_list_element(self, parent: StepInfo, index: int) -> StepInfo:
        assert_true(
            parent.is_list_type(),
            lambda: f"'{parent.path}' is a {parent.simple_print()}, not a list",
        )
        element_type = type_utils.unwrap_one(parent.type)
        assert_true(
            not graphql.is_leaf_type(type_utils.unwrap_non_null(element_type)),
            lambda: f"execution does not descend into the leaf list at '{parent.path}'",
        )
        return parent.transform(
            type=element_type, path=parent.path.index(index), parent=parent
        )

    def for_runtime_type(
        self,
        step_info: StepInfo,
        runtime_type: graphql.GraphQLObjectType | str,
    ) -> StepInfo:
        abstract_type = step_info.unwrapped_non_null_type()
        if not graphql.is_abstract_type(abstract_type):
            raise InvariantViolation(
                f"'{step_info.path}' is a {step_info.simple_print()}, not an interface or union"
            )
        assert_true(
            not type_utils.is_non_null(runtime_type),
            lambda: f"runtime type {runtime_type} can't be non null, pass the bare object type",
        )
        if isinstance(runtime_type, str):
            runtime_type_name = runtime_type
            runtime_type = self.schema.get_type(runtime_type_name)
            if runtime_type is None:
                raise StepError(
                    f"Abstract type '{abstract_type}' was resolved to a type"
                    f" '{runtime_type_name}' that does not exist inside the schema.",
                    step_info=step_info,
                )
        if not graphql.is_object_type(runtime_type):
            raise StepError(
                f"Abstract type '{abstract_type}' must resolve to an Object type"
                f" at runtime, received '{runtime_type}'.",
                step_info=step_info,
            )
        if not self.schema.is_sub_type(abstract_type, runtime_type):
            raise StepError(
                f"Runtime Object type '{runtime_type}' is not a possible type"
                f" for '{abstract_type}'.",
                step_info=step_info,
            )
        return step_info.with_replaced_type(runtime_type)

    def null_bubble_target(self, step_info: StepInfo) -> StepInfo | None:
        """The nearest step at or above `step_info` allowed to be null.

        None means the null goes past the root and the whole result is null.
        """
        current: StepInfo | None = step_info
        while current is not None and current.is_non_null_type():
            current = current.parent
        if current is not step_info:
            logger.debug(
                f"null at {step_info.path} bubbles up to"
                f" {current.path if current else 'the root'}"
            )
        return current

    def check_non_null(self, step_info: StepInfo, value: ValueType) -> ValueType:
        if value is None and step_info.is_non_null_type():
            raise NonNullableFieldWasNull(step_info)
        return value


__all__ = ["StepInfoFactory"]
