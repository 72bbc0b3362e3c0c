import typing as T

import graphql

if T.TYPE_CHECKING:
    from gqlsteps.step_info import StepInfo

MessageType = T.Union[str, T.Callable[[], str]]


class InvariantViolation(AssertionError):
    """a bug in the calling code, never a problem with the query itself"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def _build_message(message: MessageType) -> str:
    return message() if callable(message) else message


def assert_not_null(value: T.Any, message: MessageType) -> T.Any:
    if value is None:
        raise InvariantViolation(_build_message(message))
    return value


def assert_true(condition: bool, message: MessageType) -> None:
    if not condition:
        raise InvariantViolation(_build_message(message))


class StepError(Exception):
    def __init__(
        self,
        message: str,
        *,
        step_info: "StepInfo",
        original_error: Exception | None = None,
        extensions: dict[str, T.Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.step_info = step_info
        self.original_error = original_error
        self.extensions = extensions

    @property
    def path(self) -> list[str | int]:
        return self.step_info.path.to_list()

    @property
    def nodes(self) -> list[graphql.FieldNode] | None:
        if self.step_info.field is None:
            return None
        return list(self.step_info.field.fields)


class NonNullableFieldWasNull(StepError):
    def __init__(self, step_info: "StepInfo"):
        parent_type = (
            step_info.parent.unwrapped_non_null_type() if step_info.parent else None
        )
        message = (
            f"Cannot return null for non-nullable type: '{step_info.simple_print()}'"
            f" within parent '{parent_type}' ({step_info.path})"
        )
        super().__init__(message, step_info=step_info)


def step_errors_to_graphql_errors(
    step_errors: T.Iterable[StepError],
) -> list[graphql.GraphQLError]:
    graphql_errors: list[graphql.GraphQLError] = []
    for e in step_errors:
        graphql_errors.append(
            graphql.GraphQLError(
                message=e.message,
                nodes=e.nodes,
                path=e.path,
                original_error=e.original_error,
                extensions=e.extensions,
            )
        )
    return graphql_errors


__all__ = [
    "InvariantViolation",
    "assert_not_null",
    "assert_true",
    "StepError",
    "NonNullableFieldWasNull",
    "step_errors_to_graphql_errors",
]
