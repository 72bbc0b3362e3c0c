from .step_info import (
    Arguments,
    StepInfo,
    StepInfoBuilder,
    new_step_info,
    with_replaced_type,
)
from .path import ResultPath
from .merged_field import MergedField
from .factory import StepInfoFactory
from .errors import (
    InvariantViolation,
    StepError,
    NonNullableFieldWasNull,
    step_errors_to_graphql_errors,
)

__all__ = [
    "StepInfo",
    "StepInfoBuilder",
    "Arguments",
    "new_step_info",
    "with_replaced_type",
    "ResultPath",
    "MergedField",
    "StepInfoFactory",
    "InvariantViolation",
    "StepError",
    "NonNullableFieldWasNull",
    "step_errors_to_graphql_errors",
]
