import graphql

from gqlsteps.errors import assert_true


def is_non_null(gql_type: graphql.GraphQLType) -> bool:
    return isinstance(gql_type, graphql.GraphQLNonNull)


def is_list(gql_type: graphql.GraphQLType) -> bool:
    """true for [T] and [T]!"""
    return isinstance(unwrap_non_null(gql_type), graphql.GraphQLList)


def unwrap_non_null(gql_type: graphql.GraphQLType) -> graphql.GraphQLType:
    # graphql-core never nests non-null directly, so one unwrap is enough
    if isinstance(gql_type, graphql.GraphQLNonNull):
        return gql_type.of_type
    return gql_type


def non_null(gql_type: graphql.GraphQLType) -> graphql.GraphQLNonNull:
    assert_true(
        not is_non_null(gql_type), lambda: f"{gql_type} is already non null"
    )
    return graphql.GraphQLNonNull(gql_type)


def unwrap_one(gql_type: graphql.GraphQLType) -> graphql.GraphQLType:
    """[[Pet]!]! -> [Pet]!, [[Pet]] -> [Pet], [Pet] -> Pet"""
    t = unwrap_non_null(gql_type)
    assert_true(
        isinstance(t, graphql.GraphQLList), lambda: f"{gql_type} is not a list type"
    )
    return t.of_type


def list_depth(gql_type: graphql.GraphQLType) -> int:
    depth = 0
    t = gql_type
    while isinstance(t, graphql.GraphQLWrappingType):
        if isinstance(t, graphql.GraphQLList):
            depth += 1
        t = t.of_type
    return depth


def simple_print(gql_type: graphql.GraphQLType) -> str:
    """SDL form, eg [Pet!]!"""
    return str(gql_type)


__all__ = [
    "is_non_null",
    "is_list",
    "unwrap_non_null",
    "non_null",
    "unwrap_one",
    "list_depth",
    "simple_print",
]
