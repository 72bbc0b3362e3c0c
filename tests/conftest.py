from collections.abc import Callable

import graphql
import pytest

from gqlsteps import MergedField, StepInfoFactory

PETS_SDL = """
interface Animal {
  name: String!
}

type Dog implements Animal {
  name: String!
  barks: Boolean
}

type Cat implements Animal {
  name: String!
  meows: Boolean
}

union Pet = Dog | Cat

type Query {
  pets: [[Pet]]
  animal(id: ID, name: String): Animal!
  maybeAnimal: Animal
  tags: [[String]]
  dogs(first: Int = 10): [Dog!]!
}

type Mutation {
  adopt(id: ID!): Dog
}
"""


def first_field(source: str) -> MergedField:
    """the top level field of the first operation in `source`, merged with its duplicates"""
    document = graphql.parse(source)
    operation = document.definitions[0]
    assert isinstance(operation, graphql.OperationDefinitionNode)
    nodes = [
        s for s in operation.selection_set.selections if isinstance(s, graphql.FieldNode)
    ]
    key = nodes[0].alias.value if nodes[0].alias else nodes[0].name.value
    return MergedField.of(
        *[n for n in nodes if (n.alias.value if n.alias else n.name.value) == key]
    )


def child_field(field: MergedField, name: str) -> MergedField:
    selection_set = field.single_field.selection_set
    assert selection_set is not None
    for node in selection_set.selections:
        if isinstance(node, graphql.FieldNode) and node.name.value == name:
            return MergedField.of(node)
    raise LookupError(name)


@pytest.fixture(scope="module")
def schema() -> graphql.GraphQLSchema:
    return graphql.build_schema(PETS_SDL)


@pytest.fixture
def factory(schema: graphql.GraphQLSchema) -> StepInfoFactory:
    return StepInfoFactory(schema=schema)


@pytest.fixture
def field_of() -> Callable[[str], MergedField]:
    return first_field


@pytest.fixture
def child_of() -> Callable[[MergedField, str], MergedField]:
    return child_field
