"""Tests for deriving operation descriptors from SDL."""

import pytest
from graphql import parse

from gql_payload.core.errors import SchemaError
from gql_payload.core.graph import render_graph
from gql_payload.core.ir import OperationKind
from gql_payload.core.parser import SchemaParser
from gql_payload.core.query_builder import QueryBuilder

SDL = """
enum Status { ACTIVE INACTIVE }

type Address { city: String }

type Profile {
  name: String
  address: Address
}

type User {
  id: ID!
  status: Status
  profile: Profile
  friends: [User!]
}

type Query {
  "All users"
  users(status: Status, name: String, limit: Int): [User!]!
  user(id: ID!): User
  count: Int
}

extend type Query {
  search(term: String, status: [Status!]): [User]
}

type Mutation {
  updateUser(id: ID!, status: Status!, name: String): User
}
"""


@pytest.fixture
def descriptors():
    return SchemaParser(SDL).parse_all()


class TestOperations:
    """Tests for root-field discovery."""

    def test_finds_queries_and_mutations(self, descriptors):
        assert set(descriptors) == {"users", "user", "count", "search", "updateUser"}
        assert descriptors["users"].kind is OperationKind.QUERY
        assert descriptors["updateUser"].kind is OperationKind.MUTATION

    def test_description(self, descriptors):
        assert descriptors["users"].description == "All users"
        assert descriptors["user"].description is None

    def test_enum_arguments(self, descriptors):
        assert descriptors["users"].enums == frozenset({"status"})
        assert descriptors["updateUser"].enums == frozenset({"status"})
        assert descriptors["user"].enums == frozenset()

    def test_list_wrapped_enum_argument(self, descriptors):
        assert descriptors["search"].enums == frozenset({"status"})


class TestOutputFields:
    """Tests for default output selections."""

    def test_nested_selection_skips_cycles(self, descriptors):
        graph = render_graph(descriptors["users"].output_fields)
        assert graph == "{ id status profile { name address { city } } }"

    def test_max_depth(self):
        descriptors = SchemaParser(SDL, max_depth=2).parse_all()
        graph = render_graph(descriptors["users"].output_fields)
        assert graph == "{ id status profile { name } }"

    def test_scalar_return_type(self, descriptors):
        assert descriptors["count"].output_fields.is_empty

    def test_union_fields_select_typename(self):
        descriptors = SchemaParser(
            "type A { a: Int }\n"
            "type B { b: Int }\n"
            "union AB = A | B\n"
            "type Holder { id: ID thing: AB things: [AB!] }\n"
            "type Query { holder: Holder anything: AB }"
        ).parse_all()
        builder = QueryBuilder(descriptors["holder"])
        result = builder.build_single(1)
        assert result == (
            "query { holder(id:1) { id thing { __typename } things { __typename } } }"
        )
        parse(result)
        assert render_graph(descriptors["anything"].output_fields) == "{ __typename }"

    def test_union_extension(self):
        descriptors = SchemaParser(
            "type A { a: Int }\n"
            "extend union Later = A\n"
            "type Query { later: Later }"
        ).parse_all()
        assert render_graph(descriptors["later"].output_fields) == "{ __typename }"

    def test_interface_extension_merges_fields(self):
        descriptors = SchemaParser(
            "interface Named { name: String }\n"
            "extend interface Named { alias: String }\n"
            "type Query { named: Named }"
        ).parse_all()
        assert render_graph(descriptors["named"].output_fields) == "{ name alias }"

    def test_invalid_max_depth(self):
        with pytest.raises(ValueError):
            SchemaParser(SDL, max_depth=0)


class TestSources:
    """Tests for reading SDL from files and directories."""

    def test_file(self, tmp_path):
        path = tmp_path / "schema.graphqls"
        path.write_text(SDL)
        assert "users" in SchemaParser(str(path)).parse_all()

    def test_directory_merges_files(self, tmp_path):
        (tmp_path / "enums.graphqls").write_text("enum Role { ADMIN MEMBER }")
        (tmp_path / "query.graphqls").write_text(
            "type Member { id: ID role: Role }\n"
            "type Query { members(role: Role): [Member] }"
        )
        descriptors = SchemaParser(str(tmp_path)).parse_all()
        assert descriptors["members"].enums == frozenset({"role"})
        assert render_graph(descriptors["members"].output_fields) == "{ id role }"

    def test_empty_directory(self, tmp_path):
        with pytest.raises(SchemaError):
            SchemaParser(str(tmp_path)).parse_all()

    def test_syntax_error(self):
        with pytest.raises(SchemaError):
            SchemaParser("type Query {").parse_all()


class TestWithBuilder:
    """Parsed descriptors drive the query builder."""

    def test_build(self, descriptors):
        builder = QueryBuilder(descriptors["users"])
        result = builder.build({"status": "ACTIVE", "name": "Bob"})
        assert result == (
            'query { users(status:ACTIVE,name:"Bob") '
            "{ id status profile { name address { city } } } }"
        )

    def test_update(self, descriptors):
        builder = QueryBuilder(descriptors["updateUser"])
        result = builder.build_update(3, {"status": "INACTIVE"}, ["id", "status"])
        assert result == "mutation { updateUser(id:3 status:INACTIVE) { id status } }"
