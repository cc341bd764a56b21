#!/usr/bin/env python3
"""Demonstration of building GraphQL payload strings.

This script shows how to:
1. Describe operations by hand or parse them from SDL
2. Render each document template

Note: This demo doesn't make real API calls - it just prints documents.
"""

from gql_payload.core import (
    BuilderOptions,
    EnumStrategy,
    OperationDescriptor,
    OperationKind,
    QueryBuilder,
    SchemaParser,
)

SDL = """
enum Status { ACTIVE INACTIVE }
type Profile { name: String email: String }
type User { id: ID! status: Status profile: Profile }
type Query { users(status: Status, name: String): [User] }
type Mutation { updateUser(id: ID!, status: Status, name: String): User }
"""


def main():
    print("=== GraphQL Payload Demo ===\n")

    print("1. Hand-written descriptor")
    users = QueryBuilder(OperationDescriptor(
        name="users",
        kind=OperationKind.QUERY,
        output_fields={"id": "id", "profile": {"name": "name"}},
        enums={"status"},
    ))
    print(f"   build:    {users.build({'status': 'ACTIVE', 'name': 'Bob'})}")
    print(f"   single:   {users.build_single(42)}")
    print(f"   list:     {users.build_list(['id'])}")
    print(f"   paginate: {users.build_paginate(10, 2, {'id': 'id'})}")
    print(f"   search:   {users.build_search(10, 1, {'status': 'ACTIVE'})}")

    print("\n2. Descriptors parsed from SDL")
    descriptors = SchemaParser(SDL).parse_all()
    for name, descriptor in descriptors.items():
        print(f"   {descriptor.kind.value} {name} (enums: {sorted(descriptor.enums)})")

    update = QueryBuilder(descriptors["updateUser"])
    print(f"   update:   {update.build_update(7, {'status': 'INACTIVE'})}")
    print(f"   no shape: {update.build_without_fields({'id': 7, 'name': 'Bob'})}")

    print("\n3. Find/replace enum strategy")
    replacing = QueryBuilder(
        descriptors["users"],
        BuilderOptions(enum_strategy=EnumStrategy.REPLACE),
    )
    print(f"   {replacing.build({'status': 'ACTIVE', 'name': 'ACTIVE'}, ['id'])}")


if __name__ == "__main__":
    main()
