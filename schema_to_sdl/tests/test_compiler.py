"""
Tests for batch compilation: cross-references, unions and strict mode.
"""

from __future__ import annotations

import pytest

from schema_to_sdl import (
    CompileOptions,
    SchemaReferenceError,
    SdlCompiler,
    StructuralError,
    TypeRegistry,
    schemas_to_sdl,
    to_sdl,
)
from schema_to_sdl.schema_ast import nodes as s
from schema_to_sdl.schema_ast.nodes import ListNode, ObjectNode


class TestBatch:
    def test_multiple_schemas(self):
        result = schemas_to_sdl(
            {
                "Age": s.obj(min=s.integer().optional(), max=s.integer().optional()),
                "Role": s.obj(id=s.uuid(), name=s.string()),
            }
        )
        assert result == "type Age {\n  min: Int\n  max: Int\n}\n\ntype Role {\n  id: UUID!\n  name: String!\n}"

    def test_enum_in_batch(self):
        result = schemas_to_sdl({"DrinkType": s.enum("liquor", "beer", "Wine")}, CompileOptions(preserve_enum_case=True))
        assert result == "enum DrinkType {\n  liquor\n  beer\n  Wine\n}"

    def test_empty_batch(self):
        assert schemas_to_sdl({}) == ""

    def test_object_field_references(self):
        product = s.obj(id=s.uuid(), name=s.string())
        location = s.obj(id=s.uuid(), address=s.string())
        inventory = s.obj(id=s.uuid(), product=product, location=location.optional(), quantity=s.integer())

        result = schemas_to_sdl({"DomainProduct": product, "DomainLocation": location, "DomainInventory": inventory})

        assert result == (
            "type DomainProduct {\n  id: UUID!\n  name: String!\n}\n\n"
            "type DomainLocation {\n  id: UUID!\n  address: String!\n}\n\n"
            "type DomainInventory {\n  id: UUID!\n  product: DomainProduct!\n  location: DomainLocation\n  quantity: Int!\n}"
        )

    def test_forward_reference(self):
        tag = s.obj(name=s.string())
        article = s.obj(title=s.string(), tags=s.array(tag))

        result = schemas_to_sdl({"Article": article, "Tag": tag})

        assert result == "type Article {\n  title: String!\n  tags: [Tag!]!\n}\n\ntype Tag {\n  name: String!\n}"

    def test_merges_user_types_with_auto_registered(self):
        external = s.obj(value=s.string())
        internal = s.obj(name=s.string())
        main = s.obj(external=external, internal=internal)

        result = schemas_to_sdl(
            {"Internal": internal, "Main": main},
            CompileOptions(types=TypeRegistry({external: "ExternalType"})),
        )

        assert result == "type Internal {\n  name: String!\n}\n\ntype Main {\n  external: ExternalType!\n  internal: Internal!\n}"

    def test_auto_registration_wins_over_seed(self):
        tag = s.obj(name=s.string())
        article = s.obj(tag=tag)
        options = CompileOptions(types=TypeRegistry({tag: "OldTag"}))

        result = schemas_to_sdl({"Tag": tag, "Article": article}, options)

        assert "  tag: Tag!" in result
        assert "OldTag" not in result

    def test_seed_registry_is_not_mutated(self):
        seed = TypeRegistry()
        schemas_to_sdl({"Tag": s.obj(name=s.string())}, CompileOptions(types=seed))
        assert len(seed) == 0

    def test_self_referencing_registered_object(self):
        category = ObjectNode()
        category.fields = {"name": s.string(), "parent": category.optional(), "children": s.array(category)}

        result = schemas_to_sdl({"Category": category}, CompileOptions(strict=True))

        assert result == "type Category {\n  name: String!\n  parent: Category\n  children: [Category!]!\n}"


class TestObjectUnions:
    def test_union_declaration(self):
        dog = s.obj(breed=s.string())
        cat = s.obj(meows=s.boolean())

        result = schemas_to_sdl({"Dog": dog, "Cat": cat, "Pet": s.union(dog, cat)})

        assert result == "type Dog {\n  breed: String!\n}\n\ntype Cat {\n  meows: Boolean!\n}\n\nunion Pet = Dog | Cat"

    def test_registered_union_as_field_type(self):
        dog = s.obj(breed=s.string())
        cat = s.obj(meows=s.boolean())
        pet = s.union(dog, cat)
        owner = s.obj(name=s.string(), pet=pet)

        result = schemas_to_sdl({"Dog": dog, "Cat": cat, "Pet": pet, "Owner": owner})

        assert result == (
            "type Dog {\n  breed: String!\n}\n\n"
            "type Cat {\n  meows: Boolean!\n}\n\n"
            "union Pet = Dog | Cat\n\n"
            "type Owner {\n  name: String!\n  pet: Pet!\n}"
        )

    def test_union_member_declared_later(self):
        dog = s.obj(breed=s.string())
        result = schemas_to_sdl({"Pet": s.union(dog), "Dog": dog})
        assert result.startswith("union Pet = Dog\n\n")

    def test_union_with_unregistered_member(self):
        dog = s.obj(breed=s.string())
        with pytest.raises(StructuralError, match='Union "Pet"'):
            schemas_to_sdl({"Dog": dog, "Pet": s.union(dog, s.obj(meows=s.boolean()))})


class TestStrictMode:
    def test_unregistered_object_field(self):
        main = s.obj(ref=s.obj(foo=s.string()))
        with pytest.raises(SchemaReferenceError, match='Strict mode: Field "ref" on type "Main" references an unregistered object schema') as exc_info:
            schemas_to_sdl({"Main": main}, CompileOptions(strict=True))
        assert exc_info.value.type_name == "Main"
        assert exc_info.value.field_name == "ref"

    def test_unregistered_object_in_array(self):
        main = s.obj(items=s.array(s.obj(foo=s.string())))
        with pytest.raises(SchemaReferenceError, match='Field "items" on type "Main"'):
            schemas_to_sdl({"Main": main}, {"strict": True})

    def test_unregistered_object_in_optional_nested_array(self):
        main = s.obj(grid=s.array(s.array(s.obj().nullable())).optional())
        with pytest.raises(SchemaReferenceError, match='Field "grid"'):
            schemas_to_sdl({"Main": main}, CompileOptions(strict=True))

    def test_registered_references_pass(self):
        tag = s.obj(name=s.string())
        main = s.obj(tags=s.array(tag), first=tag.optional())
        result = schemas_to_sdl({"Tag": tag, "Main": main}, CompileOptions(strict=True))
        assert "  tags: [Tag!]!\n  first: Tag\n" in result

    def test_only_direct_fields_are_checked(self):
        nested = s.obj(deep=s.obj(foo=s.string()))
        main = s.obj(nested=nested)
        result = schemas_to_sdl({"Nested": nested, "Main": main}, CompileOptions(strict=False))
        assert "deep: JSON!" in result
        with pytest.raises(SchemaReferenceError, match='Field "deep" on type "Nested"'):
            schemas_to_sdl({"Nested": nested, "Main": main}, CompileOptions(strict=True))

    def test_non_strict_falls_back_to_json(self):
        main = s.obj(ref=s.obj(foo=s.string()))
        assert schemas_to_sdl({"Main": main}) == "type Main {\n  ref: JSON!\n}"

    def test_strict_error_before_any_output(self):
        compiler = SdlCompiler(CompileOptions(strict=True))
        schemas = {"Bad": s.string(), "Main": s.obj(ref=s.obj())}
        # the reference error is reported although "Bad" would fail emission first
        with pytest.raises(SchemaReferenceError):
            compiler.compile_batch(schemas)

    def test_cyclic_list_in_strict_pass(self):
        loop = ListNode()
        loop.element = loop
        with pytest.raises(StructuralError, match="Cyclic"):
            schemas_to_sdl({"Main": s.obj(items=loop)}, CompileOptions(strict=True))

    def test_single_schema_ignores_strict(self):
        result = SdlCompiler(CompileOptions(strict=True)).compile_single("Main", s.obj(ref=s.obj()))
        assert result == "type Main {\n  ref: JSON!\n}"


class TestToSdl:
    def test_single(self):
        assert to_sdl("Person", s.obj(name=s.string())) == "type Person {\n  name: String!\n}"

    def test_single_with_options(self):
        assert to_sdl("Status", s.enum("Wine"), {"preserve_enum_case": True}) == "enum Status {\n  Wine\n}"

    def test_mapping(self):
        assert to_sdl({"Status": s.enum("a")}) == "enum Status {\n  A\n}"

    def test_mapping_with_options(self):
        with pytest.raises(SchemaReferenceError):
            to_sdl({"Main": s.obj(ref=s.obj())}, CompileOptions(strict=True))

    def test_name_without_schema(self):
        with pytest.raises(TypeError):
            to_sdl("Person")

    def test_mapping_with_schema_argument(self):
        with pytest.raises(TypeError):
            to_sdl({"A": s.enum("a")}, s.enum("b"))
