from unittest import TestCase

from schema_to_sdl.analyzer import FieldTypeResolver
from schema_to_sdl.config import CompileOptions
from schema_to_sdl.errors import StructuralError
from schema_to_sdl.registry import TypeRegistry
from schema_to_sdl.schema_ast import nodes as s


class TestUnionClassifier(TestCase):
    """Union classification in field position"""

    def classify(self, union, registry=None, **options):
        resolver = FieldTypeResolver(registry or TypeRegistry(), CompileOptions(**options))
        return resolver.union_classifier.classify(union)

    def test_string_literals(self):
        self.assertEqual(self.classify(s.union(s.literal("active"), s.literal("inactive"))), "String")

    def test_string_and_enum(self):
        self.assertEqual(self.classify(s.union(s.string(), s.enum("a", "b"))), "String")

    def test_integer_literals(self):
        self.assertEqual(self.classify(s.union(s.literal(1), s.literal(2), s.literal(3))), "Int")

    def test_float_literals(self):
        self.assertEqual(self.classify(s.union(s.literal(1.5), s.literal(2.5))), "Float")

    def test_int_scalar_with_float_literal(self):
        self.assertEqual(self.classify(s.union(s.integer(), s.literal(0.5))), "Float")

    def test_int_scalar_with_int_literal(self):
        self.assertEqual(self.classify(s.union(s.integer(), s.literal(7))), "Int")

    def test_boolean_literals(self):
        self.assertEqual(self.classify(s.union(s.literal(True), s.literal(False))), "Boolean")

    def test_boolean_literal_is_not_a_number(self):
        with self.assertRaisesRegex(StructuralError, "Union contains mixed types"):
            self.classify(s.union(s.literal(True), s.literal(1)))

    def test_wrapped_members_are_unwrapped(self):
        self.assertEqual(self.classify(s.union(s.string().optional(), s.literal("x"))), "String")

    def test_registered_union(self):
        dog = s.obj(breed=s.string())
        cat = s.obj(meows=s.boolean())
        pet = s.union(dog, cat)
        registry = TypeRegistry([(dog, "Dog"), (cat, "Cat"), (pet, "Pet")])
        self.assertEqual(self.classify(pet, registry), "Pet")

    def test_unregistered_object_union(self):
        union = s.union(s.obj(a=s.string()), s.obj(b=s.string()))
        with self.assertRaisesRegex(StructuralError, "Object union used as a field must be registered"):
            self.classify(union)

    def test_registered_members_do_not_register_the_union(self):
        a = s.obj(a=s.string())
        b = s.obj(b=s.string())
        with self.assertRaisesRegex(StructuralError, "must be registered"):
            self.classify(s.union(a, b), TypeRegistry({a: "A", b: "B"}))

    def test_mixed_string_and_number(self):
        with self.assertRaisesRegex(StructuralError, "Union contains mixed types"):
            self.classify(s.union(s.literal("a"), s.literal(1)))

    def test_uuid_is_not_plain_string(self):
        with self.assertRaisesRegex(StructuralError, "mixed types"):
            self.classify(s.union(s.uuid(), s.string()))

    def test_empty_union(self):
        with self.assertRaisesRegex(StructuralError, "no variants"):
            self.classify(s.union())

    def test_string_override_applies(self):
        self.assertEqual(self.classify(s.union(s.string(), s.literal("x")), scalars={"string": "Text"}), "Text")
