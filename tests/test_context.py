"""Tests for validation_context and validate()."""

from formwork import Err, Int, Ok, Struct, is_strict, validate, validation_context


class TestValidationContext:
    def test_strict_by_default(self):
        assert is_strict() is True
        assert isinstance(validate({"page": "2"}, Struct({"page": Int})), Err)

    def test_non_strict_block(self):
        page = Struct({"page": Int})
        with validation_context(strict=False):
            assert is_strict() is False
            assert validate({"page": "2"}, page) == Ok({"page": 2})
        assert is_strict() is True

    def test_nested_contexts_restore(self):
        with validation_context(strict=False):
            with validation_context(strict=True):
                assert is_strict() is True
            assert is_strict() is False

    def test_restored_after_exception(self):
        try:
            with validation_context(strict=False):
                raise KeyError("x")
        except KeyError:
            pass
        assert is_strict() is True

    def test_shorthand_schema(self):
        assert validate({"name": "Alice", "extra": 1}, {"name": str}) == Ok({"name": "Alice"})
