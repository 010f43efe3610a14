"""Tests for nodegen.validate module."""

from nodegen.definitions import Definitions
from nodegen.features import Features
from nodegen.nodes import Enum, Field, Struct, Variant
from nodegen.types import Box, Item, Option, Punctuated, Std, Tuple, Vec
from nodegen.validate import (
    DuplicateIdentError,
    UnresolvedItemError,
    validate,
)


def _struct(ident: str, *fields: Field) -> Struct:
    return Struct(ident, Features(), fields, all_fields_pub=True)


class TestValidateClean:
    """Test definitions without problems."""

    def test_empty(self) -> None:
        """Test that empty definitions validate."""
        result = validate(Definitions())
        assert result.success
        assert result.errors == []
        assert result.format_errors() == "Validation passed."

    def test_resolved_items(self) -> None:
        """Test nested items that all resolve."""
        defs = Definitions(
            types=[
                _struct(
                    "Path",
                    Field("segments", Punctuated(Item("PathSegment"), "PathSep")),
                ),
                _struct("PathSegment", Field("ident", Std("Ident"))),
                Enum(
                    "Type",
                    Features(),
                    (Variant("Path", (Item("Path"),)), Variant("Never")),
                ),
            ],
        )
        assert validate(defs).success


class TestValidateErrors:
    """Test reported problems."""

    def test_unresolved_item_in_field(self) -> None:
        """Test an item nested inside wrappers that names no node."""
        init = Field("init", Option(Box(Item("Expr"))))
        defs = Definitions(types=[_struct("Local", init)])
        result = validate(defs)

        assert not result.success
        (error,) = result.errors
        assert isinstance(error, UnresolvedItemError)
        assert error.name == "Expr"
        assert error.location == "Local.init"

    def test_unresolved_item_in_variant(self) -> None:
        """Test an unresolved item inside a variant tuple payload."""
        defs = Definitions(
            types=[
                Enum(
                    "Stmt",
                    Features(),
                    (Variant("Expr", (Tuple((Item("Expr"), Vec(Item("Semi")))),)),),
                ),
            ],
        )
        result = validate(defs)

        assert [e.name for e in result.errors] == ["Expr", "Semi"]
        assert {e.location for e in result.errors} == {"Stmt::Expr"}

    def test_duplicate_node_idents(self) -> None:
        """Test that two nodes with the same ident are reported."""
        defs = Definitions(types=[_struct("Path"), _struct("Path")])
        (error,) = validate(defs).errors

        assert isinstance(error, DuplicateIdentError)
        assert error.ident == "Path"
        assert error.count == 2
        assert error.location == "definitions"

    def test_duplicate_field_and_variant_idents(self) -> None:
        """Test duplicates inside a struct and inside an enum."""
        defs = Definitions(
            types=[
                _struct(
                    "Arm",
                    Field("body", Std("String")),
                    Field("body", Std("String")),
                ),
                Enum("Lit", Features(), (Variant("Int"), Variant("Int"))),
            ],
        )
        errors = validate(defs).errors

        assert [(e.location, e.ident) for e in errors] == [
            ("Arm", "body"),
            ("Lit", "Int"),
        ]

    def test_format_errors(self) -> None:
        """Test that formatted output lists every error."""
        defs = Definitions(types=[_struct("Local", Field("pat", Item("Pat")))])
        text = validate(defs).format_errors()

        assert text.startswith("Validation failed with 1 error(s):")
        assert "Local.pat: Unresolved item" in text
        assert "'Pat'" in text

    def test_available_truncated(self) -> None:
        """Test that long available lists are truncated."""
        names = [f"Node{i}" for i in range(7)]
        defs = Definitions(
            types=[
                *(_struct(n) for n in names),
                _struct("Bad", Field("x", Item("Missing"))),
            ],
        )
        text = validate(defs).format_errors()

        assert "Node0, Node1, Node2, Node3, Node4 ... (8 total)" in text
