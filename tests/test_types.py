"""Tests for nodegen.types module."""

import pytest

from nodegen.types import (
    Box,
    Ext,
    Group,
    Item,
    Option,
    Punctuated,
    Std,
    Token,
    Tuple,
    Type,
    Vec,
    walk,
)


class TestTypeTags:
    """Test automatic tag derivation and registration."""

    def test_tags_are_lowercased_variant_names(self) -> None:
        """Test that every variant registers under its lower-cased class name."""
        assert Item.tag == "item"
        assert Std.tag == "std"
        assert Ext.tag == "ext"
        assert Token.tag == "token"
        assert Group.tag == "group"
        assert Punctuated.tag == "punctuated"
        assert Option.tag == "option"
        assert Box.tag == "box"
        assert Vec.tag == "vec"
        assert Tuple.tag == "tuple"

    def test_registry_contains_all_variants(self) -> None:
        """Test that the registry maps tags back to classes."""
        assert Type.registry["item"] is Item
        assert Type.registry["punctuated"] is Punctuated
        assert Type.registry["tuple"] is Tuple

    def test_duplicate_tag_rejected(self) -> None:
        """Test that registering a second class under a taken tag fails."""
        with pytest.raises(ValueError, match="already registered"):

            class Other(Type, tag="item"):
                name: str

        assert Type.registry["item"] is Item


class TestNameTypes:
    """Test the name-only variants."""

    def test_item_holds_name(self) -> None:
        """Test creating an Item reference."""
        assert Item("Expr").name == "Expr"

    def test_std_ext_token_group(self) -> None:
        """Test creating the other opaque name variants."""
        assert Std("String").name == "String"
        assert Ext("Span").name == "Span"
        assert Token("Eq").name == "Eq"
        assert Group("Brace").name == "Brace"

    def test_types_are_frozen(self) -> None:
        """Test that types are immutable."""
        item = Item("Expr")
        with pytest.raises((AttributeError, TypeError)):
            item.name = "Pat"


class TestWrapperTypes:
    """Test wrapper and composite variants."""

    def test_nested_wrappers(self) -> None:
        """Test that wrappers nest arbitrarily."""
        ty = Option(Box(Item("Expr")))
        assert isinstance(ty.inner, Box)
        assert ty.inner.inner == Item("Expr")

    def test_punctuated_element(self) -> None:
        """Test read access to a punctuated list's element type."""
        ty = Punctuated(element=Item("Expr"), punct="Comma")
        assert ty.element == Item("Expr")
        assert ty.punct == "Comma"

    def test_tuple_stores_elements_as_tuple(self) -> None:
        """Test that Tuple keeps a read-only copy of its elements."""
        elements = [Token("Eq"), Item("Expr")]
        ty = Tuple(elements)
        elements.append(Std("String"))
        assert ty.elements == (Token("Eq"), Item("Expr"))

    def test_vec_frozen(self) -> None:
        """Test that wrappers are immutable."""
        ty = Vec(Item("Attribute"))
        with pytest.raises((AttributeError, TypeError)):
            ty.inner = Item("Expr")


class TestWalk:
    """Test pre-order traversal of nested types."""

    def test_leaf_yields_itself(self) -> None:
        """Test walking a name-only type."""
        assert list(walk(Std("String"))) == [Std("String")]

    def test_wrapper_before_child(self) -> None:
        """Test that wrappers are visited before their children."""
        ty = Option(Box(Item("Expr")))
        assert list(walk(ty)) == [ty, ty.inner, Item("Expr")]

    def test_tuple_elements_in_order(self) -> None:
        """Test that tuple elements are visited left to right."""
        ty = Tuple((Token("Eq"), Vec(Item("Expr")), Item("Pat")))
        assert [t.tag for t in walk(ty)] == ["tuple", "token", "vec", "item", "item"]

    def test_punctuated_element_visited(self) -> None:
        """Test that punctuated element types are walked."""
        ty = Punctuated(element=Box(Item("Expr")), punct="Comma")
        names = [t.name for t in walk(ty) if isinstance(t, Item)]
        assert names == ["Expr"]
