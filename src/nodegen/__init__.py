"""nodegen - Intermediate representation for AST boilerplate generators."""

from nodegen.codecs import (
    from_builtins,
    to_builtins,
)
from nodegen.definitions import Definitions
from nodegen.features import (
    FeatureConflictError,
    Features,
)
from nodegen.formats.json import (
    from_json,
    to_json,
)
from nodegen.nodes import (
    Enum,
    Field,
    Node,
    Struct,
    Variant,
)
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
from nodegen.validate import (
    DuplicateIdentError,
    UnresolvedItemError,
    ValidationError,
    ValidationResult,
    validate,
)

__all__ = [
    # Types
    "Box",
    # Declarations
    "Definitions",
    # Validation
    "DuplicateIdentError",
    "Enum",
    "Ext",
    # Features
    "FeatureConflictError",
    "Features",
    "Field",
    "Group",
    "Item",
    "Node",
    "Option",
    "Punctuated",
    "Std",
    "Struct",
    "Token",
    "Tuple",
    "Type",
    "UnresolvedItemError",
    "ValidationError",
    "ValidationResult",
    "Variant",
    "Vec",
    # Serialization
    "from_builtins",
    "from_json",
    "to_builtins",
    "to_json",
    "validate",
    "walk",
]
