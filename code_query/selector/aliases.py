"""
ESTree / Babel node type names mapped to tree-sitter node types.

Selectors written for ESTree-based tools (``TSAsExpression``,
``CallExpression > MemberExpression``) keep working against tree-sitter trees.
A step type not listed here is compared with the tree-sitter type directly.
Attribute paths get the same treatment: ``callee``, ``id``, ``init`` and the
other ESTree property names resolve to the matching tree-sitter field, and
``name``/``value`` read the text of identifiers and literals.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from typing import Dict, FrozenSet, Optional

_ALIASES: Dict[str, tuple[str, ...]] = {
    # Program / statements
    "Program": ("program",),
    "ExpressionStatement": ("expression_statement",),
    "BlockStatement": ("statement_block",),
    "EmptyStatement": ("empty_statement",),
    "ReturnStatement": ("return_statement",),
    "IfStatement": ("if_statement",),
    "SwitchStatement": ("switch_statement",),
    "SwitchCase": ("switch_case", "switch_default"),
    "ForStatement": ("for_statement",),
    "ForInStatement": ("for_in_statement",),
    "ForOfStatement": ("for_in_statement",),
    "WhileStatement": ("while_statement",),
    "DoWhileStatement": ("do_statement",),
    "BreakStatement": ("break_statement",),
    "ContinueStatement": ("continue_statement",),
    "ThrowStatement": ("throw_statement",),
    "TryStatement": ("try_statement",),
    "CatchClause": ("catch_clause",),
    "LabeledStatement": ("labeled_statement",),
    "DebuggerStatement": ("debugger_statement",),
    # Declarations
    "VariableDeclaration": ("lexical_declaration", "variable_declaration"),
    "VariableDeclarator": ("variable_declarator",),
    "FunctionDeclaration": ("function_declaration", "generator_function_declaration"),
    "ClassDeclaration": ("class_declaration", "abstract_class_declaration"),
    "ClassBody": ("class_body",),
    "ClassMethod": ("method_definition",),
    "MethodDefinition": ("method_definition",),
    "ClassProperty": ("public_field_definition", "field_definition"),
    "PropertyDefinition": ("public_field_definition", "field_definition"),
    "ImportDeclaration": ("import_statement",),
    "ImportSpecifier": ("import_specifier",),
    "ImportNamespaceSpecifier": ("namespace_import",),
    "ExportNamedDeclaration": ("export_statement",),
    "ExportDefaultDeclaration": ("export_statement",),
    "ExportSpecifier": ("export_specifier",),
    # Expressions
    "Identifier": (
        "identifier",
        "property_identifier",
        "shorthand_property_identifier",
        "shorthand_property_identifier_pattern",
        "type_identifier",
        "private_property_identifier",
    ),
    "ThisExpression": ("this",),
    "Super": ("super",),
    "CallExpression": ("call_expression",),
    "NewExpression": ("new_expression",),
    "MemberExpression": ("member_expression", "subscript_expression"),
    "OptionalMemberExpression": ("member_expression", "subscript_expression"),
    "OptionalCallExpression": ("call_expression",),
    "ArrowFunctionExpression": ("arrow_function",),
    "FunctionExpression": ("function_expression", "function", "generator_function"),
    "ClassExpression": ("class",),
    "AssignmentExpression": ("assignment_expression", "augmented_assignment_expression"),
    "BinaryExpression": ("binary_expression",),
    "LogicalExpression": ("binary_expression",),
    "UnaryExpression": ("unary_expression",),
    "UpdateExpression": ("update_expression",),
    "ConditionalExpression": ("ternary_expression",),
    "SequenceExpression": ("sequence_expression",),
    "AwaitExpression": ("await_expression",),
    "YieldExpression": ("yield_expression",),
    "SpreadElement": ("spread_element",),
    "RestElement": ("rest_pattern",),
    "ObjectExpression": ("object",),
    "ObjectPattern": ("object_pattern",),
    "ArrayExpression": ("array",),
    "ArrayPattern": ("array_pattern",),
    "Property": ("pair", "shorthand_property_identifier"),
    "ObjectProperty": ("pair", "shorthand_property_identifier"),
    "AssignmentPattern": ("assignment_pattern", "object_assignment_pattern"),
    "ParenthesizedExpression": ("parenthesized_expression",),
    "TemplateLiteral": ("template_string",),
    "TemplateElement": ("string_fragment",),
    # Literals
    "Literal": (
        "string",
        "number",
        "true",
        "false",
        "null",
        "regex",
    ),
    "StringLiteral": ("string",),
    "NumericLiteral": ("number",),
    "BooleanLiteral": ("true", "false"),
    "NullLiteral": ("null",),
    "RegExpLiteral": ("regex",),
    # JSX
    "JSXElement": ("jsx_element", "jsx_self_closing_element"),
    "JSXOpeningElement": ("jsx_opening_element", "jsx_self_closing_element"),
    "JSXClosingElement": ("jsx_closing_element",),
    "JSXAttribute": ("jsx_attribute",),
    "JSXExpressionContainer": ("jsx_expression",),
    "JSXText": ("jsx_text",),
    "JSXNamespacedName": ("jsx_namespace_name",),
    # TypeScript
    "TSAsExpression": ("as_expression",),
    "TSSatisfiesExpression": ("satisfies_expression",),
    "TSNonNullExpression": ("non_null_expression",),
    "TSTypeAssertion": ("type_assertion",),
    "TSTypeAnnotation": ("type_annotation",),
    "TSTypeAliasDeclaration": ("type_alias_declaration",),
    "TSInterfaceDeclaration": ("interface_declaration",),
    "TSInterfaceBody": ("interface_body", "object_type"),
    "TSEnumDeclaration": ("enum_declaration",),
    "TSModuleDeclaration": ("module", "internal_module"),
    "TSTypeReference": ("type_identifier", "generic_type", "nested_type_identifier"),
    "TSTypeParameter": ("type_parameter",),
    "TSTypeParameterDeclaration": ("type_parameters",),
    "TSTypeParameterInstantiation": ("type_arguments",),
    "TSUnionType": ("union_type",),
    "TSIntersectionType": ("intersection_type",),
    "TSArrayType": ("array_type",),
    "TSTupleType": ("tuple_type",),
    "TSFunctionType": ("function_type",),
    "TSTypeLiteral": ("object_type",),
    "TSLiteralType": ("literal_type",),
    "TSPropertySignature": ("property_signature",),
    "TSMethodSignature": ("method_signature",),
    "TSDeclareFunction": ("function_signature",),
    "TSAbstractMethodDefinition": ("abstract_method_signature",),
    "Decorator": ("decorator",),
}

ESTREE_ALIASES: Dict[str, FrozenSet[str]] = {
    name: frozenset(types) for name, types in _ALIASES.items()
}


def resolve_node_types(node_type: str) -> FrozenSet[str]:
    """
    Return the tree-sitter types a selector step type stands for.

    ESTree names are matched exactly; anything else is lowercased and
    compared with tree-sitter types.
    """
    aliased = ESTREE_ALIASES.get(node_type)
    if aliased is not None:
        return aliased
    return frozenset({node_type.lower()})


_DECLARATION_TYPES = (
    "function_declaration",
    "generator_function_declaration",
    "function_expression",
    "function",
    "generator_function",
    "class_declaration",
    "abstract_class_declaration",
    "class",
    "variable_declarator",
    "interface_declaration",
    "type_alias_declaration",
    "enum_declaration",
)

_FUNCTION_TYPES = (
    "function_declaration",
    "generator_function_declaration",
    "function_expression",
    "function",
    "generator_function",
    "arrow_function",
    "method_definition",
)

# ESTree attribute name -> {tree-sitter node type: tree-sitter field name}
_FIELD_ALIASES: Dict[str, Dict[str, str]] = {
    "callee": {"call_expression": "function", "new_expression": "constructor"},
    "id": {node_type: "name" for node_type in _DECLARATION_TYPES},
    "init": {"variable_declarator": "value"},
    "params": {node_type: "parameters" for node_type in _FUNCTION_TYPES},
    "test": {"ternary_expression": "condition", "if_statement": "condition"},
    "consequent": {"ternary_expression": "consequence", "if_statement": "consequence"},
    "alternate": {"ternary_expression": "alternative", "if_statement": "alternative"},
}

_QUOTES = ("'", '"')


def resolve_field_alias(attr: str, node_type: str) -> Optional[str]:
    """Return the tree-sitter field an ESTree attribute names on ``node_type``."""
    return _FIELD_ALIASES.get(attr, {}).get(node_type)


def leaf_value(attr: str, node_type: str, text: str) -> Optional[str]:
    """
    Return the ESTree leaf value ``attr`` has on a node without such a field.

    ``name`` is the text of an identifier; ``value`` is the text of a
    literal, with string quotes removed.
    """
    if attr == "name" and node_type in ESTREE_ALIASES["Identifier"]:
        return text
    if attr == "value" and node_type in ESTREE_ALIASES["Literal"]:
        if node_type == "string" and len(text) >= 2 and text[0] in _QUOTES and text[-1] == text[0]:
            return text[1:-1]
        return text
    return None
