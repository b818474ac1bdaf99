#
# Copyright (c) Contributors to the Open 3D Engine Project.
# For complete copyright and license terms please see the LICENSE at the root of this distribution.
#
# SPDX-License-Identifier: Apache-2.0 OR MIT
#
"""
C# setting field scanner for SimpleGrasshopper

Parses C# plugin sources with tree-sitter and collects the fields tagged with
the GH_Setting attribute, grouped by the class or struct that declares them.

Usage:
    from csharp_setting_parser import parse_setting_file

    for setting_type in parse_setting_file("Source/MySettings.cs"):
        print(setting_type.qualified_name, [f.name for f in setting_type.fields])
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

import tree_sitter_c_sharp
from tree_sitter import Language, Node, Parser

# Set up logging
logger = logging.getLogger("SimpleGrasshopper.SettingParser")

CSHARP_LANGUAGE = Language(tree_sitter_c_sharp.language())

DEFAULT_SETTING_ATTRIBUTE = "GH_Setting"

# Namespace used when a type is declared outside of any namespace
GLOBAL_NAMESPACE_NAME = "Null"

TYPE_DECLARATION_KINDS = {
    "class_declaration": "class",
    "struct_declaration": "struct",
}

NAMESPACE_DECLARATIONS = (
    "namespace_declaration",
    "file_scoped_namespace_declaration",
)


# ============================================================
# Data Classes
# ============================================================


@dataclass
class SettingField:
    """A single variable declarator of a GH_Setting field."""

    name: str
    type_name: str
    is_static: bool = False
    path: str = ""
    line: int = 0
    column: int = 0
    type_line: int = 0
    type_column: int = 0


@dataclass
class SettingType:
    """A class or struct that declares one or more GH_Setting fields."""

    name: str
    namespace: str = GLOBAL_NAMESPACE_NAME
    kind: str = "class"
    source_path: str = ""
    fields: List[SettingField] = field(default_factory=list)

    @property
    def qualified_name(self) -> str:
        return f"{self.namespace}.{self.name}"


# ============================================================
# Parsing
# ============================================================


def parse_setting_types(
    source: str,
    path: str = "",
    attribute_name: str = DEFAULT_SETTING_ATTRIBUTE,
) -> List[SettingType]:
    """
    Collect the setting fields declared in a C# source text.

    Args:
        source: The C# source code
        path: Path of the source, recorded on the results for diagnostics
        attribute_name: Simple name of the marker attribute

    Returns:
        Setting types in source order, each with its fields in source order
    """
    src = source.encode("utf-8")
    tree = Parser(CSHARP_LANGUAGE).parse(src)
    root = tree.root_node

    if root.has_error:
        logger.warning(f"Syntax errors in {path or '<source>'}, results may be partial")

    wanted = _simple_attribute_name(attribute_name)
    types: Dict[Tuple[int, int], SettingType] = {}

    for field_node in _walk_nodes(root, "field_declaration"):
        type_node = _get_declaring_type(field_node)
        if type_node is None:
            continue

        if not _has_attribute(field_node, wanted, src):
            continue

        key = (type_node.start_byte, type_node.end_byte)
        setting_type = types.get(key)
        if setting_type is None:
            name_node = type_node.child_by_field_name("name")
            setting_type = SettingType(
                name=_node_text(name_node, src) if name_node else "",
                namespace=_find_namespace(type_node, root, src),
                kind=TYPE_DECLARATION_KINDS[type_node.type],
                source_path=path,
            )
            types[key] = setting_type

        setting_type.fields.extend(_parse_field(field_node, src, path))

    logger.debug(
        f"Found {sum(len(t.fields) for t in types.values())} setting fields "
        f"in {len(types)} types in {path or '<source>'}"
    )
    return list(types.values())


def parse_setting_file(
    path, attribute_name: str = DEFAULT_SETTING_ATTRIBUTE
) -> List[SettingType]:
    """
    Read a C# file and collect its setting fields.

    Args:
        path: Path to the .cs file
        attribute_name: Simple name of the marker attribute

    Returns:
        Setting types declared in the file
    """
    file_path = Path(path)
    # Visual Studio writes sources with a BOM
    source = file_path.read_text(encoding="utf-8-sig")
    return parse_setting_types(source, str(file_path), attribute_name)


def _parse_field(field_node: Node, src: bytes, path: str = "") -> List[SettingField]:
    """Turn a field declaration into one SettingField per declarator."""
    is_static = any(
        _node_text(child, src) == "static"
        for child in field_node.children
        if child.type == "modifier"
    )

    declaration = next(
        (c for c in field_node.named_children if c.type == "variable_declaration"),
        None,
    )
    if declaration is None:
        return []

    type_node = declaration.child_by_field_name("type")
    type_name = _node_text(type_node, src) if type_node else ""
    type_line, type_column = _location(type_node, src) if type_node else (0, 0)

    fields = []
    for declarator in declaration.named_children:
        if declarator.type != "variable_declarator":
            continue

        name_node = declarator.child_by_field_name("name") or next(
            (c for c in declarator.named_children if c.type == "identifier"), None
        )
        if name_node is None:
            continue

        line, column = _location(name_node, src)
        fields.append(
            SettingField(
                name=_node_text(name_node, src),
                type_name=type_name,
                is_static=is_static,
                path=path,
                line=line,
                column=column,
                type_line=type_line,
                type_column=type_column,
            )
        )

    return fields


# ============================================================
# Tree Helpers
# ============================================================


def _walk_nodes(node: Node, *node_types: str) -> Iterator[Node]:
    """Yield all descendant nodes (including self) matching any of the given types."""
    if node.type in node_types:
        yield node
    for child in node.children:
        yield from _walk_nodes(child, *node_types)


def _node_text(node: Node, src: bytes) -> str:
    return src[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def _location(node: Node, src: bytes) -> Tuple[int, int]:
    """1-based line and character column of a node."""
    row, byte_column = node.start_point
    prefix = src[node.start_byte - byte_column : node.start_byte]
    return row + 1, len(prefix.decode("utf-8", errors="replace")) + 1


def _get_declaring_type(field_node: Node) -> Optional[Node]:
    """The class or struct whose body directly contains the field."""
    body = field_node.parent
    if body is None or body.type != "declaration_list":
        return None
    owner = body.parent
    if owner is None or owner.type not in TYPE_DECLARATION_KINDS:
        return None
    return owner


def _find_namespace(type_node: Node, root: Node, src: bytes) -> str:
    """Name of the nearest namespace around a type declaration."""
    parent = type_node.parent
    while parent is not None:
        if parent.type in NAMESPACE_DECLARATIONS:
            return _namespace_name(parent, src)
        parent = parent.parent

    # File scoped namespaces may be siblings of the declarations they cover
    for child in root.children:
        if (
            child.type == "file_scoped_namespace_declaration"
            and child.start_byte < type_node.start_byte
        ):
            return _namespace_name(child, src)

    return GLOBAL_NAMESPACE_NAME


def _namespace_name(namespace_node: Node, src: bytes) -> str:
    name_node = namespace_node.child_by_field_name("name")
    if name_node is None:
        return GLOBAL_NAMESPACE_NAME
    return "".join(_node_text(name_node, src).split())


def _has_attribute(field_node: Node, wanted: str, src: bytes) -> bool:
    for attribute_list in field_node.children:
        if attribute_list.type != "attribute_list":
            continue
        for attribute in _walk_nodes(attribute_list, "attribute"):
            name_node = attribute.child_by_field_name("name")
            if name_node is None:
                continue
            if _simple_attribute_name(_node_text(name_node, src)) == wanted:
                return True
    return False


def _simple_attribute_name(name: str) -> str:
    """
    Reduce an attribute reference to its simple name.

    "global::SimpleGrasshopper.Attributes.GH_SettingAttribute" -> "GH_Setting"
    """
    simple = "".join(name.split()).split("::")[-1].split(".")[-1]
    if simple.endswith("Attribute") and simple != "Attribute":
        simple = simple[: -len("Attribute")]
    return simple
