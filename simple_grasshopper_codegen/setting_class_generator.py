#
# Copyright (c) Contributors to the Open 3D Engine Project.
# For complete copyright and license terms please see the LICENSE at the root of this distribution.
#
# SPDX-License-Identifier: Apache-2.0 OR MIT
#
"""
Setting Class Generator for SimpleGrasshopper

This module generates the partial C# classes that expose GH_Setting fields as
static properties persisted through Grasshopper's settings store.

For every field such as:

    [GH_Setting]
    private static int my_field = 5;

the generator emits a property named after the canonical form of the field
name, reading and writing the key "{Namespace}.{Class}.{Property}".

Usage:
    from setting_class_generator import SettingClassGenerator, SettingGeneratorConfig
    from csharp_setting_parser import parse_setting_file

    config = SettingGeneratorConfig()
    config.output_directory = "Generated"

    generator = SettingClassGenerator(config)
    result = generator.generate(parse_setting_file("Source/MySettings.cs"))

    # Write files to disk
    generator.write_files()
"""

import hashlib
import json
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .csharp_setting_parser import DEFAULT_SETTING_ATTRIBUTE, SettingField, SettingType
from .identifier_case import to_pascal_case

# Set up logging
logger = logging.getLogger("SimpleGrasshopper.SettingGenerator")


# Type names Grasshopper's settings store can persist. A declared type is
# accepted when its text ends with one of these.
DEFAULT_VALID_SETTING_TYPES = [
    "bool",
    "Boolean",
    "byte",
    "Byte",
    "DateTime",
    "double",
    "Double",
    "int",
    "Int32",
    "string",
    "String",
    "Color",
    "Point",
    "Rectangle",
    "Size",
]

DEFAULT_USINGS = ["Grasshopper", "System.Drawing"]


# ============================================================
# Diagnostics
# ============================================================

WRONG_KEYWORD = "SG0001"
WRONG_TYPE = "SG0004"
WRONG_NAME = "SG0005"

DIAGNOSTIC_DESCRIPTORS: Dict[str, Tuple[str, str]] = {
    WRONG_KEYWORD: ("Wrong Keyword", "The field should be a static method!"),
    WRONG_TYPE: ("Wrong Type", "This type can't be a grasshopper setting type!"),
    WRONG_NAME: ("Wrong Name", "Please don't use Pascal Case to name your field!"),
}


@dataclass
class Diagnostic:
    """A problem found in a setting field declaration."""

    id: str
    title: str
    message: str
    severity: str = "Warning"
    path: str = ""
    line: int = 0
    column: int = 0

    def format(self) -> str:
        """Format in the compiler's "file(line,col): warning ID: message" layout."""
        location = f"{self.path or '<source>'}({self.line},{self.column})"
        return f"{location}: {self.severity.lower()} {self.id}: {self.message}"


def create_diagnostic(
    diagnostic_id: str, path: str = "", line: int = 0, column: int = 0
) -> Diagnostic:
    title, message = DIAGNOSTIC_DESCRIPTORS[diagnostic_id]
    return Diagnostic(
        id=diagnostic_id,
        title=title,
        message=message,
        path=path,
        line=line,
        column=column,
    )


# ============================================================
# Generator Configuration
# ============================================================


@dataclass
class SettingGeneratorConfig:
    """Configuration for the setting class generator."""

    # Output configuration
    output_directory: str = "Generated"
    write_to_disk: bool = True
    overwrite_existing: bool = True

    # Source scanning
    attribute_name: str = DEFAULT_SETTING_ATTRIBUTE

    # Code generation options
    valid_setting_types: List[str] = field(
        default_factory=lambda: list(DEFAULT_VALID_SETTING_TYPES)
    )
    usings: List[str] = field(default_factory=lambda: list(DEFAULT_USINGS))
    settings_accessor: str = "Instances.Settings"
    file_header: str = ""


def load_generator_config_from_json(
    json_path: str, config: Optional[SettingGeneratorConfig] = None
) -> SettingGeneratorConfig:
    """
    Load generator configuration from a JSON file.

    Keys match the SettingGeneratorConfig attribute names. Unknown keys are
    logged and ignored.

    Args:
        json_path: Path to the JSON file
        config: Configuration to update in place (a new one if omitted)

    Returns:
        The updated configuration
    """
    with open(json_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in {json_path}")

    config = config or SettingGeneratorConfig()
    known = {f.name for f in fields(SettingGeneratorConfig)}

    for key, value in data.items():
        if key not in known:
            logger.warning(f"Ignoring unknown config key '{key}' in {json_path}")
            continue
        setattr(config, key, value)

    return config


@dataclass
class GeneratedFile:
    """Represents a generated C# file."""

    relative_path: str
    content: str
    checksum: str = ""

    def __post_init__(self):
        if not self.checksum:
            self.checksum = hashlib.md5(self.content.encode("utf-8")).hexdigest()


@dataclass
class SettingGeneratorResult:
    """Result of a setting class generation operation."""

    success: bool = False
    error_message: str = ""

    # Statistics
    types_generated: int = 0
    properties_generated: int = 0
    files_written: int = 0

    # Generated files
    generated_files: List[str] = field(default_factory=list)

    # Problems found in the sources
    diagnostics: List[Diagnostic] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


# ============================================================
# C# Code Generation
# ============================================================


class SettingClassGenerator:
    """
    Generates partial C# classes from GH_Setting field declarations.

    One file is produced per declaring type. Every valid field becomes a
    static property whose getter reads the settings store with the field's
    value as default, and whose setter writes the store only when the value
    changes.
    """

    def __init__(self, config: Optional[SettingGeneratorConfig] = None):
        self.config = config or SettingGeneratorConfig()
        self._generated_files: List[GeneratedFile] = []

    # ============================================================
    # Main Generation Methods
    # ============================================================

    def generate(self, setting_types: List[SettingType]) -> SettingGeneratorResult:
        """
        Generate setting classes.

        Declarations of the same type (partial classes spread over several
        files) are merged into one generated file.

        Args:
            setting_types: Setting types collected from the sources

        Returns:
            SettingGeneratorResult with statistics and diagnostics
        """
        self.clear()

        logger.info("Starting setting class generation...")

        result = SettingGeneratorResult(success=True)

        for setting_type in self._merge_partial_types(setting_types):
            generated = self._generate_type_file(setting_type, result)
            if generated is None:
                continue
            self._generated_files.append(generated)
            result.types_generated += 1

        for diagnostic in result.diagnostics:
            result.warnings.append(diagnostic.format())
            logger.warning(diagnostic.format())

        result.generated_files = [f.relative_path for f in self._generated_files]

        logger.info(
            f"Generated {result.properties_generated} properties in "
            f"{result.types_generated} types, {len(result.diagnostics)} diagnostics"
        )

        return result

    def write_files(self) -> int:
        """
        Write all generated files to disk.

        Returns:
            Number of files written
        """
        if not self.config.write_to_disk:
            return 0

        output_dir = Path(self.config.output_directory)
        output_dir.mkdir(parents=True, exist_ok=True)

        files_written = 0
        for generated_file in self._generated_files:
            file_path = output_dir / generated_file.relative_path
            file_path.parent.mkdir(parents=True, exist_ok=True)

            if file_path.exists() and not self.config.overwrite_existing:
                existing_content = file_path.read_text(encoding="utf-8")
                existing_checksum = hashlib.md5(
                    existing_content.encode("utf-8")
                ).hexdigest()
                if existing_checksum == generated_file.checksum:
                    continue

            file_path.write_text(generated_file.content, encoding="utf-8")
            files_written += 1
            logger.debug(f"Wrote: {file_path}")

        logger.info(f"Wrote {files_written} files to {output_dir}")
        return files_written

    def clear(self) -> None:
        """Clear all generated content."""
        self._generated_files.clear()

    def get_generated_files(self) -> List[GeneratedFile]:
        """Get all generated files."""
        return self._generated_files.copy()

    # ============================================================
    # Type/Property Generation
    # ============================================================

    def _generate_type_file(
        self, setting_type: SettingType, result: SettingGeneratorResult
    ) -> Optional[GeneratedFile]:
        """Generate the file for one type, or None if the type is rejected."""
        property_codes = []

        for setting_field in setting_type.fields:
            property_name = to_pascal_case(setting_field.name)

            if setting_field.name == property_name:
                result.diagnostics.append(
                    create_diagnostic(
                        WRONG_NAME,
                        setting_field.path or setting_type.source_path,
                        setting_field.line,
                        setting_field.column,
                    )
                )
                continue

            # A non-static field invalidates the whole type
            if not setting_field.is_static:
                result.diagnostics.append(
                    create_diagnostic(
                        WRONG_KEYWORD,
                        setting_field.path or setting_type.source_path,
                        setting_field.line,
                        setting_field.column,
                    )
                )
                logger.debug(f"Skipping {setting_type.qualified_name}")
                return None

            if not self.is_valid_setting_type(setting_field.type_name):
                result.diagnostics.append(
                    create_diagnostic(
                        WRONG_TYPE,
                        setting_field.path or setting_type.source_path,
                        setting_field.type_line,
                        setting_field.type_column,
                    )
                )
                continue

            key = self.get_setting_key(setting_type, property_name)
            property_codes.append(
                self._generate_property(setting_field, property_name, key, indent=2)
            )

        content = []

        if self.config.file_header:
            content.append(self.config.file_header)
            content.append("")

        for using in self.config.usings:
            content.append(f"using {using};")
        content.append("")

        content.append(f"namespace {setting_type.namespace}")
        content.append("{")
        content.append(f"{self._indent(1)}partial {setting_type.kind} {setting_type.name}")
        content.append(f"{self._indent(1)}{{")
        content.append("\n".join(property_codes))
        content.append(f"{self._indent(1)}}}")
        content.append("}")

        result.properties_generated += len(property_codes)

        return GeneratedFile(
            relative_path=self.get_file_name(setting_type),
            content="\n".join(content),
        )

    def _generate_property(
        self, setting_field: SettingField, property_name: str, key: str, indent: int = 0
    ) -> str:
        """Generate the C# code for one setting property."""
        lines = []
        ind = self._indent(indent)
        store = self.config.settings_accessor

        lines.append(f"{ind}public static {setting_field.type_name} {property_name}")
        lines.append(f"{ind}{{")
        lines.append(
            f'{ind}    get => {store}.GetValue("{key}", {setting_field.name});'
        )
        lines.append(f"{ind}    set")
        lines.append(f"{ind}    {{")
        lines.append(f"{ind}        if ({property_name} == value) return;")
        lines.append(f'{ind}        {store}.SetValue("{key}", value);')
        lines.append(f"{ind}    }}")
        lines.append(f"{ind}}}")

        return "\n".join(lines)

    # ============================================================
    # Helper Methods
    # ============================================================

    def is_valid_setting_type(self, type_name: str) -> bool:
        """Check whether a declared field type can be persisted as a setting."""
        return any(type_name.endswith(valid) for valid in self.config.valid_setting_types)

    def get_setting_key(self, setting_type: SettingType, property_name: str) -> str:
        """Get the settings store key for a property."""
        return ".".join([setting_type.namespace, setting_type.name, property_name])

    def get_file_name(self, setting_type: SettingType) -> str:
        """Get the generated file name for a type."""
        return f"{setting_type.namespace}_{setting_type.name}.g.cs"

    def _indent(self, level: int) -> str:
        """Generate indentation string."""
        return "    " * level

    def _merge_partial_types(self, setting_types: List[SettingType]) -> List[SettingType]:
        """Merge declarations that share a namespace and name."""
        merged: Dict[Tuple[str, str], SettingType] = {}
        for setting_type in setting_types:
            key = (setting_type.namespace, setting_type.name)
            if key not in merged:
                merged[key] = SettingType(
                    name=setting_type.name,
                    namespace=setting_type.namespace,
                    kind=setting_type.kind,
                    source_path=setting_type.source_path,
                    fields=list(setting_type.fields),
                )
                continue

            existing = merged[key]
            logger.debug(
                f"Merging partial declaration of {setting_type.qualified_name} "
                f"from {setting_type.source_path}"
            )
            existing.fields.extend(setting_type.fields)
        return list(merged.values())
