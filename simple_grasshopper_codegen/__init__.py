#
# Copyright (c) Contributors to the Open 3D Engine Project.
# For complete copyright and license terms please see the LICENSE at the root of this distribution.
#
# SPDX-License-Identifier: Apache-2.0 OR MIT
#
"""
SimpleGrasshopper Code Generation Package

This package provides Python utilities for generating the setting
boilerplate of SimpleGrasshopper plugins.

Main modules:
    - identifier_case: Converts identifiers to their canonical Pascal Case form
    - csharp_setting_parser: Finds GH_Setting fields in C# sources
    - setting_class_generator: Generates the partial setting classes
    - generate_settings: Main entry point for setting generation

Usage:
    # From command line
    python -m simple_grasshopper_codegen --source MyPlugin --output Generated

    # Using individual modules
    from simple_grasshopper_codegen import to_pascal_case
    to_pascal_case("my_field")  # "MyField"
"""

from .identifier_case import is_pascal_case, to_pascal_case
from .csharp_setting_parser import (
    SettingField,
    SettingType,
    parse_setting_file,
    parse_setting_types,
)
from .setting_class_generator import (
    Diagnostic,
    GeneratedFile,
    SettingClassGenerator,
    SettingGeneratorConfig,
    SettingGeneratorResult,
    load_generator_config_from_json,
)
from .generate_settings import (
    SettingGenerationOrchestrator,
    generate_setting_classes,
)

__all__ = [
    # Identifier case
    "to_pascal_case",
    "is_pascal_case",
    # C# setting scanner
    "SettingField",
    "SettingType",
    "parse_setting_types",
    "parse_setting_file",
    # Setting class generator
    "SettingClassGenerator",
    "SettingGeneratorConfig",
    "SettingGeneratorResult",
    "GeneratedFile",
    "Diagnostic",
    "load_generator_config_from_json",
    # Main orchestrator
    "SettingGenerationOrchestrator",
    "generate_setting_classes",
]

__version__ = "1.0.0"
