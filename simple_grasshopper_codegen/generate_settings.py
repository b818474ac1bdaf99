#
# Copyright (c) Contributors to the Open 3D Engine Project.
# For complete copyright and license terms please see the LICENSE at the root of this distribution.
#
# SPDX-License-Identifier: Apache-2.0 OR MIT
#
"""
SimpleGrasshopper Setting Class Generation Script

This is the main entry point for generating setting properties from
GH_Setting fields. It can be run from the command line or invoked from a
build script.

The generation workflow:
1. Collect the C# sources of the plugin (files or whole directories)
2. Find the GH_Setting fields and their declaring types
3. Generate one partial class file per type
4. Write the *.g.cs files into the output directory

Usage:
    # Generate settings for a plugin project
    simple-grasshopper-codegen --source MyPlugin/ --output MyPlugin/Generated

    # Only report what would be written
    simple-grasshopper-codegen -s MyPlugin/Settings.cs --dry-run

    # Print the canonical names of identifiers
    simple-grasshopper-codegen --normalize my_field "max count"

    # From Python
    import generate_settings
    generate_settings.generate_setting_classes("Generated", ["MyPlugin"])
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, List, Optional

from .csharp_setting_parser import SettingType, parse_setting_file
from .identifier_case import to_pascal_case
from .setting_class_generator import (
    SettingClassGenerator,
    SettingGeneratorConfig,
    SettingGeneratorResult,
    load_generator_config_from_json,
)

# Set up logging
logger = logging.getLogger("SimpleGrasshopper.GenerateSettings")

GENERATED_SUFFIX = ".g.cs"


class SettingGenerationOrchestrator:
    """
    Orchestrates the complete setting generation workflow.

    This class coordinates between source discovery, the C# scanner and the
    setting class generator.
    """

    def __init__(self):
        self.config = SettingGeneratorConfig()
        self.generator = SettingClassGenerator()
        self.setting_types: List[SettingType] = []
        self.source_files: List[Path] = []

    def configure(
        self,
        output_directory: Optional[str] = None,
        attribute_name: Optional[str] = None,
        overwrite_existing: Optional[bool] = None,
        write_to_disk: Optional[bool] = None,
        config_path: Optional[str] = None,
    ) -> bool:
        """
        Configure the setting generation.

        Values from config_path are applied first; arguments that are not
        None override them. Anything left unset keeps the config default.

        Args:
            output_directory: Root output directory for generated files
            attribute_name: Marker attribute to look for (default GH_Setting)
            overwrite_existing: Rewrite files even when their content is unchanged
            write_to_disk: Whether write_files touches the disk at all
            config_path: Optional JSON file with SettingGeneratorConfig values

        Returns:
            True if the configuration was applied
        """
        if config_path:
            try:
                load_generator_config_from_json(config_path, self.config)
            except (OSError, ValueError) as e:
                logger.error(f"Failed to load config {config_path}: {e}")
                return False

        if output_directory is not None:
            self.config.output_directory = output_directory
        if overwrite_existing is not None:
            self.config.overwrite_existing = overwrite_existing
        if write_to_disk is not None:
            self.config.write_to_disk = write_to_disk
        if attribute_name:
            self.config.attribute_name = attribute_name
        return True

    def load_sources(self, source_paths: Iterable[str]) -> bool:
        """
        Scan C# sources for setting fields.

        Directories are searched recursively for *.cs files; previously
        generated *.g.cs files are skipped.

        Args:
            source_paths: Files or directories to scan

        Returns:
            True if every source could be read
        """
        self.setting_types = []
        self.source_files = collect_source_files(source_paths)

        if not self.source_files:
            logger.error("No C# source files found")
            return False

        for source_file in self.source_files:
            try:
                self.setting_types.extend(
                    parse_setting_file(source_file, self.config.attribute_name)
                )
            except (OSError, UnicodeDecodeError) as e:
                logger.error(f"Failed to read {source_file}: {e}")
                return False

        logger.info(
            f"Scanned {len(self.source_files)} files, "
            f"found {len(self.setting_types)} types with settings"
        )
        return True

    def generate(self) -> SettingGeneratorResult:
        """
        Generate setting classes using the current configuration and sources.

        Returns:
            SettingGeneratorResult with statistics
        """
        if not self.source_files:
            logger.error("No sources loaded. Call load_sources first.")
            return SettingGeneratorResult(
                success=False, error_message="No sources loaded"
            )

        # Update generator config
        self.generator.config = self.config

        result = self.generator.generate(self.setting_types)

        if not result.success:
            logger.error(f"Generation failed: {result.error_message}")

        return result

    def write_files(self) -> int:
        """
        Write all generated files to disk.

        Returns:
            Number of files written
        """
        return self.generator.write_files()

    def get_generated_files(self) -> List[str]:
        """Get list of generated file paths."""
        return [f.relative_path for f in self.generator.get_generated_files()]


def collect_source_files(source_paths: Iterable[str]) -> List[Path]:
    """Expand files and directories into a sorted list of C# sources."""
    files = set()
    for source_path in source_paths:
        path = Path(source_path)
        if path.is_dir():
            candidates = path.rglob("*.cs")
        elif path.is_file():
            candidates = [path]
        else:
            logger.warning(f"Source not found: {path}")
            continue

        for candidate in candidates:
            if candidate.name.endswith(GENERATED_SUFFIX):
                continue
            files.add(candidate)

    return sorted(files)


# ============================================================
# Convenience Functions
# ============================================================


def generate_setting_classes(
    output_directory: Optional[str],
    source_paths: Iterable[str],
    config_path: Optional[str] = None,
) -> SettingGeneratorResult:
    """
    Generate and write all setting classes for a set of sources.

    Args:
        output_directory: Where to write generated files (None keeps the
            configured directory)
        source_paths: C# files or directories to scan
        config_path: Optional JSON generator configuration

    Returns:
        SettingGeneratorResult with statistics
    """
    orchestrator = SettingGenerationOrchestrator()
    if not orchestrator.configure(
        output_directory=output_directory, config_path=config_path
    ):
        return SettingGeneratorResult(
            success=False, error_message="Failed to load configuration"
        )

    if not orchestrator.load_sources(source_paths):
        return SettingGeneratorResult(
            success=False, error_message="Failed to load sources"
        )

    result = orchestrator.generate()
    if result.success:
        result.files_written = orchestrator.write_files()

    return result


# ============================================================
# CLI Interface
# ============================================================


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="simple-grasshopper-codegen",
        description="Generate Grasshopper setting properties from GH_Setting fields",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate settings for every source of a plugin
  simple-grasshopper-codegen -s MyPlugin -o MyPlugin/Generated

  # Preview without writing
  simple-grasshopper-codegen -s MyPlugin/Settings.cs --dry-run

  # Show canonical names
  simple-grasshopper-codegen --normalize my_field ABC ab9cd
        """,
    )

    parser.add_argument(
        "--source",
        "-s",
        nargs="+",
        help="C# source files or directories to scan",
    )
    parser.add_argument(
        "--output",
        "-o",
        help="Output directory for generated files (default: Generated)",
    )
    parser.add_argument(
        "--config",
        "-c",
        help="JSON file with generator configuration",
    )
    parser.add_argument(
        "--attribute",
        help="Marker attribute name (default: GH_Setting)",
    )
    parser.add_argument(
        "--no-overwrite",
        action="store_true",
        help="Leave existing files with identical content untouched",
    )
    parser.add_argument(
        "--warnings-as-errors",
        action="store_true",
        help="Fail when any diagnostic is reported",
    )
    parser.add_argument(
        "--normalize",
        nargs="+",
        metavar="NAME",
        help="Print the canonical name of each identifier and exit",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Generate but don't write files",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for command-line usage."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    # Handle info-only commands
    if args.normalize:
        for name in args.normalize:
            print(f"{name} -> {to_pascal_case(name)}")
        return 0

    if not args.source:
        logger.error("--source is required for setting generation")
        parser.print_help()
        return 1

    orchestrator = SettingGenerationOrchestrator()
    if not orchestrator.configure(
        output_directory=args.output,
        attribute_name=args.attribute,
        overwrite_existing=False if args.no_overwrite else None,
        write_to_disk=False if args.dry_run else None,
        config_path=args.config,
    ):
        return 1

    if not orchestrator.load_sources(args.source):
        return 1

    result = orchestrator.generate()
    if not result.success:
        logger.error(f"Generation failed: {result.error_message}")
        return 1

    # Write files (unless dry run)
    if not args.dry_run:
        result.files_written = orchestrator.write_files()
    else:
        logger.info(
            f"Dry run: would write {len(orchestrator.get_generated_files())} files"
        )
        for path in orchestrator.get_generated_files():
            logger.info(f"  {path}")

    # Print summary
    print("\n" + "=" * 60)
    print("Setting Class Generation Complete")
    print("=" * 60)
    print(f"  Types generated:      {result.types_generated}")
    print(f"  Properties generated: {result.properties_generated}")
    print(f"  Files written:        {result.files_written}")

    if result.warnings:
        print("\nWarnings:")
        for warning in result.warnings:
            print(f"  ! {warning}")

    print("=" * 60)

    if args.warnings_as_errors and result.diagnostics:
        logger.error(f"{len(result.diagnostics)} diagnostics reported")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
