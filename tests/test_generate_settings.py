"""Tests for simple_grasshopper_codegen.generate_settings."""

import json
import textwrap

import pytest

from simple_grasshopper_codegen.generate_settings import (
    SettingGenerationOrchestrator,
    collect_source_files,
    generate_setting_classes,
    main,
)

SETTINGS_SOURCE = textwrap.dedent(
    """\
    namespace MyPlugin
    {
        static partial class MySettings
        {
            [GH_Setting]
            private static int my_count = 5;

            [GH_Setting]
            private static double MaxSize = 1.0;
        }
    }
    """
)

GENERATED_SOURCE = textwrap.dedent(
    """\
    namespace MyPlugin
    {
        partial class Leftover
        {
            [GH_Setting]
            private static int stale_value;
        }
    }
    """
)


@pytest.fixture
def source_dir(tmp_path):
    src = tmp_path / "src"
    (src / "Sub").mkdir(parents=True)
    (src / "Sub" / "Settings.cs").write_text(SETTINGS_SOURCE, encoding="utf-8")
    (src / "Leftover.g.cs").write_text(GENERATED_SOURCE, encoding="utf-8")
    (src / "notes.txt").write_text("not C#", encoding="utf-8")
    return src


def test_collect_source_files_skips_generated(source_dir, tmp_path):
    files = collect_source_files([str(source_dir), str(tmp_path / "missing.cs")])

    assert files == [source_dir / "Sub" / "Settings.cs"]


def test_orchestrator_workflow(source_dir, tmp_path):
    output = tmp_path / "out"
    orchestrator = SettingGenerationOrchestrator()
    assert orchestrator.configure(output_directory=str(output))
    assert orchestrator.load_sources([str(source_dir)])

    result = orchestrator.generate()

    assert result.success
    assert orchestrator.get_generated_files() == ["MyPlugin_MySettings.g.cs"]
    assert [d.id for d in result.diagnostics] == ["SG0005"]
    assert result.diagnostics[0].path == str(source_dir / "Sub" / "Settings.cs")

    assert orchestrator.write_files() == 1
    content = (output / "MyPlugin_MySettings.g.cs").read_text(encoding="utf-8")
    assert "public static int MyCount" in content
    assert "StaleValue" not in content


def test_generate_without_sources():
    result = SettingGenerationOrchestrator().generate()

    assert not result.success
    assert result.error_message == "No sources loaded"


def test_load_sources_with_no_files(tmp_path):
    assert not SettingGenerationOrchestrator().load_sources([str(tmp_path)])


def test_configure_with_config_file(tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text(
        json.dumps(
            {
                "attribute_name": "MySetting",
                "output_directory": "FromConfig",
                "overwrite_existing": False,
                "write_to_disk": False,
            }
        ),
        encoding="utf-8",
    )
    orchestrator = SettingGenerationOrchestrator()

    assert orchestrator.configure(config_path=str(config_path))
    assert orchestrator.config.attribute_name == "MySetting"
    assert orchestrator.config.output_directory == "FromConfig"
    assert orchestrator.config.overwrite_existing is False
    assert orchestrator.config.write_to_disk is False


def test_explicit_arguments_override_config_file(tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text(
        json.dumps({"output_directory": "FromConfig", "write_to_disk": False}),
        encoding="utf-8",
    )
    orchestrator = SettingGenerationOrchestrator()

    assert orchestrator.configure(
        output_directory="Out", write_to_disk=True, config_path=str(config_path)
    )
    assert orchestrator.config.output_directory == "Out"
    assert orchestrator.config.write_to_disk is True


def test_configure_defaults():
    orchestrator = SettingGenerationOrchestrator()

    assert orchestrator.configure()
    assert orchestrator.config.output_directory == "Generated"
    assert orchestrator.config.overwrite_existing is True
    assert orchestrator.config.write_to_disk is True


def test_write_to_disk_from_config_file(source_dir, tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"write_to_disk": False}), encoding="utf-8")
    output = tmp_path / "out"

    result = generate_setting_classes(str(output), [str(source_dir)], str(config_path))

    assert result.success
    assert result.files_written == 0
    assert not (output / "MyPlugin_MySettings.g.cs").exists()


def test_overwrite_existing_from_config_file(source_dir, tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"overwrite_existing": False}), encoding="utf-8")
    output = tmp_path / "out"

    first = generate_setting_classes(str(output), [str(source_dir)], str(config_path))
    second = generate_setting_classes(str(output), [str(source_dir)], str(config_path))

    assert first.files_written == 1
    assert second.files_written == 0


def test_main_output_directory_from_config_file(source_dir, tmp_path):
    output = tmp_path / "FromConfig"
    config_path = tmp_path / "config.json"
    config_path.write_text(
        json.dumps({"output_directory": str(output)}), encoding="utf-8"
    )

    assert main(["-s", str(source_dir), "-c", str(config_path)]) == 0
    assert (output / "MyPlugin_MySettings.g.cs").exists()


def test_main_output_argument_wins_over_config_file(source_dir, tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text(
        json.dumps({"output_directory": str(tmp_path / "FromConfig")}),
        encoding="utf-8",
    )
    output = tmp_path / "out"

    assert main(["-s", str(source_dir), "-c", str(config_path), "-o", str(output)]) == 0
    assert (output / "MyPlugin_MySettings.g.cs").exists()
    assert not (tmp_path / "FromConfig").exists()


def test_configure_with_bad_config_file(tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text("{not json", encoding="utf-8")

    assert not SettingGenerationOrchestrator().configure(config_path=str(config_path))


def test_generate_setting_classes(source_dir, tmp_path):
    output = tmp_path / "out"

    result = generate_setting_classes(str(output), [str(source_dir)])

    assert result.success
    assert result.files_written == 1
    assert (output / "MyPlugin_MySettings.g.cs").exists()


def test_generate_setting_classes_without_sources(tmp_path):
    result = generate_setting_classes(str(tmp_path / "out"), [str(tmp_path / "none")])

    assert not result.success
    assert result.error_message == "Failed to load sources"


def test_main_writes_files(source_dir, tmp_path, capsys):
    output = tmp_path / "out"

    assert main(["--source", str(source_dir), "--output", str(output)]) == 0

    assert (output / "MyPlugin_MySettings.g.cs").exists()
    printed = capsys.readouterr().out
    assert "Properties generated: 1" in printed
    assert "SG0005" in printed


def test_main_dry_run(source_dir, tmp_path):
    output = tmp_path / "out"

    assert main(["-s", str(source_dir), "-o", str(output), "--dry-run"]) == 0
    assert not output.exists()


def test_main_warnings_as_errors(source_dir, tmp_path):
    argv = ["-s", str(source_dir), "-o", str(tmp_path / "out"), "--warnings-as-errors"]

    assert main(argv) == 1


def test_main_custom_attribute(tmp_path):
    source = tmp_path / "Custom.cs"
    source.write_text(
        "namespace N { partial class C { [MySetting] static bool show_all; } }",
        encoding="utf-8",
    )
    output = tmp_path / "out"

    assert main(["-s", str(source), "-o", str(output), "--attribute", "MySetting"]) == 0
    assert "ShowAll" in (output / "N_C.g.cs").read_text(encoding="utf-8")


def test_main_normalize(capsys):
    assert main(["--normalize", "my_field", "ABC"]) == 0

    assert capsys.readouterr().out.splitlines() == ["my_field -> MyField", "ABC -> Abc"]


def test_main_requires_source(capsys):
    assert main([]) == 1
