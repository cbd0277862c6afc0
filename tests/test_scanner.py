"""Tests for codedocr.scanner."""

from __future__ import annotations

from pathlib import Path

import pytest

from codedocr.scanner import SourceScanner, exclude_rule, project_exclusions

from tests._fixtures.repo_builder import RepoBuilder


def test_scan_lists_sorted_csharp_sources(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "src/Zeta.cs": "class Zeta {}",
            "src/Alpha.cs": "class Alpha {}",
            "Program.cs": "class Program {}",
            "README.md": "# Readme",
            "bin/Debug/Generated.cs": "class Generated {}",
            "obj/Temp.cs": "class Temp {}",
            ".git/hooks/Hook.cs": "class Hook {}",
        }
    )

    assert [path.as_posix() for path in repo_builder.scan()] == [
        "Program.cs",
        "src/Alpha.cs",
        "src/Zeta.cs",
    ]


def test_scan_honours_gitignore_and_excludes(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            ".gitignore": "Migrations/\n*.g.cs\n!Keep.g.cs\n",
            "Migrations/Initial.cs": "class Initial {}",
            "Model.g.cs": "class Model {}",
            "Keep.g.cs": "class Keep {}",
            "Forms/Main.Designer.cs": "class Main {}",
            "Forms/Main.cs": "class Main {}",
        }
    )

    files = SourceScanner().scan(repo_builder.path(), ["*.Designer.cs"])

    assert [path.name for path in files] == ["Main.cs", "Keep.g.cs"]


def test_scan_accepts_single_file(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"One.cs": "class One {}"})

    files = SourceScanner().scan(repo_builder.path() / "One.cs")

    assert [path.name for path in files] == ["One.cs"]


def test_scan_missing_root_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        SourceScanner().scan(tmp_path / "nope")


def test_anchored_rule_only_matches_from_root() -> None:
    rule = exclude_rule("/Generated/")

    assert rule is not None
    assert rule.matches("Generated", is_dir=True)
    assert not rule.matches("src/Generated", is_dir=True)


def test_build_folders_are_pruned_case_insensitively(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "App/Bin/Release/Copy.cs": "class Copy {}",
            "App/OBJ/Temp.cs": "class Temp {}",
            "App/Program.cs": "class Program {}",
        }
    )

    assert [path.as_posix() for path in repo_builder.scan()] == ["App/Program.cs"]


def test_configured_exclude_dirs_replace_defaults(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "artifacts/Generated.cs": "class Generated {}",
            "obj/Temp.cs": "class Temp {}",
            "Program.cs": "class Program {}",
        }
    )

    files = SourceScanner().scan(repo_builder.path(), exclude_dirs=["artifacts"])

    assert sorted(path.name for path in files) == ["Program.cs", "Temp.cs"]


def test_csproj_compile_remove_items_are_excluded(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "Shop/Shop.csproj": """\
<Project Sdk="Microsoft.NET.Sdk">
  <ItemGroup>
    <Compile Remove="Legacy\\**;Scratch.cs" />
  </ItemGroup>
</Project>
""",
            "Shop/Legacy/Old.cs": "class Old {}",
            "Shop/Scratch.cs": "class Scratch {}",
            "Shop/Order.cs": "class Order {}",
            "Tools/Scratch.cs": "class Scratch {}",
        }
    )

    assert [path.as_posix() for path in repo_builder.scan()] == [
        "Shop/Order.cs",
        "Tools/Scratch.cs",
    ]


def test_project_exclusions_are_scoped_to_the_project_directory(tmp_path: Path) -> None:
    project = tmp_path / "Api.csproj"
    project.write_text(
        '<Project xmlns="http://schemas.microsoft.com/developer/msbuild/2003">'
        '<ItemGroup><Compile Remove="Migrations\\*.cs" /><Compile Include="Extra.cs" /></ItemGroup>'
        "</Project>",
        encoding="utf-8",
    )

    (rule,) = project_exclusions(project, base="src/Api")

    assert rule.pattern == "Migrations/*.cs"
    assert rule.matches("src/Api/Migrations/Initial.cs", is_dir=False)
    assert not rule.matches("src/Web/Migrations/Initial.cs", is_dir=False)


def test_unreadable_project_file_is_skipped(tmp_path: Path) -> None:
    project = tmp_path / "Broken.csproj"
    project.write_text("<Project>", encoding="utf-8")

    assert project_exclusions(project) == []


def test_double_star_matches_zero_directories() -> None:
    rule = exclude_rule("**/*.Designer.cs")

    assert rule is not None
    assert rule.matches("Main.Designer.cs", is_dir=False)
    assert rule.matches("Forms/Main.Designer.cs", is_dir=False)
    assert not rule.matches("Forms/Main.cs", is_dir=False)
