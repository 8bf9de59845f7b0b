"""Tests for the LICENSE and README actions."""

from __future__ import annotations

from boilergen.actions import ActionData, LicenseAction, ReadmeAction
from boilergen.actions.readme import strip_header
from boilergen.detectors import LicenseDetector
from boilergen.renderer import TemplateRenderer
from boilergen.value import object_of
from tests._fixtures.repo_builder import RepoBuilder

EXPECTED_README = """\
Example Project
===============

[![Rust Build Status](https://github.com/m4tx/boiler/workflows/Rust%20CI/badge.svg)](https://github.com/m4tx/boiler/actions/workflows/rust.yml)
[![MIT licensed](https://img.shields.io/github/license/m4tx/boiler)](https://github.com/m4tx/boiler/blob/master/LICENSE)

This is a very useful tool!
"""


def _readme_data(repo_builder: RepoBuilder) -> ActionData:
    return ActionData(
        repo=repo_builder.repo(),
        context=object_of(
            langs=["rust"],
            name="Example Project",
            license="MIT",
            repo_owner="m4tx",
            repo_name="boiler",
        ),
    )


# ----------------------------------------------------------------------
# license


def test_license_proprietary_writes_nothing(
    repo_builder: RepoBuilder, renderer: TemplateRenderer
) -> None:
    data = ActionData(
        repo=repo_builder.repo(),
        context=object_of(license="LicenseRef-proprietary", full_name="John Doe"),
    )

    LicenseAction(renderer).run(data)

    assert repo_builder.files() == []


def test_license_mit_writes_file(repo_builder: RepoBuilder, renderer: TemplateRenderer) -> None:
    data = ActionData(
        repo=repo_builder.repo(),
        context=object_of(
            license="MIT",
            full_name="John Doe",
            first_activity_year=2021,
            last_activity_year=2023,
        ),
    )

    LicenseAction(renderer).run(data)

    text = repo_builder.read("LICENSE")
    assert text.startswith("MIT License\n\nCopyright (c) 2021-2023 John Doe\n\nPermission")
    assert text.endswith("SOFTWARE.\n")


def test_license_single_year(repo_builder: RepoBuilder, renderer: TemplateRenderer) -> None:
    data = ActionData(
        repo=repo_builder.repo(),
        context=object_of(
            license="ISC",
            full_name="Ada Lovelace",
            first_activity_year=2023,
            last_activity_year=2023,
        ),
    )

    LicenseAction(renderer).run(data)

    assert "Copyright (c) 2023 Ada Lovelace\n" in repo_builder.read("LICENSE")


def test_license_output_is_detected_back(
    repo_builder: RepoBuilder, renderer: TemplateRenderer
) -> None:
    data = ActionData(
        repo=repo_builder.repo(),
        context=object_of(
            license="MIT",
            full_name="John Doe",
            first_activity_year=2020,
            last_activity_year=2022,
        ),
    )

    LicenseAction(renderer).run(data)

    detected = LicenseDetector().detect(repo_builder.repo())
    assert detected == object_of(license="MIT", full_name="John Doe")


def test_license_without_bundled_text_is_left_alone(
    repo_builder: RepoBuilder, renderer: TemplateRenderer
) -> None:
    repo_builder.write_raw("LICENSE", "GNU GENERAL PUBLIC LICENSE\nVersion 3\n")
    data = ActionData(repo=repo_builder.repo(), context=object_of(license="GNU GPL v3"))

    LicenseAction(renderer).run(data)

    assert repo_builder.read("LICENSE") == "GNU GENERAL PUBLIC LICENSE\nVersion 3\n"


# ----------------------------------------------------------------------
# readme


def test_readme_generated_when_missing(repo_builder: RepoBuilder, renderer: TemplateRenderer) -> None:
    ReadmeAction(renderer).run(_readme_data(repo_builder))

    assert repo_builder.read("README.md").startswith("Example Project\n===============\n\n")


def test_readme_header_replaced_body_kept(
    repo_builder: RepoBuilder, renderer: TemplateRenderer
) -> None:
    repo_builder.write_raw(
        "README.md",
        "# Example Project\n"
        "[![Build Status](https://github.com/riichi/trello-to-discord-webhook-service/workflows/some-url)]"
        "(https://github.com/riichi/trello-to-discord-webhook-service/actions)\n"
        "\n"
        "This is a very useful tool!",
    )

    ReadmeAction(renderer).run(_readme_data(repo_builder))

    assert repo_builder.read("README.md") == EXPECTED_README


def test_readme_rerun_is_stable(repo_builder: RepoBuilder, renderer: TemplateRenderer) -> None:
    repo_builder.write_raw("README.md", EXPECTED_README)

    ReadmeAction(renderer).run(_readme_data(repo_builder))

    assert repo_builder.read("README.md") == EXPECTED_README


def test_strip_header_keeps_body_sections() -> None:
    readme = "Title\n=====\n\n[![a](b)](c)\n\nIntro text\n\nUsage\n=====\n\nMore.\n"

    assert strip_header(readme) == "Intro text\n\nUsage\n=====\n\nMore.\n"


def test_readme_title_without_final_newline_is_replaced_once(
    repo_builder: RepoBuilder, renderer: TemplateRenderer
) -> None:
    repo_builder.write_raw("README.md", "Example Project\n===============")
    action = ReadmeAction(renderer)

    action.run(_readme_data(repo_builder))
    first = repo_builder.read("README.md")
    action.run(_readme_data(repo_builder))

    assert first.count("Example Project\n") == 1
    assert repo_builder.read("README.md") == first


def test_strip_header_handles_missing_final_newline() -> None:
    assert strip_header("# Title") == ""
    assert strip_header("Title\n=====\n\nBody") == "Body\n"
