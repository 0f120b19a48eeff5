"""Unit tests for manifest construction.

The manifest builder validates page declarations, resolves output paths,
loads optional JSON models, and injects the computed ``metadata`` object.
These tests pin each of those behaviours, including the page-scoped errors
that :func:`build_site_manifest` collects without aborting sibling pages.
"""

from __future__ import annotations

import datetime as dt
import json
import logging
from pathlib import Path

import pytest

from iron_ssg.config import PageDeclaration
from iron_ssg.manifest import (
    InvalidModel,
    MissingField,
    PageMetadata,
    build_manifest,
    build_site_manifest,
    merge_metadata,
    resolve_output_dir,
)

SITE = Path("site")


def _write_model(tmp_path: Path, name: str, content: str) -> str:
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return str(path)


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        (None, "site/index.html"),
        ("", "site/index.html"),
        ("/", "site/index.html"),
        ("/about", "site/about/index.html"),
        ("about/", "site/about/index.html"),
        ("/docs/guide/", "site/docs/guide/index.html"),
    ],
)
def test_output_file_resolution(path: str | None, expected: str) -> None:
    page = PageDeclaration(title="Page", view="page.html", path=path)
    entry = build_manifest(page, SITE, author="Ada", year=2024)
    assert entry.output_file.as_posix() == expected
    assert entry.output_file.parent == entry.output_dir


def test_slug_names_the_output_file() -> None:
    page = PageDeclaration(slug="about", title="About", view="about", path="/about")
    entry = build_manifest(page, SITE, author="Ada", year=2024)
    assert entry.output_dir == Path("site/about")
    assert entry.output_file == Path("site/about/about.html")


def test_resolve_output_dir_keeps_root_for_slashes_only() -> None:
    assert resolve_output_dir(SITE, "//") == SITE


@pytest.mark.parametrize(
    ("page", "field"),
    [
        (PageDeclaration(title="", view="home.html"), "title"),
        (PageDeclaration(title="Home", view=""), "view"),
        (PageDeclaration(), "title"),
    ],
)
def test_missing_required_field(page: PageDeclaration, field: str) -> None:
    with pytest.raises(MissingField) as excinfo:
        build_manifest(page, SITE, author="Ada", year=2024)
    assert excinfo.value.field == field
    assert str(excinfo.value) == f"Missing '{field}' field"


def test_metadata_is_injected_without_model() -> None:
    page = PageDeclaration(title="Home", view="home.html", description="Welcome")
    entry = build_manifest(page, SITE, author="Ada, Charles", year=2023)

    assert entry.model == {
        "metadata": {
            "title": "Home",
            "description": "Welcome",
            "author": "Ada, Charles",
            "year": 2023,
        }
    }
    assert entry.model_file_path == ""
    assert entry.title == "Home"
    assert entry.view == "home.html"


def test_description_defaults_to_empty_string() -> None:
    page = PageDeclaration(title="Home", view="home.html")
    entry = build_manifest(page, SITE, author="Ada", year=2023)
    assert entry.model["metadata"]["description"] == ""


def test_year_defaults_to_current_year() -> None:
    page = PageDeclaration(title="Home", view="home.html")
    entry = build_manifest(page, SITE, author="Ada")
    assert entry.model["metadata"]["year"] == dt.datetime.now(dt.UTC).year


def test_json_model_is_loaded_and_merged(tmp_path: Path) -> None:
    model_path = _write_model(
        tmp_path,
        "home.json",
        json.dumps({"hero": {"heading": "Hello"}, "items": [1, 2, 3]}),
    )
    page = PageDeclaration(title="Home", view="home.html", model=model_path)
    entry = build_manifest(page, SITE, author="Ada", year=2024)

    assert entry.model_file_path == model_path
    assert entry.model["hero"] == {"heading": "Hello"}
    assert entry.model["items"] == [1, 2, 3]
    assert entry.model["metadata"]["title"] == "Home"


def test_existing_metadata_key_is_overwritten(tmp_path: Path) -> None:
    model_path = _write_model(
        tmp_path,
        "home.json",
        json.dumps({"metadata": {"title": "Stale", "keywords": ["a", "b"]}}),
    )
    page = PageDeclaration(title="Home", view="home.html", model=model_path)
    entry = build_manifest(page, SITE, author="Ada", year=2024)

    assert entry.model["metadata"] == {
        "title": "Home",
        "description": "",
        "author": "Ada",
        "year": 2024,
    }, "metadata from the model file should be replaced, not deep-merged"


def test_non_json_model_is_ignored(tmp_path: Path) -> None:
    page = PageDeclaration(
        title="Home", view="home.html", model=str(tmp_path / "missing.yaml")
    )
    entry = build_manifest(page, SITE, author="Ada", year=2024)
    assert list(entry.model) == ["metadata"]
    assert entry.model_file_path.endswith("missing.yaml")


def test_unparseable_model_raises_invalid_model(tmp_path: Path) -> None:
    model_path = _write_model(tmp_path, "broken.json", '{"hero": ')
    page = PageDeclaration(title="Home", view="home.html", model=model_path)

    with pytest.raises(InvalidModel) as excinfo:
        build_manifest(page, SITE, author="Ada", year=2024)
    assert excinfo.value.path == model_path
    assert isinstance(excinfo.value.__cause__, json.JSONDecodeError)


def test_unreadable_model_raises_invalid_model(tmp_path: Path) -> None:
    page = PageDeclaration(
        title="Home", view="home.html", model=str(tmp_path / "absent.json")
    )
    with pytest.raises(InvalidModel):
        build_manifest(page, SITE, author="Ada", year=2024)


def test_non_utf8_model_is_page_scoped(tmp_path: Path) -> None:
    bad_model = tmp_path / "bad.json"
    bad_model.write_bytes(b'{"body": "\xff\xfe"}')
    pages = [
        PageDeclaration(slug="bad", title="Bad", view="bad.html", model=str(bad_model)),
        PageDeclaration(slug="ok", title="Ok", view="ok.html"),
    ]

    result = build_site_manifest(pages, SITE, author="Ada", year=2024)

    assert [entry.title for entry in result.entries] == ["Ok"]
    assert [type(error) for _, error in result.failures] == [InvalidModel]
    assert isinstance(result.failures[0][1].__cause__, UnicodeDecodeError)


def test_non_object_model_is_replaced(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    model_path = _write_model(tmp_path, "list.json", "[1, 2]")
    page = PageDeclaration(title="Home", view="home.html", model=model_path)

    with caplog.at_level(logging.WARNING, logger="iron_ssg.manifest"):
        entry = build_manifest(page, SITE, author="Ada", year=2024)

    assert list(entry.model) == ["metadata"]
    assert "not an object" in caplog.text


def test_merge_metadata_does_not_mutate_input() -> None:
    model = {"metadata": {"title": "Old"}, "body": "text"}
    metadata = PageMetadata(title="New", description="", author="Ada", year=2024)

    merged = merge_metadata(model, metadata)

    assert model == {"metadata": {"title": "Old"}, "body": "text"}
    assert merged["metadata"]["title"] == "New"
    assert merged["body"] == "text"


def test_build_manifest_creates_no_directories(tmp_path: Path) -> None:
    page = PageDeclaration(title="Docs", view="docs.html", path="/docs")
    entry = build_manifest(page, tmp_path / "out", author="Ada", year=2024)
    assert not entry.output_dir.exists()


def test_site_manifest_skips_failures_and_keeps_order(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    broken = _write_model(tmp_path, "broken.json", "not json")
    pages = [
        PageDeclaration(title="Home", view="home.html"),
        PageDeclaration(title="", view="orphan.html"),
        PageDeclaration(slug="blog", title="Blog", view="blog.html", model=broken),
        PageDeclaration(slug="about", title="About", view="about.html", path="/about"),
        PageDeclaration(slug="contact", title="Contact"),
    ]

    with caplog.at_level(logging.ERROR, logger="iron_ssg.manifest"):
        result = build_site_manifest(pages, SITE, author="Ada", year=2024)

    assert [entry.title for entry in result.entries] == ["Home", "About"]
    assert [type(error) for _, error in result.failures] == [
        MissingField,
        InvalidModel,
        MissingField,
    ]
    assert [page.view for page, _ in result.failures] == [
        "orphan.html",
        "blog.html",
        "",
    ]
    assert "'Blog'" in caplog.text
    assert "'orphan.html'" in caplog.text


def test_manifest_entry_serialises_to_json(tmp_path: Path) -> None:
    page = PageDeclaration(slug="about", title="About", view="about", path="about")
    entry = build_manifest(page, SITE, author="Ada", year=2024)

    payload = json.loads(json.dumps(entry.as_dict()))

    assert payload == {
        "title": "About",
        "view": "about",
        "model_file_path": "",
        "output_dir": "site/about",
        "output_file": "site/about/about.html",
        "model": {
            "metadata": {
                "title": "About",
                "description": "",
                "author": "Ada",
                "year": 2024,
            }
        },
    }
