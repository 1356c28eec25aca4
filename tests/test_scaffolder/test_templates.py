"""Tests for the Jinja2 template renderer (cinit.scaffolder.templates)."""

from __future__ import annotations

from pathlib import Path

import pytest
from jinja2 import UndefinedError

from cinit.scaffolder.templates import TemplateRenderer

pytestmark = pytest.mark.unit


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


@pytest.fixture
def context() -> dict[str, str]:
    return {
        "project_name": "demo",
        "header_include": "include/essen.h",
        "cc": "gcc",
        "cflags": "-Wall -Wextra -ggdb",
    }


class TestMakefileTemplate:
    def test_variables(self, renderer: TemplateRenderer, context: dict[str, str]):
        text = renderer.render("Makefile.j2", context)
        assert "CC = gcc\n" in text
        assert "CFLAGS = -Wall -Wextra -ggdb\n" in text
        assert "SOURCE = demo.c\n" in text
        assert "TARGET = build/demo\n" in text
        assert "HEADER = include/essen.h\n" in text

    def test_rules_use_tabs(self, renderer: TemplateRenderer, context: dict[str, str]):
        text = renderer.render("Makefile.j2", context)
        assert "$(TARGET): $(SOURCE) $(HEADER)\n\t$(CC) $(CFLAGS) $< -o $@\n" in text
        assert "clean:\n\trm -f $(TARGET)\n" in text
        assert "run: $(TARGET)\n\t./$(TARGET)\n" in text
        assert ".PHONY: run all clean\n" in text
        assert "all: $(TARGET)\n" in text

    def test_ends_with_newline(self, renderer: TemplateRenderer, context: dict[str, str]):
        assert renderer.render("Makefile.j2", context).endswith("./$(TARGET)\n")


class TestSourceTemplate:
    def test_contents(self, renderer: TemplateRenderer, context: dict[str, str]):
        text = renderer.render("main.c.j2", context)
        assert text.startswith("/* demo.c */\n")
        assert '#include "include/essen.h"' in text
        assert "int main(void) {" in text
        assert 'println("Hello,World");' in text
        assert "return 0;" in text

    def test_name_is_not_escaped(self, renderer: TemplateRenderer, context: dict[str, str]):
        context["project_name"] = "a&b"
        assert renderer.render("main.c.j2", context).startswith("/* a&b.c */")


class TestRenderer:
    def test_missing_variable_is_an_error(self, renderer: TemplateRenderer):
        with pytest.raises(UndefinedError):
            renderer.render("main.c.j2", {"project_name": "demo"})

    async def test_render_to_file_overwrites(
        self, renderer: TemplateRenderer, context: dict[str, str], tmp_path: Path
    ):
        target = tmp_path / "demo.c"
        target.write_text("old contents")

        written = await renderer.render_to_file("main.c.j2", target, context)

        assert written == target
        assert "old contents" not in target.read_text()
        assert "Hello,World" in target.read_text()

    async def test_render_to_file_needs_parent(
        self, renderer: TemplateRenderer, context: dict[str, str], tmp_path: Path
    ):
        with pytest.raises(FileNotFoundError):
            await renderer.render_to_file(
                "main.c.j2", tmp_path / "missing" / "demo.c", context
            )

    def test_custom_template_dir(self, tmp_path: Path):
        (tmp_path / "hello.j2").write_text("hi {{ project_name }}")
        renderer = TemplateRenderer(tmp_path)
        assert renderer.render("hello.j2", {"project_name": "x"}) == "hi x"
