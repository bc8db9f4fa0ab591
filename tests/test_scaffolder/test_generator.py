"""Tests for the CRUD generation pipeline.

Covers:
- Render order and conditional steps for read-only and write plans
- Routing file selection per format, including the yaml fallback
- Pre-flight failures leave the bundle untouched
- Controller collision check and overwrite of views/tests on rerun
- Partial output reporting when a render step fails
- Typed contexts handed to the renderer
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from crudgen.scaffolder.errors import (
    ControllerAlreadyExistsError,
    InvalidEntityNameError,
    MissingIdPrimaryKeyError,
    MultiplePrimaryKeysError,
    RenderError,
)
from crudgen.scaffolder.generator import CrudGenerator
from crudgen.scaffolder.models import (
    Action,
    ConfigFormat,
    ControllerContext,
    FormViewContext,
    FunctionalTestContext,
    GenerationRequest,
    IndexViewContext,
    RoutingContext,
    ShowViewContext,
)
from crudgen.scaffolder.templates import TemplateRenderer


pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _templates(renderer: MagicMock) -> list[str]:
    return [call.args[0] for call in renderer.render_to_file.call_args_list]


def _contexts(renderer: MagicMock) -> dict[str, object]:
    return {call.args[0]: call.args[2] for call in renderer.render_to_file.call_args_list}


def _files(root: Path) -> list[Path]:
    return sorted(p for p in root.rglob("*") if p.is_file())


@pytest.fixture
def generator(mock_renderer) -> CrudGenerator:
    return CrudGenerator(mock_renderer)


@pytest.fixture
def run(generator, bundle, post_metadata):
    """Call ``generate`` for ``Blog.Post`` with overridable options."""

    def _run(**overrides):
        kwargs = {
            "format": "yaml",
            "route_prefix": "blog/post",
            "with_write": True,
            "controller_dir": "Controller",
            **overrides,
        }
        return generator.generate(bundle, "Blog.Post", post_metadata, **kwargs)

    return _run


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestCrudGeneratorInit:
    def test_uses_given_renderer(self, mock_renderer):
        assert CrudGenerator(mock_renderer).renderer is mock_renderer

    def test_default_renderer(self):
        assert isinstance(CrudGenerator().renderer, TemplateRenderer)


# ---------------------------------------------------------------------------
# Render sequence
# ---------------------------------------------------------------------------


class TestRenderSequence:
    def test_full_plan_order(self, run, generator):
        run(with_write=True)
        assert _templates(generator.renderer) == [
            "controller",
            "views/index",
            "views/show",
            "views/form",
            "views/new",
            "views/edit",
            "tests/test",
            "config/routing.yaml",
        ]

    def test_read_only_plan(self, run, generator):
        run(with_write=False)
        assert _templates(generator.renderer) == [
            "controller",
            "views/index",
            "views/show",
            "tests/test",
            "config/routing.yaml",
        ]

    def test_form_rendered_once_before_new(self, run, generator):
        run(with_write=True)
        templates = _templates(generator.renderer)
        assert templates.count("views/form") == 1
        assert templates.index("views/form") < templates.index("views/new")

    def test_read_only_writes_no_form_files(self, run, bundle_dir):
        run(with_write=False)
        view_dir = bundle_dir / "Resources" / "views" / "Blog" / "Post"
        assert sorted(p.name for p in view_dir.iterdir()) == [
            "index.html.twig",
            "show.html.twig",
        ]

    def test_written_paths_in_order(self, run, bundle_dir):
        result = run(with_write=True)
        view_dir = bundle_dir / "Resources" / "views" / "Blog" / "Post"
        assert result.written == [
            bundle_dir / "Controller" / "Blog" / "PostController.php",
            view_dir / "index.html.twig",
            view_dir / "show.html.twig",
            view_dir / "form.html.twig",
            view_dir / "new.html.twig",
            view_dir / "edit.html.twig",
            bundle_dir / "Tests" / "Controller" / "Blog" / "PostControllerTest.php",
            bundle_dir / "Resources" / "config" / "routing" / "blog_post.yaml",
        ]
        assert all(p.exists() for p in result.written)

    def test_result_summary(self, run):
        result = run(with_write=False, format="xml")
        assert result.entity == "Blog.Post"
        assert result.format is ConfigFormat.XML
        assert result.plan.actions == (Action.INDEX, Action.SHOW)

    def test_controller_sub_directory(self, run, bundle_dir):
        result = run(controller_dir="Controller/Admin")
        assert result.paths.controller == (
            bundle_dir / "Controller" / "Admin" / "Blog" / "PostController.php"
        )
        assert (bundle_dir / "Resources" / "views" / "Admin" / "Blog" / "Post").is_dir()
        assert result.paths.form_dir == "Admin/Post"


# ---------------------------------------------------------------------------
# Routing formats
# ---------------------------------------------------------------------------


class TestRoutingFormats:
    @pytest.mark.parametrize("fmt", ["yaml", "xml", "php"])
    def test_routing_file_for_file_formats(self, run, generator, bundle_dir, fmt):
        run(format=fmt)
        assert _templates(generator.renderer)[-1] == f"config/routing.{fmt}"
        assert (bundle_dir / "Resources" / "config" / "routing" / f"blog_post.{fmt}").exists()

    def test_annotation_skips_routing(self, run, generator, bundle_dir):
        result = run(format="annotation")
        assert not any(t.startswith("config/") for t in _templates(generator.renderer))
        assert not (bundle_dir / "Resources" / "config").exists()
        assert result.paths.routing is None

    @pytest.mark.parametrize("fmt", ["yml", "json", "", "XML"])
    def test_unknown_format_falls_back_to_yaml(self, run, bundle_dir, fmt):
        result = run(format=fmt)
        assert result.format is ConfigFormat.YAML
        assert result.written[-1] == (
            bundle_dir / "Resources" / "config" / "routing" / "blog_post.yaml"
        )


# ---------------------------------------------------------------------------
# Pre-flight failures
# ---------------------------------------------------------------------------


class TestPreflightFailures:
    def test_multiple_primary_keys(self, generator, bundle, bundle_dir, composite_key_metadata):
        with pytest.raises(MultiplePrimaryKeysError) as exc_info:
            generator.generate(
                bundle, "Blog.PostTag", composite_key_metadata, "yaml", "blog/tag", True
            )
        assert exc_info.value.written == []
        assert _files(bundle_dir) == []
        generator.renderer.render_to_file.assert_not_called()

    def test_missing_id_primary_key(self, generator, bundle, bundle_dir, uuid_key_metadata):
        with pytest.raises(MissingIdPrimaryKeyError):
            generator.generate(bundle, "Blog.Post", uuid_key_metadata, "yaml", "blog/post", True)
        assert list(bundle_dir.iterdir()) == []
        generator.renderer.render_to_file.assert_not_called()

    def test_existing_controller(self, run, generator, bundle_dir):
        controller = bundle_dir / "Controller" / "Blog" / "PostController.php"
        controller.parent.mkdir(parents=True)
        controller.write_bytes(b"<?php // hand written\n")

        with pytest.raises(ControllerAlreadyExistsError) as exc_info:
            run()

        assert exc_info.value.path == controller
        assert controller.read_bytes() == b"<?php // hand written\n"
        assert _files(bundle_dir) == [controller]
        generator.renderer.render_to_file.assert_not_called()

    def test_entity_without_class_name(self, generator, bundle, bundle_dir, post_metadata):
        with pytest.raises(InvalidEntityNameError) as exc_info:
            generator.generate(bundle, "Blog.", post_metadata, "yaml", "blog", True)
        assert exc_info.value.written == []
        assert list(bundle_dir.iterdir()) == []
        generator.renderer.render_to_file.assert_not_called()

    @pytest.mark.parametrize("with_write", [True, False])
    @pytest.mark.parametrize("fmt", ["yaml", "annotation"])
    def test_existing_controller_regardless_of_options(self, run, with_write, fmt):
        run()
        with pytest.raises(ControllerAlreadyExistsError):
            run(with_write=with_write, format=fmt)


# ---------------------------------------------------------------------------
# Reruns
# ---------------------------------------------------------------------------


class TestRerun:
    def test_views_and_test_overwritten_when_controller_removed(self, run, bundle_dir):
        first = run()
        stale = "stale content\n"
        for path in first.written:
            path.write_text(stale, encoding="utf-8")
        first.paths.controller.unlink()

        second = run()

        assert second.written == first.written
        for path in second.written:
            assert path.read_text(encoding="utf-8") != stale

    def test_existing_view_directory_is_not_an_error(self, run, bundle_dir):
        view_dir = bundle_dir / "Resources" / "views" / "Blog" / "Post"
        view_dir.mkdir(parents=True)
        result = run()
        assert result.paths.view_dir == view_dir


# ---------------------------------------------------------------------------
# Mid-pipeline failures
# ---------------------------------------------------------------------------


class TestPartialFailure:
    def test_render_error_reports_completed_steps(self, run, generator, bundle_dir):
        original = generator.renderer.render_to_file.side_effect

        def fail_on_show(template_name, output_path, context):
            if template_name == "views/show":
                raise RenderError(template_name, output_path, "disk full")
            return original(template_name, output_path, context)

        generator.renderer.render_to_file.side_effect = fail_on_show

        with pytest.raises(RenderError) as exc_info:
            run()

        view_dir = bundle_dir / "Resources" / "views" / "Blog" / "Post"
        assert exc_info.value.written == [
            bundle_dir / "Controller" / "Blog" / "PostController.php",
            view_dir / "index.html.twig",
        ]
        # No rollback and no later steps
        assert all(p.exists() for p in exc_info.value.written)
        assert _templates(generator.renderer)[-1] == "views/show"
        assert not (bundle_dir / "Tests").exists()

    def test_view_directory_failure(self, run, bundle_dir):
        blocker = bundle_dir / "Resources" / "views" / "Blog" / "Post"
        blocker.parent.mkdir(parents=True)
        blocker.write_text("not a directory", encoding="utf-8")

        with pytest.raises(RenderError) as exc_info:
            run()

        assert exc_info.value.path == blocker
        assert exc_info.value.written == [
            bundle_dir / "Controller" / "Blog" / "PostController.php"
        ]


# ---------------------------------------------------------------------------
# Render contexts
# ---------------------------------------------------------------------------


class TestContexts:
    def test_context_types(self, run, generator):
        run(with_write=True)
        contexts = _contexts(generator.renderer)
        assert isinstance(contexts["controller"], ControllerContext)
        assert isinstance(contexts["views/index"], IndexViewContext)
        assert isinstance(contexts["views/show"], ShowViewContext)
        assert isinstance(contexts["views/form"], FormViewContext)
        assert isinstance(contexts["views/new"], FormViewContext)
        assert isinstance(contexts["views/edit"], FormViewContext)
        assert isinstance(contexts["tests/test"], FunctionalTestContext)
        assert isinstance(contexts["config/routing.yaml"], RoutingContext)

    def test_controller_context(self, run, generator):
        run(format="annotation", controller_dir="Controller/Admin")
        ctx = _contexts(generator.renderer)["controller"]
        assert ctx.entity == "Blog.Post"
        assert ctx.entity_class == "Post"
        assert ctx.entity_namespace == "Blog"
        assert ctx.controller_namespace == "Controller.Admin"
        assert ctx.namespace == "Acme.BlogBundle"
        assert ctx.bundle == "AcmeBlogBundle"
        assert ctx.format is ConfigFormat.ANNOTATION

    def test_route_name_prefix(self, run, generator):
        run()
        for ctx in _contexts(generator.renderer).values():
            assert ctx.route_prefix == "blog/post"
            assert ctx.route_name_prefix == "blog_post"

    def test_index_record_actions(self, run, generator):
        run(with_write=True)
        ctx = _contexts(generator.renderer)["views/index"]
        assert ctx.record_actions == [Action.SHOW, Action.EDIT]
        assert list(ctx.fields) == ["id", "title", "body", "published_at"]

    def test_form_dir(self, run, generator):
        run(controller_dir="Controller/Admin")
        contexts = _contexts(generator.renderer)
        for name in ("views/form", "views/new", "views/edit"):
            assert contexts[name].form_dir == "Admin/Post"

    def test_fresh_context_per_call(self, run, generator):
        run(with_write=True)
        contexts = [call.args[2] for call in generator.renderer.render_to_file.call_args_list]
        assert len({id(ctx) for ctx in contexts}) == len(contexts)


# ---------------------------------------------------------------------------
# generate_request
# ---------------------------------------------------------------------------


class TestGenerateRequest:
    def test_prebuilt_request(self, generator, bundle, post_metadata, bundle_dir):
        request = GenerationRequest(
            bundle=bundle,
            entity="Blog.Post",
            metadata=post_metadata,
            format="php",
            route_prefix="admin/blog/post",
            with_write=False,
        )
        assert request.route_name_prefix == "admin_blog_post"

        result = generator.generate_request(request)
        assert result.written[-1] == (
            bundle_dir / "Resources" / "config" / "routing" / "blog_post.php"
        )

    def test_custom_extensions(self, mock_renderer, bundle, post_metadata, bundle_dir):
        generator = CrudGenerator(
            mock_renderer, source_extension=".py", view_extension=".jinja"
        )
        result = generator.generate(bundle, "Blog.Post", post_metadata, "yaml", "", False)
        assert result.paths.controller.name == "PostController.py"
        assert result.written[1].name == "index.jinja"
