"""CRUD scaffolding orchestrator.

Takes a bundle, a dotted entity name and the entity's metadata and renders a
controller, a functional test, the CRUD views and a routing file into the
bundle.  Steps run strictly in order and stop at the first failure; files
written by earlier steps are left in place and reported on the exception's
``written`` attribute.
"""

from __future__ import annotations

from pathlib import Path

from .actions import plan_actions
from .errors import ControllerAlreadyExistsError, CrudGeneratorError, RenderError
from .formats import normalize_format
from .models import (
    TOP_LEVEL_CONTROLLER_DIR,
    Action,
    ActionPlan,
    Bundle,
    ConfigFormat,
    ControllerContext,
    EntityMetadata,
    FormViewContext,
    FunctionalTestContext,
    GenerationRequest,
    GenerationResult,
    IndexViewContext,
    OutputPaths,
    RoutingContext,
    ShowViewContext,
)
from .paths import DEFAULT_SOURCE_EXTENSION, DEFAULT_VIEW_EXTENSION, resolve_paths
from .templates import (
    CONTROLLER_TEMPLATE,
    EDIT_VIEW_TEMPLATE,
    FORM_VIEW_TEMPLATE,
    INDEX_VIEW_TEMPLATE,
    NEW_VIEW_TEMPLATE,
    SHOW_VIEW_TEMPLATE,
    TEST_TEMPLATE,
    TemplateRenderer,
    routing_template,
)
from .validator import validate_metadata


class CrudGenerator:
    """Generates the CRUD scaffold of a single entity.

    A run produces, in this order:
    - the controller (refused if it already exists)
    - the ``index`` view, plus ``show``/``form``/``new``/``edit`` as planned
    - the functional test class (always overwritten)
    - the routing file, unless the format is ``annotation``
    """

    def __init__(
        self,
        renderer: TemplateRenderer | None = None,
        *,
        source_extension: str = DEFAULT_SOURCE_EXTENSION,
        view_extension: str = DEFAULT_VIEW_EXTENSION,
    ) -> None:
        self.renderer = renderer or TemplateRenderer()
        self.source_extension = source_extension
        self.view_extension = view_extension

    # -- Public API --------------------------------------------------------

    def generate(
        self,
        bundle: Bundle,
        entity: str,
        metadata: EntityMetadata,
        format: str,
        route_prefix: str,
        with_write: bool,
        controller_dir: str = TOP_LEVEL_CONTROLLER_DIR,
    ) -> GenerationResult:
        """Generate the CRUD scaffold for *entity* inside *bundle*.

        Args:
            bundle: Target bundle.
            entity: Dotted entity name, e.g. ``"Blog.Post"``.
            metadata: Field mappings and identifier of the entity.
            format: Requested routing format; unknown values fall back to
                ``yaml``.
            route_prefix: URL prefix of the generated routes.
            with_write: Also generate the ``new``, ``edit`` and ``delete``
                actions.
            controller_dir: Controller sub-directory of the bundle.

        Returns:
            A ``GenerationResult`` listing every written path in order.

        Raises:
            MultiplePrimaryKeysError: Nothing was written.
            MissingIdPrimaryKeyError: Nothing was written.
            ControllerAlreadyExistsError: Nothing was written.
            RenderError: Earlier outputs remain on disk, see ``written``.
        """
        request = GenerationRequest(
            bundle=bundle,
            entity=entity,
            metadata=metadata,
            format=format,
            route_prefix=route_prefix,
            with_write=with_write,
            controller_dir=controller_dir,
        )
        return self.generate_request(request)

    def generate_request(self, request: GenerationRequest) -> GenerationResult:
        """Run the pipeline for a prebuilt ``GenerationRequest``."""
        validate_metadata(request.metadata)

        plan = plan_actions(request.with_write)
        fmt = normalize_format(request.format)
        paths = resolve_paths(
            request.bundle.path,
            request.entity,
            request.controller_dir,
            fmt,
            source_extension=self.source_extension,
            view_extension=self.view_extension,
        )

        if paths.controller.exists():
            raise ControllerAlreadyExistsError(paths.controller)

        result = GenerationResult(
            entity=request.entity, format=fmt, plan=plan, paths=paths
        )
        try:
            self._render_all(request, plan, fmt, paths, result.written)
        except CrudGeneratorError as exc:
            exc.written = list(result.written)
            raise
        return result

    # -- Pipeline steps ----------------------------------------------------

    def _render_all(
        self,
        request: GenerationRequest,
        plan: ActionPlan,
        fmt: ConfigFormat,
        paths: OutputPaths,
        written: list[Path],
    ) -> None:
        written.append(self._render_controller(request, plan, fmt, paths))

        try:
            paths.view_dir.mkdir(mode=0o777, parents=True, exist_ok=True)
        except OSError as exc:
            raise RenderError(
                INDEX_VIEW_TEMPLATE, paths.view_dir, exc.strerror or str(exc)
            ) from exc

        written.append(self._render_index_view(request, plan, paths))

        if Action.SHOW in plan:
            written.append(self._render_show_view(request, plan, paths))

        if Action.NEW in plan:
            # The new view includes the form partial
            written.append(
                self._render_form_view(FORM_VIEW_TEMPLATE, "form", request, plan, paths)
            )
            written.append(
                self._render_form_view(NEW_VIEW_TEMPLATE, "new", request, plan, paths)
            )

        if Action.EDIT in plan:
            written.append(
                self._render_form_view(EDIT_VIEW_TEMPLATE, "edit", request, plan, paths)
            )

        written.append(self._render_test_class(request, plan, paths))

        if paths.routing is not None:
            written.append(self._render_routing(request, plan, fmt, paths))

    def _render_controller(
        self,
        request: GenerationRequest,
        plan: ActionPlan,
        fmt: ConfigFormat,
        paths: OutputPaths,
    ) -> Path:
        context = ControllerContext(
            actions=list(plan.actions),
            route_prefix=request.route_prefix,
            route_name_prefix=request.route_name_prefix,
            bundle=request.bundle.name,
            namespace=request.bundle.namespace,
            entity=request.entity,
            entity_class=paths.entity_class,
            entity_namespace=paths.entity_namespace,
            controller_namespace=paths.controller_namespace,
            format=fmt,
        )
        return self.renderer.render_to_file(CONTROLLER_TEMPLATE, paths.controller, context)

    def _render_index_view(
        self, request: GenerationRequest, plan: ActionPlan, paths: OutputPaths
    ) -> Path:
        context = IndexViewContext(
            entity=request.entity,
            fields=request.metadata.fields,
            actions=list(plan.actions),
            record_actions=list(plan.record_actions),
            route_prefix=request.route_prefix,
            route_name_prefix=request.route_name_prefix,
        )
        return self.renderer.render_to_file(
            INDEX_VIEW_TEMPLATE, paths.views["index"], context
        )

    def _render_show_view(
        self, request: GenerationRequest, plan: ActionPlan, paths: OutputPaths
    ) -> Path:
        context = ShowViewContext(
            entity=request.entity,
            fields=request.metadata.fields,
            actions=list(plan.actions),
            route_prefix=request.route_prefix,
            route_name_prefix=request.route_name_prefix,
        )
        return self.renderer.render_to_file(
            SHOW_VIEW_TEMPLATE, paths.views["show"], context
        )

    def _render_form_view(
        self,
        template_name: str,
        view: str,
        request: GenerationRequest,
        plan: ActionPlan,
        paths: OutputPaths,
    ) -> Path:
        context = FormViewContext(
            entity=request.entity,
            fields=request.metadata.fields,
            actions=list(plan.actions),
            route_prefix=request.route_prefix,
            route_name_prefix=request.route_name_prefix,
            bundle=request.bundle.name,
            form_dir=paths.form_dir,
        )
        return self.renderer.render_to_file(template_name, paths.views[view], context)

    def _render_test_class(
        self, request: GenerationRequest, plan: ActionPlan, paths: OutputPaths
    ) -> Path:
        context = FunctionalTestContext(
            actions=list(plan.actions),
            fields=request.metadata.fields,
            route_prefix=request.route_prefix,
            route_name_prefix=request.route_name_prefix,
            namespace=request.bundle.namespace,
            entity=request.entity,
            entity_class=paths.entity_class,
            entity_namespace=paths.entity_namespace,
            controller_namespace=paths.controller_namespace,
        )
        return self.renderer.render_to_file(TEST_TEMPLATE, paths.test, context)

    def _render_routing(
        self,
        request: GenerationRequest,
        plan: ActionPlan,
        fmt: ConfigFormat,
        paths: OutputPaths,
    ) -> Path:
        context = RoutingContext(
            actions=list(plan.actions),
            route_prefix=request.route_prefix,
            route_name_prefix=request.route_name_prefix,
            bundle=request.bundle.name,
            entity=request.entity,
            entity_class=paths.entity_class,
            controller_namespace=paths.controller_namespace,
        )
        return self.renderer.render_to_file(
            routing_template(fmt.value), paths.routing, context
        )
