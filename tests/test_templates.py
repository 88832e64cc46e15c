# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""End-to-end tests: scan fixture namespaces and render models."""

import sys
import zipfile

import pytest

from tests.fixtures.loaders import CountingLoader
from tests.fixtures.models import (
    AccessorModel,
    AsyncModel,
    BaseRecord,
    BaseVm,
    BrokenModel,
    BuilderModel,
    ClassFieldModel,
    ClassMethodModel,
    CompanionModel,
    ComplexModel,
    ConstructedModel,
    DeferredMethodModel,
    DeferredModel,
    DerivedRecord,
    DerivedVm,
    Document,
    EngineMethodModel,
    EngineModel,
    FutureModel,
    GrandchildRecord,
    Invoice,
    MethodModel,
    MultiInterfaceVm,
    MultiParamModel,
    NestedModel,
    NoBuilderModel,
    Orphan,
    PublicProfile,
    Report,
    SharedModel,
    SimpleModel,
    SlotModel,
    StrictModel,
    ThrowingModel,
    UnrelatedVm,
    UserVm,
    ZipModel,
)
from viewscan import (
    DuplicateViewError,
    NoCompatibleViewError,
    ScanMode,
    UnsupportedTemplatesOperation,
    ViewEngine,
    ViewRenderError,
    ViewTemplates,
    build_registry,
)
from viewscan.demo import DEMO_NAMESPACE, Person
from viewscan.settings import load_config

VIEWS = "tests.fixtures.views"


class TestSimpleNamespace:
    """Class fields, static methods, async views and nested modules."""

    @pytest.fixture
    def render(self):
        return build_registry(f"{VIEWS}.simple")

    def test_bound_model_types(self, render):
        assert set(render.bindings) == {
            SimpleModel,
            AsyncModel,
            MethodModel,
            NestedModel,
            FutureModel,
            BrokenModel,
            StrictModel,
        }

    def test_class_field_view(self, render):
        html = render(SimpleModel("Hello from a field"))
        assert "<h1>Simple View</h1>" in html
        assert "Hello from a field" in html

    def test_async_view(self, render):
        assert "<h1>Async View</h1>" in render(AsyncModel("Hello async"))

    def test_future_view(self, render):
        assert render(FutureModel("done")) == "<html><body><h1>Future View</h1><p>done</p></body></html>"

    def test_static_method_view(self, render):
        assert "<h1>Method View</h1>" in render(MethodModel("static"))

    def test_nested_module(self, render):
        assert render(NestedModel("deep")) == "<nested>deep</nested>"

    def test_locations(self, render):
        module = f"{VIEWS}.simple.simple_views"
        assert render.bindings[SimpleModel].location == f"{module}.SimpleTestViews.simple_view"
        assert render.bindings[MethodModel].location == f"{module}.SimpleTestViews.method_view()"
        assert render.bindings[FutureModel].location == f"{module}.future_view"

    def test_render_failure(self, render):
        with pytest.raises(ViewRenderError) as exc_info:
            render(BrokenModel("oops"))

        assert str(exc_info.value) == (
            f"Failed to render view at {VIEWS}.simple.simple_views.broken_view for model BrokenModel"
        )
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_undefined_template_variable_fails(self, render):
        with pytest.raises(ViewRenderError):
            render(StrictModel("x"))

    def test_html_is_escaped(self, render):
        assert "&lt;script&gt;" in render(SimpleModel("<script>"))


class TestObjectNamespace:
    """Singletons, companions, accessors, properties and slots."""

    @pytest.fixture
    def render(self):
        return build_registry(f"{VIEWS}.objects")

    def test_bound_model_types(self, render):
        assert set(render.bindings) == {
            ComplexModel,
            ClassFieldModel,
            ClassMethodModel,
            CompanionModel,
            AccessorModel,
            SlotModel,
        }
        assert ThrowingModel not in render.bindings

    def test_singleton_instance_field(self, render):
        html = render(ComplexModel("Shopping", ["apples", "pears"]))
        assert "<h1>Shopping</h1>" in html
        assert "<li>apples</li><li>pears</li>" in html

    def test_class_views(self, render):
        assert "Class Field View" in render(ClassFieldModel("field"))
        assert "Class Method View" in render(ClassMethodModel("method"))

    def test_provisioned_instances(self, render):
        assert render(CompanionModel("c")) == "<p>companion c</p>"
        assert render(AccessorModel("a")) == "<p>accessor a</p>"
        assert render(SlotModel("s")) == "<p>slot s</p>"


class TestInheritanceNamespace:
    """Dispatch by ancestry."""

    @pytest.fixture
    def render(self):
        return build_registry(f"{VIEWS}.inheritance")

    def test_exact(self, render):
        assert "Base Record View" in render(BaseRecord("base"))

    def test_ancestor_chain(self, render):
        assert "Base Record View" in render(DerivedRecord("derived"))
        assert "Base Record View" in render(GrandchildRecord("grandchild"))

    def test_declared_interface(self, render):
        assert "Printable View" in render(Document("doc"))

    def test_ancestor_beats_interface(self, render):
        assert "Base Record View" in render(Invoice("invoice"))

    def test_assignable_fallback(self, render):
        assert "Printable View" in render(Report("report"))

    def test_resolution_is_memoized(self, render):
        render(GrandchildRecord("first"))
        assert GrandchildRecord in render.resolution_cache
        assert BaseRecord not in render.resolution_cache

    def test_no_compatible_view(self, render):
        with pytest.raises(NoCompatibleViewError) as exc_info:
            render(Orphan())

        assert str(exc_info.value) == (
            "No compatible view found for ViewModel type: Orphan. "
            "Available views: BaseRecord, Printable"
        )

    def test_fallback_disabled_by_settings(self):
        settings = load_config(assignable_fallback=False)
        render = build_registry(f"{VIEWS}.inheritance", ScanMode.RELOAD, settings=settings)

        with pytest.raises(NoCompatibleViewError):
            render(Report("report"))

    def test_resolve_without_rendering(self, render):
        binding = render.resolve(Invoice("invoice"))
        assert binding.model_type is BaseRecord
        assert binding.location == f"{VIEWS}.inheritance.inheritance_views.base_view"


class TestKDocNamespace:
    """View[Any] catches models nothing more specific accepts."""

    @pytest.fixture
    def render(self):
        return build_registry(f"{VIEWS}.kdoc")

    def test_exact_and_inherited(self, render):
        assert "Welcome, Alice!" in render(UserVm("Alice"))
        assert "Base content: shared" in render(DerivedVm("shared", "extra"))
        assert "Base View" in render(BaseVm("plain"))

    def test_interfaces(self, render):
        assert "Profile Interface View" in render(PublicProfile("Ann", "bio"))
        assert "Profile Interface View" in render(MultiInterfaceVm("Ann", "second"))

    def test_any_view(self, render):
        html = render(UnrelatedVm("free form"))
        assert "Any Type View" in html
        assert "Rendering any object: free form" in html

    def test_any_view_bound_to_object(self, render):
        assert render.bindings[object].location.endswith("KDocExampleViews.any_view")


class TestBuilderNamespace:
    """Classes and accessors needing a ViewEngine."""

    def test_with_engine(self):
        render = build_registry(f"{VIEWS}.builder", engine=ViewEngine())

        assert set(render.bindings) == {BuilderModel, EngineMethodModel, EngineModel, NoBuilderModel}
        assert render(EngineModel("e")) == "<p>engine e</p>"
        assert render(EngineMethodModel("m")) == "<p>engine method m</p>"
        assert "Builder View" in render(BuilderModel("b"))

    def test_without_engine(self):
        render = build_registry(f"{VIEWS}.builder")

        assert set(render.bindings) == {BuilderModel, NoBuilderModel}
        assert MultiParamModel not in render.bindings


class TestDeclarationsNamespace:
    """Constructor-assigned views and postponed annotations."""

    @pytest.fixture
    def render(self):
        return build_registry(f"{VIEWS}.declarations")

    def test_bound_model_types(self, render):
        assert set(render.bindings) == {ConstructedModel, DeferredModel, DeferredMethodModel}

    def test_inherited_constructor_view_bound_once(self, render):
        binding = render.bindings[ConstructedModel]

        assert binding.location.endswith("constructor_views.BaseConstructorViews.view")
        assert render(ConstructedModel("c")) == "<p>constructed c</p>"

    def test_type_checking_import_does_not_hide_views(self, render):
        assert render(DeferredModel("d")) == "<p>deferred d</p>"
        assert render(DeferredMethodModel("m")) == "<p>deferred method m</p>"


class TestRegistryCaching:
    """Precomputed registries are built once per namespace."""

    def test_repeated_builds_share_registry(self):
        loader = CountingLoader()
        first = build_registry(f"{VIEWS}.inheritance", loader=loader)
        loads = len(loader.calls)
        second = build_registry(f"{VIEWS}.inheritance", loader=loader)

        assert loads > 0
        assert len(loader.calls) == loads
        assert second.bindings is first.bindings
        assert second.resolution_cache is first.resolution_cache

    def test_slash_namespace_shares_registry(self):
        dotted = build_registry(f"{VIEWS}.kdoc")
        slashed = build_registry("tests/fixtures/views/kdoc/")

        assert slashed.namespace == f"{VIEWS}.kdoc"
        assert slashed.bindings is dotted.bindings

    def test_modes_are_cached_separately(self):
        precomputed = build_registry(f"{VIEWS}.kdoc")
        reloading = build_registry(f"{VIEWS}.kdoc", "reload")

        assert reloading.mode is ScanMode.RELOAD
        assert reloading.bindings is not precomputed.bindings

    def test_bindings_are_read_only(self):
        render = build_registry(f"{VIEWS}.kdoc")
        with pytest.raises(TypeError):
            render.bindings[SimpleModel] = None


class TestScanEdgeCases:
    """Empty, duplicate, re-exported and archived namespaces."""

    def test_empty_namespace(self):
        render = build_registry(f"{VIEWS}.empty")

        assert len(render.bindings) == 0
        with pytest.raises(NoCompatibleViewError, match="Available views: $"):
            render(SimpleModel("nothing"))

    def test_duplicate_views(self):
        module = "tests.fixtures.views_failing.duplicate.duplicate_views"

        with pytest.raises(DuplicateViewError) as exc_info:
            build_registry("tests.fixtures.views_failing.duplicate")

        assert str(exc_info.value) == (
            "Multiple views found for ViewModel type 'SimpleModel'. "
            f"Existing: {module}.FirstDuplicateViews.view, "
            f"New: {module}.SecondDuplicateViews.view"
        )

    def test_failed_scan_is_retried(self):
        loader = CountingLoader()
        for _ in range(2):
            with pytest.raises(DuplicateViewError):
                build_registry("tests.fixtures.views_failing.duplicate", loader=loader)

        assert loader.calls.count("tests.fixtures.views_failing.duplicate.duplicate_views") == 2

    def test_reexported_view_counts_once(self):
        render = build_registry(f"{VIEWS}.reexport")

        assert list(render.bindings) == [SharedModel]
        assert render(SharedModel("one")) == "<p>shared one</p>"

    def test_zip_archive(self, tmp_path, monkeypatch, unique_package_name):
        archive = tmp_path / "views.zip"
        with zipfile.ZipFile(archive, "w") as zf:
            zf.writestr(f"{unique_package_name}/__init__.py", "")
            zf.writestr(
                f"{unique_package_name}/zipped.py",
                "from tests.fixtures.models import ZipModel\n"
                "from viewscan import FunctionView, View\n"
                "zip_view: View[ZipModel] = FunctionView(lambda m: f'<zip>{m.message}</zip>')\n",
            )
        monkeypatch.syspath_prepend(str(archive))

        try:
            render = build_registry(unique_package_name)
            assert render(ZipModel("archived")) == "<zip>archived</zip>"
        finally:
            for name in [n for n in sys.modules if n.startswith(unique_package_name)]:
                del sys.modules[name]


class TestDemo:
    """The packaged demo namespace."""

    def test_render_person(self):
        render = build_registry(DEMO_NAMESPACE)
        assert render(Person("Bob", 45)) == (
            '<html><body><div class="person-view"><h2>Person Details</h2>'
            "<p>Bob is 45 years old</p></div></body></html>"
        )

    def test_run_demo(self):
        from viewscan.demo import run_demo

        lines = run_demo(hot_reload=False)

        assert "Bob is 45 years old" in lines[0]
        assert "Alice is 30 years old" in lines[1]
        assert lines[2] == (
            "Error rendering view with Person2: ViewModel type mismatch for view "
            "TemplateView. Expected: Person, Got: Person2"
        )


class TestViewTemplates:
    """Tests for the ViewTemplates factory."""

    def test_directory_operations_unsupported(self):
        templates = ViewTemplates()

        with pytest.raises(UnsupportedTemplatesOperation, match="Use caching_namespace\\(\\) instead"):
            templates.caching("templates/")
        with pytest.raises(UnsupportedTemplatesOperation, match="Use hot_reload_namespace\\(\\) instead"):
            templates.hot_reload()

    def test_namespace_factories(self):
        templates = ViewTemplates(engine=ViewEngine())

        assert templates.caching_namespace(f"{VIEWS}.builder").mode is ScanMode.PRECOMPUTED
        hot = templates.hot_reload_namespace("tests/fixtures/views/builder")
        assert hot.mode is ScanMode.RELOAD
        assert hot(EngineModel("hot")) == "<p>engine hot</p>"
