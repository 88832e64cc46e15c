# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Views held by singletons, holders, accessors and plain classes."""

from tests.fixtures.models import (
    AccessorModel,
    ClassFieldModel,
    ClassMethodModel,
    CompanionModel,
    ComplexModel,
    SlotModel,
    ThrowingModel,
)
from viewscan import TemplateView, View


class ObjectTestViews:
    """Singleton: instance published as INSTANCE."""

    INSTANCE = None

    complex_view: View[ComplexModel]

    def __init__(self):
        self.complex_view = TemplateView(
            "<html><body><h1>{{ model.title }}</h1><ul>"
            "{% for item in model.items %}<li>{{ item }}</li>{% endfor %}"
            "</ul></body></html>"
        )


ObjectTestViews.INSTANCE = ObjectTestViews()


class ClassTestViews:
    class_field_view: View[ClassFieldModel] = TemplateView(
        "<html><body><h1>Class Field View</h1><p>{{ model.value }}</p></body></html>"
    )

    def class_method_view(self) -> View[ClassMethodModel]:
        return TemplateView("<html><body><h1>Class Method View</h1><p>{{ model.value }}</p></body></html>")


class CompanionViews:
    """No usable constructor; the instance lives in _instance."""

    _instance = None

    def __init__(self, token: str):
        self.token = token

    @property
    def companion_view(self) -> View[CompanionModel]:
        return TemplateView("<p>companion {{ model.value }}</p>")


CompanionViews._instance = CompanionViews("companion-token")


class AccessorViews:
    """Only reachable through get_instance()."""

    def __init__(self, secret: str):
        self.secret = secret

    @classmethod
    def get_instance(cls) -> "AccessorViews":
        return cls("accessor-secret")

    def accessor_view(self) -> View[AccessorModel]:
        return TemplateView("<p>accessor {{ model.value }}</p>")


class ThrowingViews:
    def throwing_view(self) -> View[ThrowingModel]:
        raise RuntimeError("view factory is broken")


class SlotViews:
    __slots__ = ("slot_view", "unset_view")

    def __init__(self):
        self.slot_view = TemplateView[SlotModel]("<p>slot {{ model.value }}</p>")
