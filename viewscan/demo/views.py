# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Views scanned by the demo. Models live in the parent package so reload
scans re-execute only this module."""

from viewscan.demo import Person
from viewscan.views import TemplateView, View

person_view: View[Person] = TemplateView(
    "<html><body>"
    '<div class="person-view">'
    "<h2>Person Details</h2>"
    "<p>{{ model.name }} is {{ model.age }} years old</p>"
    "</div>"
    "</body></html>"
)
