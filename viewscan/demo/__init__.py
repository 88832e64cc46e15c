# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Runnable example: a Person model, its view, and two ways to render it.

Run with ``python -m viewscan.demo`` or ``viewscan demo``.
"""

from dataclasses import dataclass

DEMO_NAMESPACE = "viewscan.demo.views"


@dataclass
class Person:
    name: str
    age: int


@dataclass
class Person2:
    name: str
    age: int


def run_demo(hot_reload: bool = True) -> list[str]:
    """Render the demo models, returning one line of output per step."""
    from viewscan.demo.views import person_view
    from viewscan.exceptions import ViewModelMismatchError
    from viewscan.templates import ViewTemplates
    from viewscan.views import renderer

    templates = ViewTemplates()
    if hot_reload:
        render = templates.hot_reload_namespace(DEMO_NAMESPACE)
    else:
        render = templates.caching_namespace(DEMO_NAMESPACE)

    lines = [render(Person("Bob", 45))]

    # Single-view renderer, checked against Person
    render_person = renderer(person_view, Person)
    lines.append(render_person(Person("Alice", 30)))
    try:
        render_person(Person2("Bob", 45))
    except ViewModelMismatchError as e:
        lines.append(f"Error rendering view with Person2: {e}")

    return lines


def main() -> None:
    for line in run_demo():
        print(line)
