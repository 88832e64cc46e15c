# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Model types rendered by the fixture views.

Kept outside the scanned namespaces so reload scans never redefine them.
"""

from dataclasses import dataclass, field


# ============================================================================
# simple
# ============================================================================

@dataclass
class SimpleModel:
    message: str


@dataclass
class AsyncModel:
    message: str


@dataclass
class MethodModel:
    message: str


@dataclass
class NestedModel:
    message: str


@dataclass
class FutureModel:
    message: str


@dataclass
class BrokenModel:
    message: str


@dataclass
class StrictModel:
    message: str


# ============================================================================
# objects
# ============================================================================

@dataclass
class ComplexModel:
    title: str
    items: list[str] = field(default_factory=list)


@dataclass
class ClassFieldModel:
    value: str


@dataclass
class ClassMethodModel:
    value: str


@dataclass
class CompanionModel:
    value: str


@dataclass
class AccessorModel:
    value: str


@dataclass
class ThrowingModel:
    value: str


@dataclass
class SlotModel:
    value: str


# ============================================================================
# inheritance
# ============================================================================

class Record:
    def __init__(self, name: str):
        self.name = name


class BaseRecord(Record):
    pass


class DerivedRecord(BaseRecord):
    pass


class GrandchildRecord(DerivedRecord):
    pass


class Printable:
    """Secondary base: resolved as a declared interface."""


class Entry:
    def __init__(self, name: str):
        self.name = name


class Document(Entry, Printable):
    pass


class Invoice(BaseRecord, Printable):
    pass


class Report(Document):
    pass


class Orphan:
    pass


# ============================================================================
# builder
# ============================================================================

@dataclass
class BuilderModel:
    message: str


@dataclass
class EngineModel:
    message: str


@dataclass
class EngineMethodModel:
    message: str


@dataclass
class NoBuilderModel:
    message: str


@dataclass
class MultiParamModel:
    message: str


# ============================================================================
# kdoc
# ============================================================================

@dataclass
class UserVm:
    name: str


class BaseVm:
    def __init__(self, base_content: str):
        self.base_content = base_content


class DerivedVm(BaseVm):
    def __init__(self, base_content: str, derived_content: str):
        super().__init__(base_content)
        self.derived_content = derived_content


class ProfileLike:
    name: str


@dataclass
class PublicProfile(ProfileLike):
    name: str
    bio: str


@dataclass
class UnrelatedVm:
    data: str

    def __str__(self) -> str:
        return self.data


class SecondaryInterface:
    secondary: str


class MultiInterfaceVm(ProfileLike, SecondaryInterface):
    def __init__(self, name: str, secondary: str):
        self.name = name
        self.secondary = secondary


# ============================================================================
# reexport / zip / duplicate
# ============================================================================

@dataclass
class SharedModel:
    message: str


@dataclass
class ZipModel:
    message: str


# ============================================================================
# declarations
# ============================================================================

@dataclass
class ConstructedModel:
    message: str


@dataclass
class DeferredModel:
    message: str


@dataclass
class DeferredMethodModel:
    message: str
