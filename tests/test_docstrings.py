"""Docstring completeness checks for the ghostboard package."""

from __future__ import annotations

import importlib
import inspect
import pkgutil
from types import ModuleType
from typing import Iterator, List, Set

import pytest
from numpydoc.docscrape import NumpyDocString

import ghostboard

_NONE_ANNOTATIONS = {"none", "nonetype", "typing.none", "builtins.none", "builtins.nonetype"}


def _iter_modules() -> Iterator[ModuleType]:
    yield ghostboard
    for info in pkgutil.walk_packages(ghostboard.__path__, prefix="ghostboard."):
        yield importlib.import_module(info.name)


def _own_functions(owner: object, module_name: str) -> Iterator[object]:
    for name, member in inspect.getmembers(owner):
        if name.startswith("__"):
            continue
        func = member.__func__ if inspect.ismethod(member) else member
        if inspect.isfunction(func) and func.__module__ == module_name:
            yield func


def _collect_callables() -> List[object]:
    items: List[object] = []
    seen: Set[int] = set()

    def add(obj: object) -> None:
        if id(obj) not in seen:
            seen.add(id(obj))
            items.append(obj)

    for module in _MODULES:
        for func in _own_functions(module, module.__name__):
            add(func)
        for _, cls in inspect.getmembers(module, inspect.isclass):
            if cls.__module__ != module.__name__:
                continue
            add(cls)
            for func in _own_functions(cls, module.__name__):
                add(func)
    return items


def _parsed(obj: object) -> NumpyDocString:
    return NumpyDocString(inspect.getdoc(obj) or "")


def _object_id(obj: object) -> str:
    return f"{getattr(obj, '__module__', '?')}.{getattr(obj, '__qualname__', repr(obj))}"


def _returns_value(sig: inspect.Signature) -> bool:
    annotation = sig.return_annotation
    if annotation is inspect.Signature.empty or annotation in {None, type(None)}:
        return False
    if isinstance(annotation, str) and annotation.strip().lower() in _NONE_ANNOTATIONS:
        return False
    return True


_MODULES = list(_iter_modules())
_CALLABLES = _collect_callables()


@pytest.mark.parametrize("module", _MODULES, ids=lambda m: m.__name__)
def test_modules_have_docstrings(module: ModuleType) -> None:
    """Every module explains what it is for."""
    assert (module.__doc__ or "").strip(), f"{module.__name__} has no module docstring"


@pytest.mark.parametrize("obj", _CALLABLES, ids=_object_id)
def test_parameters_are_documented(obj: object) -> None:
    """Assert that every parameter in the signature is described in the docstring."""
    params = [
        p.name
        for p in inspect.signature(obj).parameters.values()
        if p.kind not in (p.VAR_POSITIONAL, p.VAR_KEYWORD) and p.name not in {"self", "cls"}
    ]
    if not params:
        pytest.skip("No parameters requiring documentation")

    documented = {name for name, _, _ in _parsed(obj)["Parameters"]}
    missing = [name for name in params if name not in documented]
    assert not missing, f"Docstring for {_object_id(obj)} is missing parameter entries: " + ", ".join(missing)


@pytest.mark.parametrize("obj", _CALLABLES, ids=_object_id)
def test_returns_are_documented(obj: object) -> None:
    """Require a Returns section whenever the callable annotates a non-None value."""
    if inspect.isclass(obj) or not _returns_value(inspect.signature(obj)):
        pytest.skip("Return value does not require documentation")
    assert _parsed(obj)["Returns"], f"Docstring for {_object_id(obj)} is missing a Returns section"
