from __future__ import annotations

import importlib
import warnings
from collections.abc import Mapping
from typing import Any

_PYDANTIC_V1_WARNING_PATTERN = (
    r"Core Pydantic V1 functionality isn't compatible with Python 3\.14 or greater\."
)


def _load_pydantic_settings_base() -> type[Any] | None:
    return _load_base_class("pydantic_settings", "BaseSettings")


def _load_pydantic_model_base() -> type[Any] | None:
    return _load_base_class("pydantic", "BaseModel")


def _load_pydantic_v1_base() -> type[Any] | None:
    with warnings.catch_warnings():
        warnings.filterwarnings(
            "ignore",
            message=_PYDANTIC_V1_WARNING_PATTERN,
            category=UserWarning,
        )
        return _load_base_class("pydantic.v1", "BaseModel")


def _load_base_class(module_name: str, class_name: str) -> type[Any] | None:
    try:
        module = importlib.import_module(module_name)
    except ImportError:
        return None
    base_class = getattr(module, class_name, None)
    if isinstance(base_class, type):
        return base_class
    return None


def _build_model_bases() -> tuple[type[Any], ...]:
    seen_ids: set[int] = set()
    bases: list[type[Any]] = []

    for candidate in (
        _load_pydantic_settings_base(),
        _load_pydantic_model_base(),
        _load_pydantic_v1_base(),
    ):
        if candidate is None:
            continue
        candidate_id = id(candidate)
        if candidate_id in seen_ids:
            continue
        seen_ids.add(candidate_id)
        bases.append(candidate)

    return tuple(bases)


MODEL_BASES: tuple[type[Any], ...] = _build_model_bases()


def is_pydantic_model_instance(candidate: object) -> bool:
    """Return whether a value is a Pydantic settings or model instance.

    Both ``pydantic_settings.BaseSettings``/``pydantic.BaseModel`` and the
    legacy ``pydantic.v1.BaseModel`` are recognized when available. If
    Pydantic is not installed, this function returns ``False`` for every
    candidate.

    Args:
        candidate: Object to test.

    Returns:
        ``True`` when ``candidate`` is an instance of a discovered base.

    """
    if isinstance(candidate, type):
        return False
    return isinstance(candidate, MODEL_BASES)


def model_to_mapping(model: Any) -> Mapping[str, Any]:
    """Dump a Pydantic model into a mapping of field names to values.

    Field values are kept as Python objects (nested models stay models) so
    they can be stored in the container unchanged.
    """
    if hasattr(model, "model_dump"):
        return {name: getattr(model, name) for name in type(model).model_fields}
    return {name: getattr(model, name) for name in model.__fields__}


__all__ = [
    "MODEL_BASES",
    "is_pydantic_model_instance",
    "model_to_mapping",
]
