from __future__ import annotations

import importlib
from types import ModuleType
from typing import Any

import pytest

import lazybox._internal.integrations.pydantic_settings as pydantic_settings_integration
from lazybox import Container, LazyboxInvalidProviderError

pydantic_settings = pytest.importorskip("pydantic_settings")
pydantic = pytest.importorskip("pydantic")


class _Settings(pydantic_settings.BaseSettings):
    model_config = pydantic_settings.SettingsConfigDict(env_prefix="LAZYBOX_TEST_")

    host: str = "localhost"
    port: int = 5432


class _Pool(pydantic.BaseModel):
    size: int = 5


class _ModelConfig(pydantic.BaseModel):
    timeout: int = 30
    pool: _Pool = _Pool()


def _provider(container: Container) -> None:
    container.set("host", "provider-host")
    container.define("dsn", ["host", "port", lambda host, port: f"{host}:{port}"])


def test_register_seeds_settings_fields(container: Container) -> None:
    container.register(_provider, _Settings())

    assert container.get("host") == "localhost"
    assert container.get("port") == 5432
    assert container.get("dsn") == "localhost:5432"


def test_settings_read_from_environment(
    container: Container,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("LAZYBOX_TEST_PORT", "6543")

    container.register(_provider, _Settings())

    assert container.get("port") == 6543


def test_register_keeps_nested_models_as_objects(container: Container) -> None:
    config = _ModelConfig()

    container.register(lambda _: None, config)

    assert container.get("timeout") == 30
    assert container.get("pool") is config.pool


def test_model_classes_are_not_config(container: Container) -> None:
    with pytest.raises(LazyboxInvalidProviderError, match="Invalid provider config"):
        container.register(_provider, _Settings)


def test_is_pydantic_model_instance() -> None:
    assert pydantic_settings_integration.is_pydantic_model_instance(_Settings()) is True
    assert pydantic_settings_integration.is_pydantic_model_instance(_ModelConfig()) is True
    assert pydantic_settings_integration.is_pydantic_model_instance(_ModelConfig) is False
    assert pydantic_settings_integration.is_pydantic_model_instance({"a": 1}) is False


def test_model_to_mapping_lists_fields_in_declaration_order() -> None:
    mapping = pydantic_settings_integration.model_to_mapping(_Settings())

    assert list(mapping.items()) == [("host", "localhost"), ("port", 5432)]


def test_load_base_class_returns_none_for_missing_module(monkeypatch: Any) -> None:
    def _raise_import_error(_module_name: str) -> ModuleType:
        raise ImportError

    monkeypatch.setattr(importlib, "import_module", _raise_import_error)

    assert pydantic_settings_integration._load_base_class("missing.module", "BaseSettings") is None


def test_load_base_class_returns_none_when_attribute_is_not_a_type(monkeypatch: Any) -> None:
    module = ModuleType("test_module")
    module.BaseSettings = "not-a-type"  # type: ignore[attr-defined]

    def _import_module(_module_name: str) -> ModuleType:
        return module

    monkeypatch.setattr(importlib, "import_module", _import_module)

    assert pydantic_settings_integration._load_base_class("fake.module", "BaseSettings") is None


def test_build_model_bases_skips_missing_and_duplicate_bases(monkeypatch: Any) -> None:
    class _Base:
        pass

    monkeypatch.setattr(pydantic_settings_integration, "_load_pydantic_settings_base", lambda: None)
    monkeypatch.setattr(pydantic_settings_integration, "_load_pydantic_model_base", lambda: _Base)
    monkeypatch.setattr(pydantic_settings_integration, "_load_pydantic_v1_base", lambda: _Base)

    assert pydantic_settings_integration._build_model_bases() == (_Base,)


def test_config_is_rejected_when_no_model_base_is_available(
    container: Container,
    monkeypatch: Any,
) -> None:
    monkeypatch.setattr(pydantic_settings_integration, "MODEL_BASES", ())

    with pytest.raises(LazyboxInvalidProviderError):
        container.register(_provider, _Settings())

    assert len(container) == 0
