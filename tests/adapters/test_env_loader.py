"""Environment settings adapter tests clarifying prefix handling and coercion."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lib_object_mapper.adapters.env.default import DefaultSettingsLoader, _coerce, default_env_prefix
from lib_object_mapper.domain.errors import InvalidSettings


def test_default_env_prefix() -> None:
    assert default_env_prefix("lib-object-mapper") == "LIB_OBJECT_MAPPER"
    assert default_env_prefix() == "LIB_OBJECT_MAPPER"


def test_settings_loaded_from_prefixed_variables() -> None:
    environ = {
        "LIB_OBJECT_MAPPER_MISSING_SOURCE_FIELDS": "skip",
        "LIB_OBJECT_MAPPER_INCLUDE_PRIVATE_FIELDS": "TRUE",
        "LIB_OBJECT_MAPPER_UNKNOWN": "1",
        "MISSING_SOURCE_FIELDS": "ignored",
    }
    settings = DefaultSettingsLoader(environ=environ).load("LIB_OBJECT_MAPPER")
    assert settings.missing_source_fields == "skip"
    assert settings.include_private_fields is True


def test_empty_environment_yields_defaults() -> None:
    settings = DefaultSettingsLoader(environ={}).load()
    assert settings.missing_source_fields == "assign_none"
    assert settings.include_private_fields is False


def test_invalid_value_raises() -> None:
    loader = DefaultSettingsLoader(environ={"LIB_OBJECT_MAPPER_MISSING_SOURCE_FIELDS": "drop"})
    with pytest.raises(InvalidSettings):
        loader.load()


def test_collect_strips_prefix_and_lowercases() -> None:
    loader = DefaultSettingsLoader(environ={"DEMO_SOME_KEY": "3", "DEMO_": "x"})
    assert loader.collect("DEMO") == {"some_key": 3}


SCALAR_VALUES = st.sampled_from(["0", "-4", "true", "False", "3.5", "none", "skip"])


@given(SCALAR_VALUES)
def test_coerce_matches_documented_rules(value: str) -> None:
    lowered = value.lower()
    result = _coerce(value)
    if lowered in {"true", "false"}:
        assert result is (lowered == "true")
    elif lowered == "none":
        assert result is None
    elif lowered.lstrip("-").isdigit():
        assert result == int(value)
    elif lowered == "skip":
        assert result == "skip"
    else:
        assert result == float(value)
