"""Engine tests for destination shapes, rule precedence, and batch mapping."""

from __future__ import annotations

from dataclasses import dataclass
from types import SimpleNamespace
from typing import Any, Optional

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lib_object_mapper import (
    ExistingInstance,
    ExistingInstanceWithType,
    Mapper,
    MapperSettings,
    MissingMappingError,
    NewInstance,
    UnbuiltMappingError,
    UnresolvableDestinationTypeError,
)


@dataclass
class Source:
    a: Any = None
    b: Any = None
    c: Any = None


@dataclass
class Target:
    a: Any = "default-a"
    b: Any = "default-b"
    c: Any = "default-c"


@dataclass
class Partial:
    a: Any = "default-a"
    extra: Optional[str] = "kept"


VALUES = st.one_of(st.none(), st.booleans(), st.integers(), st.text(max_size=5))
FIELDS = st.fixed_dictionaries({}, optional={"a": VALUES, "b": VALUES, "c": VALUES})


@given(FIELDS)
def test_default_convention_copies_present_fields(payload: dict[str, Any]) -> None:
    result = Mapper().map(payload, Target)
    for name in ("a", "b", "c"):
        expected = payload[name] if name in payload else None
        assert getattr(result, name) == expected


@given(st.lists(FIELDS, max_size=6))
def test_batch_matches_element_wise_mapping(payloads: list[dict[str, Any]]) -> None:
    engine = Mapper()
    batch = engine.map(payloads, Target)
    assert isinstance(batch, list)
    assert batch == [engine.map(payload, Target) for payload in payloads]


def test_tuple_source_returns_list() -> None:
    result = Mapper().map(({"a": 1}, {"a": 2}), Target)
    assert [item.a for item in result] == [1, 2]


def test_named_source_without_configuration_fails() -> None:
    with pytest.raises(MissingMappingError):
        Mapper().map(Source(1, 2, 3), Target)


def test_batch_failure_aborts_whole_batch() -> None:
    with pytest.raises(MissingMappingError):
        Mapper().map([{"a": 1}, Source(1)], Target)


def test_new_instance_is_always_fresh() -> None:
    engine = Mapper()
    first = engine.map({"a": 1}, Target)
    second = engine.map({"a": 1}, Target)
    assert first == second
    assert first is not second


def test_existing_destination_is_mutated_and_returned() -> None:
    engine = Mapper()
    engine.create_map(Source, Target).build()
    existing = Target()
    result = engine.map(Source(1, 2, 3), existing)
    assert result is existing
    assert (existing.a, existing.b, existing.c) == (1, 2, 3)


def test_existing_destination_with_explicit_type_keeps_its_own_type() -> None:
    engine = Mapper()
    engine.create_map(Source, Target).build()
    existing: dict[str, Any] = {"a": "old"}
    result = engine.map(Source(1, 2, 3), existing, Target)
    assert result is existing
    assert existing == {"a": 1, "b": 2, "c": 3}


def test_anonymous_destination_without_type_fails() -> None:
    with pytest.raises(UnresolvableDestinationTypeError):
        Mapper().map({"a": 1}, {})
    with pytest.raises(UnresolvableDestinationTypeError):
        Mapper().map({"a": 1}, SimpleNamespace())


def test_explicit_destination_variants() -> None:
    engine = Mapper()
    fresh = engine.map({"a": 1}, NewInstance(Target))
    assert isinstance(fresh, Target) and fresh.a == 1

    existing = Target()
    assert engine.map({"b": 2}, ExistingInstance(existing)) is existing
    assert existing.b == 2

    namespace = SimpleNamespace()
    engine.map({"c": 3}, ExistingInstanceWithType(namespace, Target))
    assert namespace.c == 3


def test_ignored_field_keeps_existing_value() -> None:
    engine = Mapper()
    engine.create_map(Source, Target).for_field("a").ignore().build()
    existing = Target(a="mine")
    engine.map(Source(a="theirs", b=2), existing)
    assert existing.a == "mine"
    assert existing.b == 2


def test_ignored_field_holds_default_on_fresh_instance() -> None:
    engine = Mapper()
    engine.create_map(Source, Target).for_field("a").ignore().build()
    assert engine.map(Source(a="theirs"), Target).a == "default-a"


def test_factory_called_once_with_destination_as_passed_in() -> None:
    calls: list[tuple[Any, Any, Any]] = []

    def record_call(src: Source, dst: Target) -> str:
        calls.append((src, dst, dst.a))
        return "computed"

    engine = Mapper()
    engine.create_map(Source, Target).for_field("b").map_from(record_call).build()
    existing = Target(a="before")
    source = Source(a="after", b="ignored")
    engine.map(source, existing)

    assert len(calls) == 1
    called_source, called_destination, seen_a = calls[0]
    assert called_source is source
    assert called_destination is existing
    assert seen_a == "before"
    assert existing.b == "computed"
    assert existing.a == "after"


def test_factory_exception_propagates() -> None:
    def explode(src: Any, dst: Any) -> Any:
        raise RuntimeError("boom")

    engine = Mapper()
    engine.create_map(Source, Target).for_field("a").map_from(explode).build()
    with pytest.raises(RuntimeError, match="boom"):
        engine.map(Source(), Target)


def test_for_all_ignore_with_exact_override() -> None:
    engine = Mapper()
    engine.create_map(Target, Target).for_all().ignore().for_field("a").map_from("a").build()
    source = Target(a=1, b=2, c=3)
    existing = Target(a=10, b=20, c=30)
    engine.map(source, existing)
    assert (existing.a, existing.b, existing.c) == (1, 20, 30)


def test_exact_rule_declared_before_for_all_still_wins() -> None:
    engine = Mapper()
    engine.create_map(Target, Target).for_field("a").map_from("a").for_all().ignore().build()
    existing = Target(a=10, b=20)
    engine.map(Target(a=1, b=2), existing)
    assert (existing.a, existing.b) == (1, 20)


def test_configuration_for_anonymous_source_is_honoured() -> None:
    engine = Mapper()
    engine.create_map(dict, Target).for_field("a").map_from("alpha").build()
    assert engine.map({"alpha": 1, "a": 2}, Target).a == 1


def test_missing_source_field_overwrites_existing_value_with_none() -> None:
    existing = Partial(a="mine", extra="kept")
    result = Mapper().map({"a": 1}, existing)
    assert result is existing
    assert existing.a == 1
    assert existing.extra is None


def test_missing_source_field_replaces_constructor_default_with_none() -> None:
    result = Mapper().map({"a": 1}, Partial)
    assert (result.a, result.extra) == (1, None)


def test_missing_source_fields_skip_is_opt_in() -> None:
    engine = Mapper(settings=MapperSettings(missing_source_fields="skip"))
    existing = Partial(a="mine", extra="kept")
    engine.map({"a": 1}, existing)
    assert existing.a == 1
    assert existing.extra == "kept"


def test_configuration_not_visible_before_build() -> None:
    engine = Mapper()
    builder = engine.create_map(Source, Target).for_field("a").constant("x")
    with pytest.raises(MissingMappingError):
        engine.map(Source(), Target)
    builder.build()
    assert engine.map(Source(), Target).a == "x"


def test_unbuilt_configuration_reports_missing_build() -> None:
    engine = Mapper()
    engine.create_map(Source, Target).for_field("a").map_from("b")
    with pytest.raises(UnbuiltMappingError, match=r"Source -> Target was created .* but never built"):
        engine.map(Source(1, 2, 3), Target)


def test_unbuilt_configuration_for_anonymous_source_is_not_skipped() -> None:
    engine = Mapper()
    engine.create_map(dict, Target).for_field("a").map_from("alpha")
    with pytest.raises(UnbuiltMappingError):
        engine.map({"alpha": 1}, Target)


def test_none_destination_is_unresolvable() -> None:
    with pytest.raises(UnresolvableDestinationTypeError, match="Destination is None"):
        Mapper().map({"a": 1}, None)
