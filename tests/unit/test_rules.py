from __future__ import annotations

from types import SimpleNamespace

import pytest

from lib_object_mapper.domain.rules import Constant, FactoryRule, SourceField, make_factory, read_source_field


class Account:
    def __init__(self) -> None:
        self.owner = "ada"

    def close(self) -> None:  # pragma: no cover - never called
        pass

    @property
    def label(self) -> str:
        return f"account:{self.owner}"


def test_read_source_field_from_mapping_and_object() -> None:
    assert read_source_field({"owner": "ada"}, "owner") == "ada"
    assert read_source_field(SimpleNamespace(owner="ada"), "owner") == "ada"
    assert read_source_field(Account(), "label") == "account:ada"


def test_read_source_field_missing_yields_default() -> None:
    assert read_source_field({}, "owner") is None
    assert read_source_field(Account(), "missing", default="x") == "x"


def test_bound_methods_are_not_fields() -> None:
    assert read_source_field(Account(), "close") is None


def test_source_field_reads_source_only() -> None:
    factory = SourceField("owner")
    assert factory({"owner": "ada"}, {"owner": "destination"}) == "ada"


def test_constant_ignores_arguments() -> None:
    assert Constant(5)(object(), object()) == 5


def test_factory_rule_evaluates_with_source_and_destination() -> None:
    rule = FactoryRule(lambda src, dst: (src, dst))
    assert rule.evaluate("s", "d") == ("s", "d")


def test_make_factory_accepts_name_or_callable() -> None:
    assert make_factory("owner") == SourceField("owner")

    def compute(src: object, dst: object) -> int:
        return 1

    assert make_factory(compute) is compute


@pytest.mark.parametrize("invalid", [None, 3, b"owner"])
def test_make_factory_rejects_other_types(invalid: object) -> None:
    with pytest.raises(TypeError):
        make_factory(invalid)  # type: ignore[arg-type]


def test_make_factory_rejects_empty_name() -> None:
    with pytest.raises(ValueError):
        make_factory("")
