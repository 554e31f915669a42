import pytest

from socialcli.core.errors import NotFoundError, ValidationError
from socialcli.core.models import EntityRef, EntityType
from socialcli.core.resolver import IdentifierResolver, parse_positive_int
from tests.fakes import FakeLookup


def _resolver(lookup: FakeLookup) -> IdentifierResolver:
    return IdentifierResolver({EntityType.GROUP: lookup})


def test_numeric_token_resolves_by_id_without_key_lookup() -> None:
    lookup = FakeLookup(ids={45}, keys={"bar": 45})
    ref = _resolver(lookup).resolve(EntityType.GROUP, "45")
    assert ref.resolved_id == 45
    assert ref.raw_token == "45"
    assert lookup.calls == [("id", 45)]


def test_slug_resolves_through_key_lookup() -> None:
    ref = _resolver(FakeLookup(ids={45}, keys={"bar": 45})).resolve(EntityType.GROUP, "bar")
    assert ref.is_resolved
    assert ref.resolved_id == 45


def test_numeric_token_without_id_falls_back_to_key() -> None:
    lookup = FakeLookup(ids=set(), keys={"2024": 7})
    ref = _resolver(lookup).resolve(EntityType.GROUP, "2024")
    assert ref.resolved_id == 7
    assert lookup.calls == [("id", 2024), ("key", "2024")]


def test_unknown_token_raises_not_found_naming_token() -> None:
    with pytest.raises(NotFoundError) as info:
        _resolver(FakeLookup(ids={45})).resolve(EntityType.GROUP, "nope")
    assert info.value.message == "No group found by that slug or ID: nope."
    assert info.value.token == "nope"
    assert info.value.entity_type == "group"


def test_non_positive_key_result_is_not_found() -> None:
    with pytest.raises(NotFoundError):
        _resolver(FakeLookup(keys={"zero": 0})).resolve(EntityType.GROUP, "zero")


def test_blank_token_is_validation_error() -> None:
    with pytest.raises(ValidationError):
        _resolver(FakeLookup()).resolve(EntityType.GROUP, "   ")


def test_unregistered_entity_type_is_validation_error() -> None:
    with pytest.raises(ValidationError):
        _resolver(FakeLookup()).resolve(EntityType.USER, "10")


def test_resolved_refs_compare_by_identity() -> None:
    resolver = _resolver(FakeLookup(ids={45}, keys={"bar": 45}))
    by_slug = resolver.resolve(EntityType.GROUP, "bar")
    by_id = resolver.resolve(EntityType.GROUP, "45")
    assert by_slug == by_id
    assert len({by_slug, by_id}) == 1
    assert EntityRef(entity_type=EntityType.GROUP, raw_token="a") != EntityRef(
        entity_type=EntityType.GROUP, raw_token="b"
    )


def test_resolve_ref_keeps_already_resolved_ref() -> None:
    lookup = FakeLookup()
    ref = EntityRef(entity_type=EntityType.GROUP, raw_token="x", resolved_id=3)
    assert _resolver(lookup).resolve_ref(ref) is ref
    assert lookup.calls == []


def test_resolve_many_keeps_order() -> None:
    resolver = _resolver(FakeLookup(ids={1, 2}, keys={"bar": 45}))
    refs = resolver.resolve_many(EntityType.GROUP, ["2", "bar", "1"])
    assert [r.resolved_id for r in refs] == [2, 45, 1]


def test_parse_positive_int() -> None:
    assert parse_positive_int(" 12 ") == 12
    assert parse_positive_int("0") is None
    assert parse_positive_int("-3") is None
    assert parse_positive_int("12a") is None
