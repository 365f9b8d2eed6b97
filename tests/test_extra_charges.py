import pytest

from src.salon.cache import QueryCache
from src.salon.errors import ReasonNotFoundError, RemoteQueryError
from src.salon.persistence.extra_charges import (
    create_reason,
    delete_reason,
    get_reasons_by_ids,
    list_reasons,
    update_reason,
)


def _selects(fake) -> int:
    return fake.queries.count(("extra_charge_reasons", "select"))


def test_create_and_list_reasons_in_creation_order(fake_supabase) -> None:
    first = create_reason("salon-1", " Long hair ", 10.0)
    second = create_reason("salon-1", "Extra wash", 5.0)
    create_reason("salon-2", "Other salon", 1.0)

    reasons = list_reasons("salon-1")

    assert first.name == "Long hair"
    assert [reason.id for reason in reasons] == [first.id, second.id]
    assert [reason.default_amount for reason in reasons] == [10.0, 5.0]


def test_list_reasons_is_cached_until_mutation(fake_supabase) -> None:
    cache = QueryCache(ttl_seconds=60)
    create_reason("salon-1", "Long hair", 10.0, cache=cache)

    list_reasons("salon-1", cache=cache)
    list_reasons("salon-1", cache=cache)
    assert _selects(fake_supabase) == 1

    create_reason("salon-1", "Extra wash", 5.0, cache=cache)
    reasons = list_reasons("salon-1", cache=cache)

    assert _selects(fake_supabase) == 2
    assert len(reasons) == 2


def test_update_reason_changes_fields_and_invalidates(fake_supabase) -> None:
    cache = QueryCache(ttl_seconds=60)
    reason = create_reason("salon-1", "Long hair", 10.0)
    list_reasons("salon-1", cache=cache)

    updated = update_reason("salon-1", reason.id, {"default_amount": 12.5, "name": None}, cache=cache)

    assert updated.default_amount == 12.5
    assert updated.name == "Long hair"
    assert len(cache) == 0


def test_update_reason_of_other_salon_is_not_found(fake_supabase) -> None:
    reason = create_reason("salon-1", "Long hair", 10.0)

    with pytest.raises(ReasonNotFoundError):
        update_reason("salon-2", reason.id, {"name": "Hijacked"})


def test_delete_reason(fake_supabase) -> None:
    reason = create_reason("salon-1", "Long hair", 10.0)

    delete_reason("salon-1", reason.id)

    assert list_reasons("salon-1") == []
    with pytest.raises(ReasonNotFoundError):
        delete_reason("salon-1", reason.id)


@pytest.mark.parametrize(
    ("name", "amount"),
    [("   ", 1.0), ("Long hair", -1.0)],
)
def test_create_reason_validates_before_writing(fake_supabase, name: str, amount: float) -> None:
    with pytest.raises(ValueError):
        create_reason("salon-1", name, amount)
    assert fake_supabase.queries == []


def test_update_reason_requires_changes(fake_supabase) -> None:
    with pytest.raises(ValueError):
        update_reason("salon-1", "r1", {"colour": "red"})


def test_get_reasons_by_ids_deduplicates(fake_supabase) -> None:
    reason = create_reason("salon-1", "Long hair", 10.0)

    assert [r.id for r in get_reasons_by_ids([reason.id, reason.id])] == [reason.id]
    assert get_reasons_by_ids([]) == []


def test_backend_failure_raises_remote_error(fake_supabase) -> None:
    fake_supabase.failing_tables.add("extra_charge_reasons")

    with pytest.raises(RemoteQueryError):
        list_reasons("salon-1")


def test_create_reason_without_returned_row_raises_remote_error(fake_supabase, monkeypatch) -> None:
    cache = QueryCache(ttl_seconds=60)
    cache.set(("extra_charge_reasons", "salon-1"), [])
    monkeypatch.setattr("src.salon.persistence.extra_charges.first_row", lambda response: None)

    with pytest.raises(RemoteQueryError):
        create_reason("salon-1", "Long hair", 10.0, cache=cache)
    assert len(cache) == 1
