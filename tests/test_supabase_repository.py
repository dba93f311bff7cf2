from unittest.mock import MagicMock
import pytest
from postgrest.exceptions import APIError

from planvision.services.repository import RecordNotFoundError
from planvision.services.supabase_client import SupabaseRepository


def _result(data):
    result = MagicMock()
    result.data = data
    return result


@pytest.fixture
def supabase():
    return MagicMock()


def test_create_returns_inserted_row(supabase):
    supabase.table.return_value.insert.return_value.execute.return_value = _result([{"id": "1", "name": "Loft"}])

    row = SupabaseRepository(supabase, "projects").create({"name": "Loft"})

    assert row == {"id": "1", "name": "Loft"}
    supabase.table.assert_called_with("projects")
    supabase.table.return_value.insert.assert_called_once_with({"name": "Loft"})


def test_find_many_applies_filters_and_order(supabase):
    query = supabase.table.return_value.select.return_value
    query.eq.return_value = query
    query.order.return_value.execute.return_value = _result([{"id": "1"}])

    rows = SupabaseRepository(supabase, "projects").find_many(
        where={"user_id": "u1"},
        order_by="created_at",
        descending=True,
    )

    assert rows == [{"id": "1"}]
    query.eq.assert_called_once_with("user_id", "u1")
    query.order.assert_called_once_with("created_at", desc=True)


def test_find_first_returns_none_when_empty(supabase):
    query = supabase.table.return_value.select.return_value
    query.eq.return_value = query
    query.limit.return_value.execute.return_value = _result([])

    assert SupabaseRepository(supabase, "users").find_first({"email": "x@example.com"}) is None
    query.limit.assert_called_once_with(1)


def test_update_with_no_rows_raises_not_found(supabase):
    supabase.table.return_value.update.return_value.eq.return_value.execute.return_value = _result([])

    with pytest.raises(RecordNotFoundError):
        SupabaseRepository(supabase, "styles").update("s1", {"name": "x"})


def test_delete_maps_pgrst116(supabase):
    error = APIError({"code": "PGRST116", "message": "JSON object requested, multiple (or no) rows returned"})
    supabase.table.return_value.delete.return_value.eq.return_value.execute.side_effect = error

    with pytest.raises(RecordNotFoundError) as exc:
        SupabaseRepository(supabase, "styles").delete("s1")
    assert exc.value.record_id == "s1"


def test_other_api_errors_propagate(supabase):
    error = APIError({"code": "23503", "message": "foreign key violation"})
    supabase.table.return_value.delete.return_value.eq.return_value.execute.side_effect = error

    with pytest.raises(APIError):
        SupabaseRepository(supabase, "image_types").delete("t1")
