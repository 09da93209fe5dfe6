import pytest

from db.partial_update import quote_identifier, sql_for_partial_update
from errors import ValidationError


def test_translates_mapped_names_and_passes_others_through():
    upd = sql_for_partial_update(
        {"firstName": "Aliya", "age": 32},
        {"firstName": "first_name"},
    )
    assert upd.assignments == ['"first_name"=%s', '"age"=%s']
    assert upd.values == ["Aliya", 32]
    assert upd.set_clause == '"first_name"=%s, "age"=%s'


def test_keeps_input_order():
    upd = sql_for_partial_update({"bio": "x", "email": "a@b.c", "is_admin": True})
    assert [a.split("=")[0] for a in upd.assignments] == ['"bio"', '"email"', '"is_admin"']
    assert upd.values == ["x", "a@b.c", True]


def test_two_names_for_one_column_raise_validation_error():
    with pytest.raises(ValidationError, match="first_name"):
        sql_for_partial_update(
            {"firstName": "A", "first_name": "B"},
            {"firstName": "first_name"},
        )


def test_empty_fields_raise_validation_error():
    with pytest.raises(ValidationError, match="No data"):
        sql_for_partial_update({})


def test_values_are_never_inlined():
    upd = sql_for_partial_update({"bio": "'; DROP TABLE users; --"})
    assert upd.assignments == ['"bio"=%s']
    assert "DROP" not in upd.set_clause


def test_quote_identifier_escapes_embedded_quotes():
    assert quote_identifier('bio" = 1, "is_admin') == '"bio"" = 1, ""is_admin"'


def test_does_not_mutate_inputs():
    fields = {"isAdmin": True}
    translation = {"isAdmin": "is_admin"}
    sql_for_partial_update(fields, translation)
    assert fields == {"isAdmin": True}
    assert translation == {"isAdmin": "is_admin"}
