from datetime import date

from starlette.datastructures import FormData

from schemas import (
    AuthorForm,
    BookForm,
    BookInstanceForm,
    GenreForm,
    as_list,
    form_payload,
    sanitize,
    validate_form,
)


def fields(result):
    return [error.field for error in result.errors]


def test_as_list_coerces_scalars_and_missing_values():
    assert as_list(None) == []
    assert as_list("3") == ["3"]
    assert as_list(["1", "2"]) == ["1", "2"]


def test_sanitize_trims_and_escapes():
    assert sanitize("  <b>Tom & Jerry</b> ") == "&lt;b&gt;Tom &amp; Jerry&lt;/b&gt;"
    assert sanitize([" a ", "<"]) == ["a", "&lt;"]
    assert sanitize(None) is None


def test_form_payload_turns_repeated_keys_into_lists():
    form = FormData([("title", "Dune"), ("genre", "1"), ("genre", "2")])
    assert form_payload(form) == {"title": "Dune", "genre": ["1", "2"]}


def test_form_payload_keeps_single_values_scalar():
    form = FormData([("genre", "4")])
    assert form_payload(form) == {"genre": "4"}


def test_book_form_reports_each_missing_field():
    result = validate_form(BookForm, {"title": "  ", "genre": []})
    assert not result.ok
    assert result.data is None
    assert fields(result) == ["title", "author", "summary", "isbn"]
    assert [e.message for e in result.errors] == [
        "Title must not be empty.",
        "Author must not be empty.",
        "Summary must not be empty.",
        "ISBN must not be empty.",
    ]


def test_book_form_accepts_scalar_genre():
    result = validate_form(BookForm, {
        "title": "Dune", "author": "1", "summary": "Spice", "isbn": "123", "genre": "7",
    })
    assert result.ok
    assert result.data.genre == [7]
    assert result.data.author == 1


def test_book_form_keeps_sanitized_values_on_failure():
    result = validate_form(BookForm, {"title": " <i>Dune</i> ", "genre": ["2"]})
    assert result.values["title"] == "&lt;i&gt;Dune&lt;/i&gt;"
    assert result.values["genre"] == ["2"]


def test_book_form_rejects_non_numeric_author():
    result = validate_form(BookForm, {"title": "t", "author": "abc", "summary": "s", "isbn": "i"})
    assert fields(result) == ["author"]


def test_genre_form_requires_name():
    assert fields(validate_form(GenreForm, {"name": "   "})) == ["name"]
    assert validate_form(GenreForm, {"name": " Poetry "}).data.name == "Poetry"


def test_author_form_rules():
    result = validate_form(AuthorForm, {"first_name": " ", "family_name": ""})
    assert [e.message for e in result.errors] == [
        "First name must be specified.",
        "Family name must be specified.",
    ]

    result = validate_form(AuthorForm, {
        "first_name": "Isaac", "family_name": "Asimov",
        "date_of_birth": "1920-01-02", "date_of_death": "",
    })
    assert result.ok
    assert result.data.date_of_birth == date(1920, 1, 2)
    assert result.data.date_of_death is None


def test_author_form_rejects_bad_dates():
    result = validate_form(AuthorForm, {
        "first_name": "Isaac", "family_name": "Asimov", "date_of_birth": "02/01/1920",
    })
    assert [e.message for e in result.errors] == ["Invalid date of birth"]


def test_book_instance_due_back_must_be_iso_when_present():
    base = {"book": "1", "imprint": "Gollancz"}

    bad = validate_form(BookInstanceForm, {**base, "due_back": "next tuesday"})
    assert fields(bad) == ["due_back"]
    assert bad.errors[0].message == "Invalid date"

    empty = validate_form(BookInstanceForm, {**base, "due_back": ""})
    assert empty.ok
    assert empty.data.due_back is None

    iso = validate_form(BookInstanceForm, {**base, "due_back": "2024-03-01"})
    assert iso.data.due_back == date(2024, 3, 1)


def test_book_instance_status_defaults_and_is_checked():
    base = {"book": "1", "imprint": "Gollancz"}
    assert validate_form(BookInstanceForm, base).data.status == "Maintenance"
    assert validate_form(BookInstanceForm, {**base, "status": "Loaned"}).data.status == "Loaned"
    assert fields(validate_form(BookInstanceForm, {**base, "status": "Lost"})) == ["status"]


def test_book_instance_requires_book_and_imprint():
    result = validate_form(BookInstanceForm, {})
    assert [e.message for e in result.errors] == ["Book must be specified", "Imprint must be specified"]


def test_author_names_may_hold_spaces_and_hyphens():
    result = validate_form(AuthorForm, {"first_name": "Mary-Jane", "family_name": "Le Guin"})
    assert result.ok
    assert (result.data.first_name, result.data.family_name) == ("Mary-Jane", "Le Guin")


def test_author_name_length_is_limited():
    result = validate_form(AuthorForm, {"first_name": "a" * 101, "family_name": "Asimov"})
    assert [e.message for e in result.errors] == ["First name must be at most 100 characters"]


def test_reference_ids_must_fit_the_store():
    base = {"title": "t", "summary": "s", "isbn": "i"}

    too_big = validate_form(BookForm, {**base, "author": "99999999999999999999"})
    assert [e.message for e in too_big.errors] == ["Author must not be empty."]

    assert fields(validate_form(BookForm, {**base, "author": "0"})) == ["author"]
    assert fields(validate_form(BookForm, {**base, "author": "1", "genre": ["99999999999999999999"]})) == ["genre"]
    assert fields(validate_form(BookInstanceForm, {"book": "99999999999999999999", "imprint": "x"})) == ["book"]
    assert validate_form(BookForm, {**base, "author": str(2**63 - 1)}).data.author == 2**63 - 1
