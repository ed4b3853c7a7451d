"""
Form payloads for the catalog and the sanitize-then-validate step that
turns raw submissions into them.

Raw form values are trimmed and HTML-escaped first. The sanitized mapping is
then validated against one of the payload models below; failures come back
as a list of (field, message) pairs instead of an exception so the handler
can re-render the form with the user's input.
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Annotated, Any, Callable, Dict, List, Mapping, Optional, Type

from markupsafe import escape
from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, ValidationError
from pydantic_core import PydanticCustomError

from models import BOOK_INSTANCE_STATUSES, MAX_ID


@dataclass
class FieldError:
    field: str
    message: str


@dataclass
class FormResult:
    values: Dict[str, Any]
    errors: List[FieldError] = field(default_factory=list)
    data: Optional[BaseModel] = None

    @property
    def ok(self) -> bool:
        return not self.errors


# ─────────────────────── SANITIZERS ───────────────────────

def as_list(value) -> list:
    """Coerce an absent or single form value into a list."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def sanitize(value):
    if isinstance(value, (list, tuple)):
        return [sanitize(v) for v in value]
    if value is None:
        return None
    return str(escape(str(value).strip()))


def form_payload(form_data) -> Dict[str, Any]:
    """Flatten multi-valued form data: repeated keys become lists."""
    payload = {}
    for key in form_data.keys():
        values = form_data.getlist(key)
        payload[key] = values[0] if len(values) == 1 else list(values)
    return payload


# ─────────────────────── FIELD RULES ───────────────────────

def required(message: str) -> Callable[[Any], Any]:
    def check(value):
        if value is None or (isinstance(value, str) and not value.strip()):
            raise PydanticCustomError("required", message)
        return value
    return check


def max_length(limit: int, message: str) -> Callable[[str], str]:
    def check(value: str) -> str:
        if len(value) > limit:
            raise PydanticCustomError("max_length", message)
        return value
    return check


def iso_date(message: str) -> Callable[[Any], Optional[date]]:
    """Empty means absent; anything else must parse as ISO-8601."""
    def check(value):
        if value is None or value == "":
            return None
        if isinstance(value, date):
            return value
        try:
            return datetime.fromisoformat(str(value)).date()
        except ValueError:
            raise PydanticCustomError("date_format", message)
    return check


def identifier(message: str) -> Callable[[Any], Any]:
    """A positive record id that fits the store's integer column."""
    def check(value):
        if isinstance(value, str):
            if not (value.isascii() and value.isdigit()):
                raise PydanticCustomError("identifier", message)
            value = int(value)
        if isinstance(value, int) and not 1 <= value <= MAX_ID:
            raise PydanticCustomError("identifier", message)
        return value
    return check


def one_of(choices, message: str) -> Callable[[str], str]:
    def check(value: str) -> str:
        if value not in choices:
            raise PydanticCustomError("choice", message)
        return value
    return check


def _default(value: str) -> Callable[[Any], Any]:
    def fill(current):
        return value if current in (None, "") else current
    return fill


# ─────────────────────── PAYLOADS ───────────────────────

class FormModel(BaseModel):
    # defaults go through the field rules too, so an omitted field fails like a blank one
    model_config = ConfigDict(validate_default=True)


class GenreForm(FormModel):
    name: Annotated[str, BeforeValidator(required("Genre name required")),
                    AfterValidator(max_length(100, "Genre name must be at most 100 characters"))] = ""


class AuthorForm(FormModel):
    first_name: Annotated[str, BeforeValidator(required("First name must be specified.")),
                          AfterValidator(max_length(100, "First name must be at most 100 characters"))] = ""
    family_name: Annotated[str, BeforeValidator(required("Family name must be specified.")),
                           AfterValidator(max_length(100, "Family name must be at most 100 characters"))] = ""
    date_of_birth: Annotated[Optional[date], BeforeValidator(iso_date("Invalid date of birth"))] = None
    date_of_death: Annotated[Optional[date], BeforeValidator(iso_date("Invalid date of death"))] = None


class BookForm(FormModel):
    title: Annotated[str, BeforeValidator(required("Title must not be empty."))] = ""
    author: Annotated[Optional[int], BeforeValidator(identifier("Author must not be empty.")),
                      BeforeValidator(required("Author must not be empty."))] = None
    summary: Annotated[str, BeforeValidator(required("Summary must not be empty."))] = ""
    isbn: Annotated[str, BeforeValidator(required("ISBN must not be empty."))] = ""
    genre: Annotated[List[Annotated[int, BeforeValidator(identifier("Unknown genre"))]],
                     BeforeValidator(as_list)] = []


class BookInstanceForm(FormModel):
    book: Annotated[Optional[int], BeforeValidator(identifier("Book must be specified")),
                    BeforeValidator(required("Book must be specified"))] = None
    imprint: Annotated[str, BeforeValidator(required("Imprint must be specified"))] = ""
    status: Annotated[str, BeforeValidator(_default("Maintenance")),
                      AfterValidator(one_of(BOOK_INSTANCE_STATUSES, "Invalid status"))] = "Maintenance"
    due_back: Annotated[Optional[date], BeforeValidator(iso_date("Invalid date"))] = None


# ─────────────────────── ENTRY POINT ───────────────────────

def validate_form(schema: Type[BaseModel], raw: Mapping[str, Any]) -> FormResult:
    """Sanitize ``raw`` and validate it against ``schema``.

    Only the fields declared on the schema are kept. Fields left out of the
    submission fall back to their defaults, which are validated too.
    """
    values = {name: sanitize(raw.get(name)) for name in schema.model_fields}
    submitted = {name: value for name, value in values.items() if value is not None}
    try:
        data = schema.model_validate(submitted)
    except ValidationError as exc:
        errors = [FieldError(str(err["loc"][0]) if err["loc"] else "", err["msg"])
                  for err in exc.errors()]
        return FormResult(values=values, errors=errors)
    return FormResult(values=values, data=data)
