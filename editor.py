"""
Working-copy editor for one institution record.

The editor holds a detached deep copy (``form_data``). ``update_field`` sets a
leaf addressed by a dot path and rebuilds every container along the way, so
``form_data`` is a new object after each successful update and older versions
are never touched. Paths are checked against the record's variant; a typo or a
field from the other variant raises InvalidPath instead of adding a stray key.
"""

from typing import Any, Dict, List, Tuple

from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from errors import InstitutionNotFound, InvalidPath
from logging_config import get_logger
from schemas import InstitutionType, parse_institution, type_label

logger = get_logger("editor")

# Top-level fields the form never edits
READ_ONLY_FIELDS = ("id", "type")

_adapters: Dict[Tuple[type, str], TypeAdapter] = {}
_year_value = TypeAdapter(int)


def _adapter(model_cls: type, field_name: str) -> TypeAdapter:
    key = (model_cls, field_name)
    if key not in _adapters:
        _adapters[key] = TypeAdapter(model_cls.model_fields[field_name].annotation)
    return _adapters[key]


def _field_name(model_cls: type, segment: str):
    """Attribute name for a snake_case or camelCase path segment."""
    fields = model_cls.model_fields
    if segment in fields:
        return segment
    for name, info in fields.items():
        if segment in (info.alias, to_camel(name)):
            return name
    return None


class InstitutionEditor:
    def __init__(self, item, is_new: bool = False):
        self.form_data = parse_institution(item)
        self.is_new = is_new
        self.closed = False

    @classmethod
    def for_new(cls, repository, institution_type: InstitutionType) -> "InstitutionEditor":
        return cls(repository.create(institution_type), is_new=True)

    @classmethod
    def for_existing(cls, repository, institution_id: str) -> "InstitutionEditor":
        item = repository.get(institution_id)
        if item is None:
            raise InstitutionNotFound(institution_id)
        return cls(item)

    @property
    def title(self) -> str:
        return "Tambah Lembaga Baru" if self.is_new else "Edit Data Lembaga"

    @property
    def subtitle(self) -> str:
        return f"Tipe: {type_label(self.form_data.type)}"

    @property
    def is_ponpes(self) -> bool:
        return self.form_data.type == InstitutionType.PONPES.value

    def update_field(self, path: str, value: Any):
        self._ensure_open()
        segments = path.split(".")
        if not all(segments):
            raise InvalidPath(path, self.form_data.type, "empty path segment")
        if _field_name(type(self.form_data), segments[0]) in READ_ONLY_FIELDS:
            raise InvalidPath(path, self.form_data.type, "field is read-only")
        self.form_data = self._set(self.form_data, segments, value, path)
        return self.form_data

    def toggle_facility(self, label: str, checked: bool):
        facilities: List[str] = list(self.form_data.facilities)
        if checked:
            if label not in facilities:
                facilities.append(label)
        else:
            facilities = [f for f in facilities if f != label]
        return self.update_field("facilities", facilities)

    def commit(self, repository):
        """Save the working copy and close the editor."""
        self._ensure_open()
        repository.save(self.form_data)
        self.closed = True
        return self.form_data

    def cancel(self) -> None:
        self.closed = True

    def _ensure_open(self) -> None:
        if self.closed:
            raise RuntimeError("Editor is closed")

    def _set(self, node: Any, segments: List[str], value: Any, path: str):
        segment, rest = segments[0], segments[1:]
        institution_type = self.form_data.type

        if isinstance(node, BaseModel):
            model_cls = type(node)
            name = _field_name(model_cls, segment)
            if name is None:
                logger.warning("Rejected edit of unknown field %s on %s record", path, institution_type)
                raise InvalidPath(path, institution_type)
            if rest:
                child = self._set(getattr(node, name), rest, value, path)
            else:
                try:
                    child = _adapter(model_cls, name).validate_python(value)
                except ValidationError as exc:
                    raise InvalidPath(path, institution_type, f"invalid value: {exc.errors()[0]['msg']}")
            return node.model_copy(update={name: child})

        if isinstance(node, dict) and not rest:
            # year maps accept any key
            try:
                amount = _year_value.validate_python(value)
            except ValidationError as exc:
                raise InvalidPath(path, institution_type, f"invalid value: {exc.errors()[0]['msg']}")
            updated = dict(node)
            updated[segment] = amount
            return updated

        raise InvalidPath(path, institution_type, f"'{segment}' is not inside a field group")
