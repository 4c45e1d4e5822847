"""Tests for the institution record variants."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from schemas import (
    NON_PONPES_TYPES,
    InstitutionType,
    NonPonpesInstitution,
    PonpesInstitution,
    dump_institution,
    new_institution,
    parse_institution,
    type_label,
)


def test_ponpes_skeleton_has_zeroed_levels_and_no_flat_counters() -> None:
    item = new_institution(InstitutionType.PONPES, "abc")

    assert isinstance(item, PonpesInstitution)
    for level in (item.levels.ula, item.levels.wustha, item.levels.ulya):
        assert level.type == ""
        assert level.students.male == 0 and level.students.female == 0
        assert level.personnel.teachers == 0 and level.personnel.staff == 0
        assert level.bpjs.teacher_health == 0
        assert level.un_participants == {}
    assert item.building_floors.dorm_female == 0
    assert item.financial_aid.pip == {}

    dumped = dump_institution(item)
    assert "studentEducationLevels" not in dumped
    assert "munaqasyahParticipants" not in dumped


@pytest.mark.parametrize("institution_type", NON_PONPES_TYPES)
def test_non_ponpes_skeleton_is_the_inverse(institution_type: InstitutionType) -> None:
    item = new_institution(institution_type, "abc")

    assert isinstance(item, NonPonpesInstitution)
    assert item.type == institution_type.value
    assert item.student_education_levels.male_sd == 0
    assert item.bpjs.staff_work == 0

    dumped = dump_institution(item)
    assert "levels" not in dumped
    assert "buildingFloors" not in dumped
    assert set(dumped["financialAid"]) == {"bos", "incentive", "other"}


def test_skeleton_text_fields_default_to_empty_strings() -> None:
    item = new_institution(InstitutionType.TPQ, "abc")

    assert item.basic.name == ""
    assert item.legality.gmaps_url == ""
    assert item.stats.year_founded == ""
    assert item.stats.total_students == 0
    assert item.facilities == []
    assert item.subjects == ""


def test_dump_uses_camel_case_names() -> None:
    dumped = dump_institution(new_institution(InstitutionType.PONPES, "abc"))

    assert dumped["type"] == "PONPES"
    assert dumped["stats"] == {"yearFounded": "", "totalStudents": 0, "totalTeachers": 0}
    assert "visionMisi" in dumped
    assert "dormMale" in dumped["buildingFloors"]
    assert "unParticipants" in dumped["levels"]["ula"]


def test_parse_accepts_snake_case_and_camel_case() -> None:
    camel = parse_institution({"id": "a", "type": "MDT", "stats": {"totalStudents": 12}})
    snake = parse_institution({"id": "b", "type": "MDT", "stats": {"total_students": 12}})

    assert camel.stats.total_students == 12
    assert snake.stats.total_students == 12


def test_parse_dump_keeps_the_record() -> None:
    item = new_institution(InstitutionType.RTQ, "abc")
    item.basic.name = "Rumah Tahfidz Al-Ikhlas"

    assert parse_institution(dump_institution(item)) == item


@pytest.mark.parametrize(
    "payload",
    [
        {"id": "x", "type": "TPQ", "levels": {}},
        {"id": "x", "type": "TPQ", "financialAid": {"pip": {"2021": 1}}},
        {"id": "x", "type": "PONPES", "studentEducationLevels": {}},
        {"id": "x", "type": "PONPES", "bpjs": {}},
        {"id": "x", "type": "PONPES", "basic": {"nickname": "x"}},
    ],
)
def test_parse_rejects_fields_of_the_other_variant(payload: dict) -> None:
    with pytest.raises(ValidationError):
        parse_institution(payload)


def test_parse_rejects_unknown_type_and_missing_id() -> None:
    with pytest.raises(ValidationError):
        parse_institution({"id": "x", "type": "SMA"})
    with pytest.raises(ValidationError):
        parse_institution({"type": "TPQ"})


def test_parse_rejects_unknown_level_kind() -> None:
    with pytest.raises(ValidationError):
        parse_institution({"id": "x", "type": "PONPES", "levels": {"ula": {"type": "sekolah"}}})


def test_parse_of_a_model_returns_a_detached_copy() -> None:
    item = new_institution(InstitutionType.PONPES, "abc")
    copy = parse_institution(item)
    copy.basic.name = "changed"

    assert item.basic.name == ""


def test_type_labels() -> None:
    assert type_label(InstitutionType.PONPES) == "Pondok Pesantren"
    assert type_label("TPQ") == "TPQ / TPA"


def test_parse_of_a_model_checks_reassigned_type() -> None:
    item = new_institution(InstitutionType.RTQ, "abc")
    item.type = "PONPES"

    with pytest.raises(ValidationError):
        parse_institution(item)


def test_parse_of_a_model_checks_assigned_leaves() -> None:
    item = new_institution(InstitutionType.PONPES, "abc")
    item.levels.ula.students.male = "banyak"

    with pytest.raises(ValidationError):
        parse_institution(item)
