"""Tests for the working-copy editor."""

from __future__ import annotations

import pytest

from editor import InstitutionEditor
from errors import InstitutionNotFound, InvalidPath
from schemas import InstitutionType


@pytest.fixture
def ponpes_editor(repo) -> InstitutionEditor:
    return InstitutionEditor.for_existing(repo, "1")


@pytest.fixture
def tpq_editor(repo) -> InstitutionEditor:
    return InstitutionEditor.for_new(repo, InstitutionType.TPQ)


def test_update_replaces_every_container_on_the_path(ponpes_editor) -> None:
    before = ponpes_editor.form_data
    before_levels = before.levels

    after = ponpes_editor.update_field("levels.ula.students.male", 120)

    assert after is ponpes_editor.form_data
    assert after is not before
    assert after.levels is not before_levels
    assert after.levels.ula.students.male == 120
    # previous version untouched
    assert before.levels.ula.students.male == 0
    # siblings off the path are carried over
    assert after.levels.wustha == before.levels.wustha


def test_camel_and_snake_segments_address_the_same_field(ponpes_editor) -> None:
    ponpes_editor.update_field("legality.licenseNumber", "A-1")
    assert ponpes_editor.form_data.legality.license_number == "A-1"

    ponpes_editor.update_field("legality.license_number", "A-2")
    assert ponpes_editor.form_data.legality.license_number == "A-2"


def test_numeric_strings_are_coerced(tpq_editor) -> None:
    tpq_editor.update_field("stats.totalStudents", "40")
    tpq_editor.update_field("studentEducationLevels.maleSd", 12)

    assert tpq_editor.form_data.stats.total_students == 40
    assert tpq_editor.form_data.student_education_levels.male_sd == 12


def test_year_maps_accept_any_key(ponpes_editor) -> None:
    ponpes_editor.update_field("financialAid.bos.2030", 1_000_000)
    ponpes_editor.update_field("financialAid.pip.2021", "250000")

    aid = ponpes_editor.form_data.financial_aid
    assert aid.bos["2030"] == 1_000_000
    assert aid.bos["2021"] == 50_000_000
    assert aid.pip == {"2021": 250_000}


@pytest.mark.parametrize(
    "path",
    [
        "basic.nmae",
        "levels.ula.students.male",
        "buildingFloors.office",
        "financialAid.pip.2021",
        "basic.name.first",
        "financialAid.bos.2021.extra",
        "basic..name",
        "",
    ],
)
def test_paths_outside_the_variant_are_rejected(tpq_editor, path: str) -> None:
    before = tpq_editor.form_data

    with pytest.raises(InvalidPath) as excinfo:
        tpq_editor.update_field(path, 1)

    assert tpq_editor.form_data is before
    assert excinfo.value.code == "INVALID_PATH"
    assert excinfo.value.details["type"] == "TPQ"


def test_ponpes_rejects_flat_counters(ponpes_editor) -> None:
    with pytest.raises(InvalidPath):
        ponpes_editor.update_field("studentEducationLevels.maleSd", 3)
    with pytest.raises(InvalidPath):
        ponpes_editor.update_field("bpjs.teacherHealth", 3)


@pytest.mark.parametrize(
    "path,value",
    [
        ("stats.totalStudents", "banyak"),
        ("financialAid.bos.2022", "lima juta"),
        ("levels.ula.type", "sekolah"),
        ("facilities", "Kantor"),
    ],
)
def test_values_that_do_not_fit_are_rejected(ponpes_editor, path: str, value) -> None:
    with pytest.raises(InvalidPath) as excinfo:
        ponpes_editor.update_field(path, value)

    assert excinfo.value.details["reason"].startswith("invalid value")


def test_level_kind_select(ponpes_editor) -> None:
    ponpes_editor.update_field("levels.wustha.type", "madrasah")

    assert ponpes_editor.form_data.levels.wustha.type == "madrasah"


@pytest.mark.parametrize("path", ["id", "type"])
def test_id_and_type_are_read_only(ponpes_editor, path: str) -> None:
    with pytest.raises(InvalidPath):
        ponpes_editor.update_field(path, "TPQ")


def test_edits_stay_detached_until_commit(repo, ponpes_editor) -> None:
    ponpes_editor.update_field("basic.name", "Ponpes Sultan Hasanuddin Gowa")
    assert repo.get("1").basic.name == "Pondok Pesantren Sultan Hasanuddin"

    saved = ponpes_editor.commit(repo)

    assert saved.basic.name == "Ponpes Sultan Hasanuddin Gowa"
    assert repo.get("1").basic.name == "Ponpes Sultan Hasanuddin Gowa"
    assert len(repo) == 1
    assert ponpes_editor.closed


def test_commit_of_new_record_appends(repo, tpq_editor) -> None:
    tpq_editor.update_field("basic.name", "TPQ Al-Falah")
    tpq_editor.commit(repo)

    assert len(repo) == 2
    assert repo.list()[-1].basic.name == "TPQ Al-Falah"


def test_cancel_discards_working_copy(repo, ponpes_editor) -> None:
    ponpes_editor.update_field("stats.totalStudents", 1)
    ponpes_editor.cancel()

    assert repo.get("1").stats.total_students == 1250
    with pytest.raises(RuntimeError):
        ponpes_editor.update_field("stats.totalStudents", 2)
    with pytest.raises(RuntimeError):
        ponpes_editor.commit(repo)


def test_toggle_facility(tpq_editor) -> None:
    tpq_editor.toggle_facility("Kantor", True)
    tpq_editor.toggle_facility("WC", True)
    tpq_editor.toggle_facility("Kantor", True)
    assert tpq_editor.form_data.facilities == ["Kantor", "WC"]

    tpq_editor.toggle_facility("Kantor", False)
    assert tpq_editor.form_data.facilities == ["WC"]


def test_titles(ponpes_editor, tpq_editor) -> None:
    assert ponpes_editor.title == "Edit Data Lembaga"
    assert ponpes_editor.subtitle == "Tipe: Pondok Pesantren"
    assert ponpes_editor.is_ponpes
    assert tpq_editor.title == "Tambah Lembaga Baru"
    assert tpq_editor.subtitle == "Tipe: TPQ / TPA"
    assert not tpq_editor.is_ponpes


def test_editing_unknown_record(repo) -> None:
    with pytest.raises(InstitutionNotFound):
        InstitutionEditor.for_existing(repo, "missing")
