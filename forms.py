"""
Form layout for the institution editor.

The layout is chosen by the record's ``type`` tag alone: PONPES records get the
three stage blocks (Ula, Wustha, Ulya), kitab kuning, the PIP/Inkubasi/BOP aid
sections and building floor counters; the other four types get the flat
education counters, one BPJS block, curriculum text fields and the facility
checkboxes. Every ``path`` is accepted by ``InstitutionEditor.update_field``.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from schemas import (
    DEFAULT_FACILITIES,
    YEARS,
    BuildingFloors,
    InstitutionType,
    type_label,
)

FieldKind = Literal["text", "textarea", "number", "select", "checkbox"]

LEVELS = ("ula", "wustha", "ulya")
LEVEL_OPTIONS = ["pkpps", "madrasah", "diknas"]


class FormField(BaseModel):
    path: str
    label: str
    kind: FieldKind = "text"
    options: Optional[List[str]] = None


class FormGroup(BaseModel):
    title: str = ""
    fields: List[FormField] = Field(default_factory=list)


class FormTab(BaseModel):
    key: Literal["dasar", "legalitas", "pendidikan", "keuangan", "fasilitas"]
    label: str
    groups: List[FormGroup] = Field(default_factory=list)


class FormLayout(BaseModel):
    type: InstitutionType
    type_label: str
    tabs: List[FormTab]


def _text(path, label):
    return FormField(path=path, label=label)


def _area(path, label):
    return FormField(path=path, label=label, kind="textarea")


def _num(path, label):
    return FormField(path=path, label=label, kind="number")


def _bpjs(prefix: str) -> List[FormField]:
    return [
        _num(f"{prefix}.teacherHealth", "BPJS Guru (Kes)"),
        _num(f"{prefix}.teacherWork", "BPJS Guru (Ket)"),
        _num(f"{prefix}.staffHealth", "BPJS Staf (Kes)"),
        _num(f"{prefix}.staffWork", "BPJS Staf (Ket)"),
    ]


def _per_year(path: str, title: str) -> FormGroup:
    return FormGroup(title=title, fields=[_num(f"{path}.{year}", year) for year in YEARS])


def _basic_tab() -> FormTab:
    return FormTab(key="dasar", label="Dasar & Profil", groups=[
        FormGroup(fields=[
            _text("basic.name", "Nama Lembaga"),
            _text("basic.tagline", "Tagline / Motto"),
            _area("basic.description", "Deskripsi Singkat"),
            _text("basic.address", "Alamat Lengkap"),
            _text("basic.phone", "Telepon"),
            _text("basic.email", "Email"),
            _text("basic.website", "Website"),
            _text("stats.yearFounded", "Tahun Berdiri"),
        ]),
        FormGroup(title="Visi & Misi", fields=[
            _area("visionMisi.vision", "Visi"),
            _area("visionMisi.mision", "Misi"),
            _text("visionMisi.program", "Program Unggulan"),
        ]),
    ])


def _legality_tab() -> FormTab:
    return FormTab(key="legalitas", label="Legalitas & Org", groups=[
        FormGroup(fields=[
            _text("legality.leader", "Nama Pimpinan"),
            _text("legality.licenseNumber", "Nomor Izin / NSP"),
            _text("legality.foundation", "Nama Yayasan"),
            _text("legality.legalityDetails", "Legalitas Yayasan (SK)"),
            _text("legality.socialMedia", "Media Sosial"),
            _text("legality.gmapsUrl", "URL Google Maps"),
        ]),
    ])


def _education_tab(ponpes: bool) -> FormTab:
    totals = FormGroup(title="Rekapitulasi", fields=[
        _num("stats.totalStudents", "Total Santri"),
        _num("stats.totalTeachers", "Total Pengajar"),
    ])
    groups = [totals]
    if ponpes:
        for level in LEVELS:
            prefix = f"levels.{level}"
            groups.append(FormGroup(title=level.upper(), fields=[
                FormField(path=f"{prefix}.type", label="Jenis", kind="select", options=LEVEL_OPTIONS),
                _num(f"{prefix}.students.male", "Santri (L)"),
                _num(f"{prefix}.students.female", "Santri (P)"),
                _num(f"{prefix}.personnel.teachers", "Guru"),
                _num(f"{prefix}.personnel.staff", "Staf"),
                *_bpjs(f"{prefix}.bpjs"),
            ]))
            groups.append(_per_year(f"{prefix}.unParticipants", f"Peserta Ujian {level.upper()}"))
            groups.append(_per_year(f"{prefix}.unGraduates", f"Lulusan {level.upper()}"))
        groups.append(_per_year("universityAcceptance", "Diterima di Perguruan Tinggi"))
        groups.append(FormGroup(title="Kurikulum & Materi", fields=[
            _text("universityNames", "Nama Perguruan Tinggi"),
            _area("kitabKuning", "Kitab Kuning yang Diajarkan"),
        ]))
    else:
        groups.append(FormGroup(title="Jenjang Pendidikan Santri", fields=[
            _num("studentEducationLevels.maleSd", "Santri (L) SD/MI"),
            _num("studentEducationLevels.femaleSd", "Santri (P) SD/MI"),
            _num("studentEducationLevels.maleSmp", "Santri (L) SMP/MTs"),
            _num("studentEducationLevels.femaleSmp", "Santri (P) SMP/MTs"),
            _num("studentEducationLevels.maleSma", "Santri (L) SMA/MA"),
            _num("studentEducationLevels.femaleSma", "Santri (P) SMA/MA"),
            _num("studentEducationLevels.teachers", "Pendidik"),
            _num("studentEducationLevels.staff", "Tenaga Kependidikan"),
        ]))
        groups.append(FormGroup(title="BPJS", fields=_bpjs("bpjs")))
        groups.append(_per_year("munaqasyahParticipants", "Peserta Munaqasyah"))
        groups.append(_per_year("munaqasyahGraduates", "Lulusan Munaqasyah"))
        groups.append(FormGroup(title="Kurikulum & Materi", fields=[
            _text("subjects", "Mata Pelajaran"),
            _text("learningBooks", "Buku Pembelajaran"),
            _text("media", "Media Pembelajaran (TV, Sound, dll)"),
        ]))
    return FormTab(key="pendidikan", label="Pendidikan & Santri", groups=groups)


def _finance_tab(ponpes: bool) -> FormTab:
    groups = [
        _per_year("financialAid.bos", "Dana BOS per Tahun"),
        _per_year("financialAid.incentive", "Insentif Guru per Tahun"),
        _per_year("financialAid.other", "Bantuan Lainnya per Tahun"),
    ]
    if ponpes:
        groups += [
            _per_year("financialAid.pip", "Bantuan PIP per Tahun"),
            _per_year("financialAid.inkubasi", "Bantuan Inkubasi per Tahun"),
            _per_year("financialAid.bop", "Bantuan BOP per Tahun"),
        ]
    return FormTab(key="keuangan", label="Keuangan & Bantuan", groups=groups)


def _facilities_tab(ponpes: bool) -> FormTab:
    if ponpes:
        buildings = FormGroup(title="Lantai Gedung / Fasilitas Bangunan", fields=[
            _num(f"buildingFloors.{to_camel(name)}", name.upper())
            for name in BuildingFloors.model_fields
        ])
    else:
        buildings = FormGroup(title="Fasilitas", fields=[
            FormField(path="facilities", label=label, kind="checkbox")
            for label in DEFAULT_FACILITIES
        ])
    return FormTab(key="fasilitas", label="Fasilitas & Dokumentasi", groups=[
        buildings,
        FormGroup(title="Prestasi & Dokumentasi", fields=[
            _text("achievements.education", "Prestasi Pendidikan"),
            _text("achievements.sports", "Prestasi Olahraga"),
            _text("achievements.arts", "Prestasi Seni & Budaya"),
            _text("documentation.googleDriveLink", "Tautan Foto Dokumentasi (G-Drive)"),
        ]),
        FormGroup(title="Kegiatan Ekstrakurikuler", fields=[
            _area("extracurriculars.sports", "Kegiatan Olahraga"),
            _area("extracurriculars.arts", "Kegiatan Seni"),
        ]),
    ])


def form_layout(institution_type: InstitutionType) -> FormLayout:
    institution_type = InstitutionType(institution_type)
    ponpes = institution_type is InstitutionType.PONPES
    return FormLayout(
        type=institution_type,
        type_label=type_label(institution_type),
        tabs=[
            _basic_tab(),
            _legality_tab(),
            _education_tab(ponpes),
            _finance_tab(ponpes),
            _facilities_tab(ponpes),
        ],
    )


def field_paths(layout: FormLayout) -> List[str]:
    """Distinct editable paths in layout order."""
    paths: List[str] = []
    for tab in layout.tabs:
        for group in tab.groups:
            for f in group.fields:
                if f.path not in paths:
                    paths.append(f.path)
    return paths
