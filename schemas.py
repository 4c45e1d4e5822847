"""
Record Schemas for the SI-Pedipontren data service

An institution record is a tagged union keyed by ``type``:
- PONPES -> PonpesInstitution (three education stages, building floors)
- TPQ / MDT / RTQ / PAUDQU -> NonPonpesInstitution (flat education counters)

Attributes are snake_case; the JSON form keeps the camelCase names used by the
dashboard front-end (``totalStudents``, ``financialAid`` ...). Both are accepted
on input. Every block forbids unknown fields so a record can only carry the
fields of its own variant.
"""

from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel


class InstitutionType(str, Enum):
    PONPES = "PONPES"
    TPQ = "TPQ"
    MDT = "MDT"
    RTQ = "RTQ"
    PAUDQU = "PAUDQU"


NON_PONPES_TYPES = (
    InstitutionType.TPQ,
    InstitutionType.MDT,
    InstitutionType.RTQ,
    InstitutionType.PAUDQU,
)

# Fixed reporting window, oldest first
YEARS = ("2021", "2022", "2023", "2024", "2025")

INSTITUTION_METADATA = {
    InstitutionType.PONPES: {"label": "Pondok Pesantren", "color": "emerald"},
    InstitutionType.TPQ: {"label": "TPQ / TPA", "color": "sky"},
    InstitutionType.MDT: {"label": "Madrasah Diniyah (MDT)", "color": "indigo"},
    InstitutionType.RTQ: {"label": "Rumah Tahfidz (RTQ)", "color": "amber"},
    InstitutionType.PAUDQU: {"label": "PAUDQU", "color": "rose"},
}

# Facility checkboxes offered to non-PONPES records
DEFAULT_FACILITIES = ["Kantor", "Ruang Belajar", "WC", "Masjid/Mushalla", "Perpustakaan"]

# year -> amount (currency base units or head count)
YearData = Dict[str, int]


class Record(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


# Common blocks
class BasicInfo(Record):
    name: str = Field("", description="Institution name")
    tagline: str = Field("", description="Motto")
    description: str = ""
    address: str = ""
    phone: str = ""
    email: str = Field("", description="Free text, not validated")
    website: str = ""


class Legality(Record):
    leader: str = Field("", description="Name of the institution's leader")
    license_number: str = Field("", description="Operating licence / NSP")
    foundation: str = Field("", description="Foundation (yayasan) name")
    legality_details: str = Field("", description="Legal decree reference")
    social_media: str = ""
    gmaps_url: str = ""


class Stats(Record):
    year_founded: str = ""
    # Entered independently, never derived from the per-level counters
    total_students: int = 0
    total_teachers: int = 0


class FinancialAid(Record):
    bos: YearData = Field(default_factory=dict, description="BOS per year")
    incentive: YearData = Field(default_factory=dict)
    other: YearData = Field(default_factory=dict)


class PonpesFinancialAid(FinancialAid):
    pip: YearData = Field(default_factory=dict)
    inkubasi: YearData = Field(default_factory=dict)
    bop: YearData = Field(default_factory=dict)


class Extracurriculars(Record):
    sports: str = ""
    arts: str = ""
    others: str = ""


class VisionMisi(Record):
    vision: str = ""
    mision: str = ""
    program: str = ""
    yearly_program: str = ""
    calendar: str = ""


class Documentation(Record):
    google_drive_link: str = ""


class Achievements(Record):
    education: str = ""
    sports: str = ""
    arts: str = ""


class Bpjs(Record):
    teacher_health: int = 0
    teacher_work: int = 0
    staff_health: int = 0
    staff_work: int = 0


# PONPES blocks
class StudentCounts(Record):
    male: int = 0
    female: int = 0


class Personnel(Record):
    teachers: int = 0
    staff: int = 0


class EducationLevelDetail(Record):
    type: Literal["pkpps", "madrasah", "diknas", ""] = ""
    students: StudentCounts = Field(default_factory=StudentCounts)
    personnel: Personnel = Field(default_factory=Personnel)
    bpjs: Bpjs = Field(default_factory=Bpjs)
    un_participants: YearData = Field(default_factory=dict)
    un_graduates: YearData = Field(default_factory=dict)


class PonpesLevels(Record):
    ula: EducationLevelDetail = Field(default_factory=EducationLevelDetail)
    wustha: EducationLevelDetail = Field(default_factory=EducationLevelDetail)
    ulya: EducationLevelDetail = Field(default_factory=EducationLevelDetail)


class BuildingFloors(Record):
    office: int = 0
    mosque: int = 0
    dorm_male: int = 0
    dorm_female: int = 0
    classroom: int = 0
    library: int = 0
    hall: int = 0
    kitchen: int = 0


# Non-PONPES blocks
class StudentEducationLevels(Record):
    male_sd: int = 0
    female_sd: int = 0
    male_smp: int = 0
    female_smp: int = 0
    male_sma: int = 0
    female_sma: int = 0
    teachers: int = 0
    staff: int = 0


class BaseInstitution(Record):
    id: str = Field(..., description="Opaque id, unique within the record list")
    basic: BasicInfo = Field(default_factory=BasicInfo)
    legality: Legality = Field(default_factory=Legality)
    stats: Stats = Field(default_factory=Stats)
    extracurriculars: Extracurriculars = Field(default_factory=Extracurriculars)
    vision_misi: VisionMisi = Field(default_factory=VisionMisi)
    documentation: Documentation = Field(default_factory=Documentation)
    facilities: List[str] = Field(default_factory=list, description="Facility labels, duplicates allowed")
    achievements: Achievements = Field(default_factory=Achievements)


class PonpesInstitution(BaseInstitution):
    type: Literal["PONPES"] = "PONPES"
    financial_aid: PonpesFinancialAid = Field(default_factory=PonpesFinancialAid)
    levels: PonpesLevels = Field(default_factory=PonpesLevels)
    university_acceptance: YearData = Field(default_factory=dict)
    university_names: str = ""
    kitab_kuning: str = Field("", description="Classical texts taught")
    building_floors: BuildingFloors = Field(default_factory=BuildingFloors)


class NonPonpesInstitution(BaseInstitution):
    type: Literal["TPQ", "MDT", "RTQ", "PAUDQU"] = Field(..., description="Non-boarding institution type")
    financial_aid: FinancialAid = Field(default_factory=FinancialAid)
    student_education_levels: StudentEducationLevels = Field(default_factory=StudentEducationLevels)
    munaqasyah_participants: YearData = Field(default_factory=dict)
    munaqasyah_graduates: YearData = Field(default_factory=dict)
    bpjs: Bpjs = Field(default_factory=Bpjs)
    subjects: str = ""
    learning_books: str = ""
    media: str = ""


Institution = Annotated[
    Union[PonpesInstitution, NonPonpesInstitution],
    Field(discriminator="type"),
]

institution_adapter = TypeAdapter(Institution)


def parse_institution(data: Any):
    """Validate a mapping (camelCase or snake_case keys) into its variant.

    Model instances are dumped and validated again, so attributes assigned
    after construction are checked against the variant chosen by ``type``.
    """
    if isinstance(data, BaseModel):
        data = data.model_dump()
    return institution_adapter.validate_python(data)


def dump_institution(item) -> Dict[str, Any]:
    return item.model_dump(mode="json", by_alias=True)


def new_institution(institution_type: InstitutionType, institution_id: str):
    """Empty skeleton of the variant selected by ``institution_type``."""
    institution_type = InstitutionType(institution_type)
    if institution_type in NON_PONPES_TYPES:
        return NonPonpesInstitution(id=institution_id, type=institution_type.value)
    return PonpesInstitution(id=institution_id)


def type_label(institution_type) -> str:
    return INSTITUTION_METADATA[InstitutionType(institution_type)]["label"]
