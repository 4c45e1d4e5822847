"""View models for the dashboard and the per-type list pages."""

from typing import List

from pydantic import BaseModel

from schemas import INSTITUTION_METADATA, InstitutionType
from stats import DashboardStats, compute_stats


class StatCard(BaseModel):
    label: str
    value: str
    color: str
    sub: str


class DashboardView(BaseModel):
    title: str = "Statistik Sektoral"
    cards: List[StatCard]
    stats: DashboardStats


class InstitutionCard(BaseModel):
    id: str
    name: str
    tagline: str
    license_number: str
    address: str
    total_students: int
    total_teachers: int
    color: str


class ListView(BaseModel):
    type: InstitutionType
    title: str
    label: str
    subtitle: str
    items: List[InstitutionCard]


_ID_SEPARATORS = str.maketrans(",.", ".,")


def _grouped(value) -> str:
    # 1250 -> "1.250", 1250.5 -> "1.250,5" (id-ID separators)
    return f"{value:,}".translate(_ID_SEPARATORS)


def _millions(value: float) -> str:
    return f"{value:g}"


def dashboard_view(records) -> DashboardView:
    stats = compute_stats(records)
    cards = [
        StatCard(label="Total Lembaga", value=str(stats.total), color="emerald", sub="Kemenag Gowa"),
        StatCard(label="Total Santri", value=_grouped(stats.students), color="sky", sub="Terverifikasi"),
        StatCard(label="Total Pengajar", value=_grouped(stats.teachers), color="indigo", sub="BPJS & Non-BPJS"),
        StatCard(label="Dana BOS (Jt)", value=f"Rp {_millions(stats.latest_bos)}", color="amber", sub="Tahun Berjalan"),
    ]
    return DashboardView(cards=cards, stats=stats)


def list_view(institution_type: InstitutionType, records, region_name: str = "Kabupaten Gowa") -> ListView:
    """Cards for the records of one type; records of other types are skipped."""
    institution_type = InstitutionType(institution_type)
    meta = INSTITUTION_METADATA[institution_type]
    items = [
        InstitutionCard(
            id=r.id,
            name=r.basic.name,
            tagline=r.basic.tagline,
            license_number=r.legality.license_number or "-",
            address=r.basic.address,
            total_students=r.stats.total_students,
            total_teachers=r.stats.total_teachers,
            color=meta["color"],
        )
        for r in records
        if r.type == institution_type.value
    ]
    return ListView(
        type=institution_type,
        title=f"Data {meta['label']}",
        label=meta["label"],
        subtitle=region_name,
        items=items,
    )
