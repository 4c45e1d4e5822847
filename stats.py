"""
Dashboard statistics derived from the current record list.

Everything here is a pure function of the list it is given: nothing is cached
and nothing is mutated, so callers recompute after every change. Group order
follows InstitutionType declaration order and year order follows YEARS,
whatever order the records arrive in. Absent values count as 0.
"""

from typing import Any, Iterable, List, Union

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from schemas import INSTITUTION_METADATA, YEARS, InstitutionType

MILLION = 1_000_000

AID_CATEGORIES = ("bos", "incentive", "other", "pip", "inkubasi", "bop")


class TypeCount(BaseModel):
    type: InstitutionType
    name: str = Field(..., description="Display label of the type")
    color: str
    count: int = 0


class GrowthPoint(BaseModel):
    year: str
    bos: float = Field(0, description="Summed BOS for the year, in millions")


class AidPoint(BaseModel):
    year: str
    amount: float = Field(0, description="Summed aid for the year, in millions")


class DashboardStats(BaseModel):
    total: int
    # Whole counts stay int; fractional raw values are kept as entered
    students: Union[int, float]
    teachers: Union[int, float]
    by_type: List[TypeCount]
    growth_data: List[GrowthPoint]
    latest_bos: float = Field(0, description="BOS of the last year in the window, in millions")


def _read(obj: Any, *keys: str) -> Any:
    """Walk attributes or mapping keys (snake_case or camelCase); None when absent."""
    current = obj
    for key in keys:
        if current is None:
            return None
        if isinstance(current, dict):
            current = current.get(key, current.get(to_camel(key)))
        else:
            current = getattr(current, key, None)
    return current


def _number(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return value


def _type_of(record: Any):
    raw = _read(record, "type")
    try:
        return InstitutionType(raw)
    except ValueError:
        return None


def _year_sum(records: List[Any], category: str, year: str) -> float:
    total = 0
    for record in records:
        amounts = _read(record, "financial_aid", category)
        if isinstance(amounts, dict):
            total += _number(amounts.get(year))
    return total


def aid_trend(records: Iterable[Any], category: str) -> List[AidPoint]:
    """Per-year sum of one aid category over the fixed window, in millions."""
    if category not in AID_CATEGORIES:
        raise ValueError(f"Unknown aid category '{category}'")
    records = list(records)
    return [
        AidPoint(year=year, amount=_year_sum(records, category, year) / MILLION)
        for year in YEARS
    ]


def compute_stats(records: Iterable[Any]) -> DashboardStats:
    records = list(records)

    students = sum(_number(_read(r, "stats", "total_students")) for r in records)
    teachers = sum(_number(_read(r, "stats", "total_teachers")) for r in records)

    by_type = []
    for institution_type in InstitutionType:
        meta = INSTITUTION_METADATA[institution_type]
        by_type.append(TypeCount(
            type=institution_type,
            name=meta["label"],
            color=meta["color"],
            count=sum(1 for r in records if _type_of(r) is institution_type),
        ))

    growth_data = [
        GrowthPoint(year=year, bos=_year_sum(records, "bos", year) / MILLION)
        for year in YEARS
    ]

    return DashboardStats(
        total=len(records),
        students=students,
        teachers=teachers,
        by_type=by_type,
        growth_data=growth_data,
        latest_bos=growth_data[-1].bos if growth_data else 0,
    )
