"""
Seed data loaded as the initial record list.

MOCK_DATA stands in for a persistence backend. A JSON file holding an array of
records (camelCase keys) can replace it via ``load_seed(path)`` or SEED_PATH.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from logging_config import get_logger
from schemas import parse_institution

logger = get_logger("seed")

MOCK_DATA: List[Dict[str, Any]] = [
    {
        "id": "1",
        "type": "PONPES",
        "basic": {
            "name": "Pondok Pesantren Sultan Hasanuddin",
            "tagline": "Mencetak Generasi Qurani yang Berintelektual",
            "description": "Pesantren modern tertua di Gowa dengan fokus pada Tahfidz dan Sains.",
            "address": "Jl. Poros Limbung No. 22, Gowa",
            "phone": "08123456789",
            "email": "sultan@ponpes.id",
            "website": "www.sultanhsn.id",
        },
        "legality": {
            "leader": "KH. Dr. Ahmad Mansur",
            "licenseNumber": "PONTREN/GW/2023/001",
            "foundation": "Yayasan Pendidikan Sultan Hasanuddin",
            "legalityDetails": "SK Menkumham No. AHU-001234.2020",
            "socialMedia": "@sultanhsn_gowa",
            "gmapsUrl": "https://maps.google.com/?q=Gowa",
        },
        "stats": {
            "yearFounded": "1995",
            "totalStudents": 1250,
            "totalTeachers": 85,
        },
        "financialAid": {
            "bos": {"2021": 50000000, "2022": 55000000, "2023": 60000000, "2024": 65000000, "2025": 70000000},
            "incentive": {"2021": 10000000, "2022": 12000000, "2023": 15000000, "2024": 18000000, "2025": 20000000},
            "other": {"2021": 5000000, "2022": 5000000, "2023": 7000000, "2024": 10000000, "2025": 12000000},
        },
        "facilities": ["Asrama AC", "Laboratorium Bahasa", "Gedung Serbaguna"],
        "achievements": {
            "education": "Juara 1 MQK Tingkat Provinsi 2023",
            "sports": "Juara 2 Pencak Silat Nasional",
            "arts": "Juara Harapan Kaligrafi",
        },
        "visionMisi": {
            "vision": "Menjadi pusat keunggulan pendidikan Islam di Sulawesi Selatan.",
            "mision": "Menyelenggarakan pendidikan formal dan informal berbasis pesantren.",
            "program": "Tahfidz 30 Juz, Penguasaan Kitab Kuning",
        },
        "documentation": {
            "googleDriveLink": "https://drive.google.com/...",
        },
    }
]


def load_seed(path: Optional[str] = None) -> list:
    """Validated seed records; variant fields the source omits get their defaults."""
    if path:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(raw, list):
            raise ValueError(f"Seed file {path} must contain a JSON array of records")
        logger.info("Loading %d seed records from %s", len(raw), path)
    else:
        raw = MOCK_DATA
    return [parse_institution(entry) for entry in raw]
