"""Region inference from store website domains."""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.orm import Session

from marketplace.repositories.region_repository import RegionRepository
from marketplace.repositories.store_repository import StoreRepository
from marketplace.services.normalizers import extract_domain
from marketplace.services.text import first_present

logger = logging.getLogger(__name__)

TLD_REGIONS: dict[str, str] = {
    ".co.uk": "UK",
    ".com.uk": "UK",
    ".org.uk": "UK",
    ".net.uk": "UK",
    ".com.au": "Australia",
    ".co.in": "India",
    ".com.in": "India",
    ".net.in": "India",
    ".org.in": "India",
    ".co.za": "South Africa",
    ".com.br": "Brazil",
    ".com.mx": "Mexico",
    ".co.jp": "Japan",
    ".com.cn": "China",
    ".com.sg": "Singapore",
    ".com.my": "Malaysia",
    ".co.id": "Indonesia",
    ".com.ph": "Philippines",
    ".com.vn": "Vietnam",
    ".com.tr": "Turkey",
    ".com.ar": "Argentina",
    ".com.ng": "Nigeria",
    ".co.ke": "Kenya",
    ".com.sa": "Saudi Arabia",
    ".com.ae": "UAE",
    ".co.nz": "New Zealand",
    ".com.nz": "New Zealand",
    ".com.pl": "Poland",
    ".com.th": "Thailand",
    ".com.hk": "Hong Kong",
    ".com.tw": "Taiwan",
    ".co.kr": "South Korea",
    ".com.co": "Colombia",
    ".com.pe": "Peru",
    ".com.eg": "Egypt",
    ".com.gr": "Greece",
    ".com.pt": "Portugal",
    ".uk": "UK",
    ".ca": "Canada",
    ".de": "Germany",
    ".pl": "Poland",
    ".in": "India",
    ".it": "Italy",
    ".es": "Spain",
    ".au": "Australia",
    ".at": "Austria",
    ".nl": "Netherlands",
    ".th": "Thailand",
    ".sa": "Saudi Arabia",
    ".fr": "France",
    ".nz": "New Zealand",
    ".ae": "UAE",
    ".jp": "Japan",
    ".cn": "China",
    ".sg": "Singapore",
    ".my": "Malaysia",
    ".id": "Indonesia",
    ".ph": "Philippines",
    ".vn": "Vietnam",
    ".tr": "Turkey",
    ".ar": "Argentina",
    ".ng": "Nigeria",
    ".ke": "Kenya",
    ".za": "South Africa",
    ".br": "Brazil",
    ".mx": "Mexico",
    ".kr": "South Korea",
    ".hk": "Hong Kong",
    ".tw": "Taiwan",
    ".co": "Colombia",
    ".pe": "Peru",
    ".cl": "Chile",
    ".eg": "Egypt",
    ".gr": "Greece",
    ".pt": "Portugal",
    ".be": "Belgium",
    ".ch": "Switzerland",
    ".se": "Sweden",
    ".no": "Norway",
    ".dk": "Denmark",
    ".fi": "Finland",
    ".ie": "Ireland",
    ".ru": "Russia",
    ".il": "Israel",
    ".us": "USA",
    # Generic .com is treated as US
    ".com": "USA",
}

# Country names appearing in the domain itself, e.g. shop-germany.net
DOMAIN_KEYWORD_REGIONS: dict[str, str] = {
    "canada": "Canada",
    "germany": "Germany",
    "poland": "Poland",
    "india": "India",
    "italy": "Italy",
    "spain": "Spain",
    "australia": "Australia",
    "austria": "Austria",
    "netherlands": "Netherlands",
    "holland": "Netherlands",
    "thailand": "Thailand",
    "saudi": "Saudi Arabia",
    "france": "France",
    "newzealand": "New Zealand",
    "emirates": "UAE",
    "brazil": "Brazil",
    "mexico": "Mexico",
    "japan": "Japan",
    "singapore": "Singapore",
    "malaysia": "Malaysia",
    "ireland": "Ireland",
    "unitedstates": "USA",
}

_SORTED_TLDS = sorted(TLD_REGIONS, key=len, reverse=True)


def region_for_domain(domain: str | None) -> str | None:
    """Infer a region name from a bare domain, longest TLD first."""
    if not domain:
        return None
    domain = domain.lower()
    for tld in _SORTED_TLDS:
        if domain.endswith(tld):
            return TLD_REGIONS[tld]
    for keyword, region in DOMAIN_KEYWORD_REGIONS.items():
        if keyword in domain:
            return region
    return None


def region_for_store(row: Mapping[str, Any]) -> str | None:
    url = first_present(row, "Tracking Url", "Store Display Url", "website_url")
    return region_for_domain(extract_domain(url))


def network_id_for_region(name: str) -> str:
    return re.sub(r"\s+", "-", name.strip().lower())


@dataclass
class RegionBreakdown:
    region: str
    store_count: int
    store_ids: list[str] = field(default_factory=list)


@dataclass
class RegionAnalysis:
    """Result of grouping every store by its inferred region."""

    total_stores: int
    stores_with_region: int
    stores_without_region: int
    breakdown: list[RegionBreakdown]
    new_regions: list[str]


class RegionAnalysisService:
    """Group stores by inferred region and create any missing regions."""

    def __init__(self, db: Session):
        self.db = db
        self.store_repo = StoreRepository(db)
        self.region_repo = RegionRepository(db)

    def analyze(self) -> RegionAnalysis:
        groups: dict[str, list[str]] = {}
        without_region = 0
        rows = self.store_repo.get_all_rows()

        for row in rows:
            region = region_for_store(row)
            if region is None:
                without_region += 1
                continue
            groups.setdefault(region, []).append(str(row.get("id") or row.get("Store Id")))

        existing: set[str] = set()
        for region in self.region_repo.get_all():
            existing.update({region.name.lower(), region.network_id})
        new_regions: list[str] = []
        for name, store_ids in groups.items():
            if name.lower() in existing or network_id_for_region(name) in existing:
                continue
            self.region_repo.create(
                name=name,
                network_id=network_id_for_region(name),
                description=f"Auto-created region for {len(store_ids)} stores",
            )
            new_regions.append(name)
            logger.info("Created region %s for %d stores", name, len(store_ids))

        breakdown = [
            RegionBreakdown(region=name, store_count=len(ids), store_ids=ids)
            for name, ids in sorted(groups.items(), key=lambda item: (-len(item[1]), item[0]))
        ]
        return RegionAnalysis(
            total_stores=len(rows),
            stores_with_region=len(rows) - without_region,
            stores_without_region=without_region,
            breakdown=breakdown,
            new_regions=new_regions,
        )
