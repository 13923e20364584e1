"""Project data model: the immutable snapshot every calculation reads from."""

from dataclasses import dataclass, field, fields, asdict
from enum import Enum
from typing import Any, Dict, Tuple


class TenantCategory(str, Enum):
    """Use category of a leased space."""

    RETAIL = "Retail"
    OFFICE = "Office"
    WELLNESS = "Wellness"
    DINING = "Dining"
    ANCHOR = "Anchor"


@dataclass(frozen=True)
class Tenant:
    """Single entry in the tenant roster."""

    id: str
    name: str
    category: TenantCategory
    sf: float  # Leased area
    rent_psf: float  # Annual rent per SF
    operating_hours: float  # Hours open per day
    night_active: bool = False  # Operates past conventional daytime hours

    @property
    def annual_rent(self) -> float:
        """Annual base rent (SF x rent/SF)."""
        return self.sf * self.rent_psf

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["category"] = self.category.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tenant":
        """Build a tenant from a snake_case or camelCase mapping.

        Raises:
            ValueError: If the category is not one of TenantCategory.
        """
        values = _normalize_keys(data, _TENANT_KEY_ALIASES)
        return cls(
            id=str(values.get("id", "")),
            name=str(values.get("name", "")),
            category=TenantCategory(values.get("category", TenantCategory.RETAIL.value)),
            sf=float(values.get("sf", 0.0)),
            rent_psf=float(values.get("rent_psf", 0.0)),
            operating_hours=float(values.get("operating_hours", 0.0)),
            night_active=_parse_flag(values.get("night_active", False)),
        )


def _default_tenants() -> Tuple[Tenant, ...]:
    return (
        Tenant("1", "Anchor Grocer", TenantCategory.RETAIL, sf=12000, rent_psf=28, operating_hours=14),
        Tenant("2", "The Daily Brew", TenantCategory.DINING, sf=2200, rent_psf=42, operating_hours=12),
        Tenant("3", "Main St Wellness", TenantCategory.WELLNESS, sf=3500, rent_psf=35, operating_hours=10),
        Tenant("4", "Social Taphouse", TenantCategory.DINING, sf=4000, rent_psf=38, operating_hours=11,
               night_active=True),
    )


@dataclass(frozen=True)
class ProjectState:
    """Complete input snapshot for one underwriting run.

    Percent fields are in percent units (65 means 65%). The snapshot is
    frozen; use the functions in ``src.models.updates`` to derive a changed
    copy.
    """

    # === Land ===
    land_cost: float = 1_500_000.0
    land_closing_pct: float = 2.0  # Closing costs as % of land cost

    # === Construction ===
    total_build_sf: float = 45_000.0
    phase1_sf: float = 15_000.0
    hard_cost_psf: float = 220.0
    soft_cost_pct: float = 15.0  # As % of hard costs
    contingency_pct: float = 8.0  # As % of hard costs

    # === Capital ===
    max_ltc: float = 65.0  # Loan-to-cost
    interest_rate: float = 7.25  # Annual, percent
    amort_years: int = 25
    io_months: int = 18  # Reserved: not used by the debt service formula

    # === Site / Urbanism ===
    site_acres: float = 12.0
    ped_spine_length_ft: float = 800.0
    avg_block_length_ft: float = 250.0
    num_nodes: int = 3
    shade_pct: float = 45.0
    seating_interval_ft: float = 200.0
    tree_interval_ft: float = 50.0
    heat_mitigation_count: int = 1
    active_frontage_pct: float = 65.0
    parking_visible_pct: float = 20.0
    car_crossings_count: int = 2

    # === Tenants ===
    tenants: Tuple[Tenant, ...] = field(default_factory=_default_tenants)

    @property
    def tenant_count(self) -> int:
        return len(self.tenants)

    @property
    def total_leased_sf(self) -> float:
        """Sum of leased area across all tenants."""
        return sum(t.sf for t in self.tenants)

    def get_tenant(self, tenant_id: str) -> Tenant:
        """Look up a tenant by id.

        Raises:
            KeyError: If no tenant has this id.
        """
        for tenant in self.tenants:
            if tenant.id == tenant_id:
                return tenant
        raise KeyError(f"No tenant with id {tenant_id!r}")

    def validate(self) -> list[str]:
        """Validate inputs and return list of errors.

        The calculation models never call this; they produce a result for any
        numeric input. Callers decide whether to block on these messages.

        Returns:
            List of validation error messages. Empty if valid.
        """
        errors = []

        # Non-negative amounts
        for name in (
            "land_cost", "land_closing_pct", "hard_cost_psf", "soft_cost_pct",
            "contingency_pct", "interest_rate", "io_months", "site_acres",
            "ped_spine_length_ft", "num_nodes", "heat_mitigation_count",
            "car_crossings_count",
        ):
            value = getattr(self, name)
            if value < 0:
                errors.append(f"{name} must be >= 0, got {value}")

        # Percentages
        for name in ("max_ltc", "shade_pct", "active_frontage_pct", "parking_visible_pct"):
            value = getattr(self, name)
            if not 0 <= value <= 100:
                errors.append(f"{name} must be 0-100, got {value}")

        # Areas and distances
        if self.total_build_sf <= 0:
            errors.append(f"total_build_sf must be > 0, got {self.total_build_sf}")
        if not 0 <= self.phase1_sf <= max(self.total_build_sf, 0):
            errors.append(
                f"phase1_sf must be between 0 and total_build_sf ({self.total_build_sf:,.0f}), "
                f"got {self.phase1_sf:,.0f}"
            )
        if self.seating_interval_ft <= 0:
            errors.append(f"seating_interval_ft must be > 0, got {self.seating_interval_ft}")
        if self.tree_interval_ft <= 0:
            errors.append(f"tree_interval_ft must be > 0, got {self.tree_interval_ft}")

        if self.amort_years <= 0:
            errors.append(f"amort_years must be > 0, got {self.amort_years}")

        # Tenant roster
        seen_ids = set()
        for tenant in self.tenants:
            if tenant.id in seen_ids:
                errors.append(f"duplicate tenant id {tenant.id!r}")
            seen_ids.add(tenant.id)
            if tenant.sf <= 0:
                errors.append(f"tenant {tenant.name!r} sf must be > 0, got {tenant.sf}")
            if tenant.rent_psf < 0:
                errors.append(f"tenant {tenant.name!r} rent_psf must be >= 0, got {tenant.rent_psf}")
            if not 0 <= tenant.operating_hours <= 24:
                errors.append(
                    f"tenant {tenant.name!r} operating_hours must be 0-24, got {tenant.operating_hours}"
                )

        return errors

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-compatible dict (snake_case keys)."""
        data = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "tenants"}
        data["tenants"] = [t.to_dict() for t in self.tenants]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProjectState":
        """Build a state from a persisted mapping.

        Accepts snake_case keys as written by ``to_dict`` as well as the
        camelCase keys used by earlier saved projects (``landCost``,
        ``rentPsf``, ...). Unknown keys are ignored and missing or null keys take the
        defaults.
        """
        values = _normalize_keys(data, _STATE_KEY_ALIASES)
        known = {f.name: f for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for name, value in values.items():
            if name not in known or name == "tenants":
                continue
            kwargs[name] = int(value) if name in _INT_FIELDS else float(value)
        if "tenants" in values:
            kwargs["tenants"] = tuple(Tenant.from_dict(t) for t in values["tenants"])
        return cls(**kwargs)


_INT_FIELDS = {"amort_years", "io_months", "num_nodes", "heat_mitigation_count", "car_crossings_count"}

_STATE_KEY_ALIASES = {
    "landCost": "land_cost",
    "landClosingPct": "land_closing_pct",
    "totalBuildSf": "total_build_sf",
    "phase1Sf": "phase1_sf",
    "hardCostPsf": "hard_cost_psf",
    "softCostPct": "soft_cost_pct",
    "contingencyPct": "contingency_pct",
    "maxLtc": "max_ltc",
    "interestRate": "interest_rate",
    "amortYears": "amort_years",
    "ioMonths": "io_months",
    "siteAcres": "site_acres",
    "pedSpineLengthFt": "ped_spine_length_ft",
    "avgBlockLengthFt": "avg_block_length_ft",
    "numNodes": "num_nodes",
    "shadePct": "shade_pct",
    "seatingIntervalFt": "seating_interval_ft",
    "treeIntervalFt": "tree_interval_ft",
    "heatMitigationCount": "heat_mitigation_count",
    "activeFrontagePct": "active_frontage_pct",
    "parkingVisiblePct": "parking_visible_pct",
    "carCrossingsCount": "car_crossings_count",
}

_TENANT_KEY_ALIASES = {
    "rentPsf": "rent_psf",
    "operatingHours": "operating_hours",
    "nightActive": "night_active",
}


def _normalize_keys(data: Dict[str, Any], aliases: Dict[str, str]) -> Dict[str, Any]:
    """Map legacy keys to field names and drop nulls so they take the defaults."""
    return {aliases.get(key, key): value for key, value in data.items() if value is not None}


def _parse_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return value is True or value == 1
