"""Tests for the ProjectState and Tenant data model."""

import dataclasses

import pytest

from src.models.project import ProjectState, Tenant, TenantCategory


class TestDefaults:
    """The default snapshot is the reference scenario."""

    def test_default_values(self, default_state):
        assert default_state.land_cost == 1_500_000
        assert default_state.total_build_sf == 45_000
        assert default_state.phase1_sf == 15_000
        assert default_state.max_ltc == 65
        assert default_state.interest_rate == 7.25
        assert default_state.amort_years == 25
        assert default_state.io_months == 18

    def test_default_roster(self, default_state):
        names = [t.name for t in default_state.tenants]

        assert names == ["Anchor Grocer", "The Daily Brew", "Main St Wellness", "Social Taphouse"]
        assert [t.night_active for t in default_state.tenants] == [False, False, False, True]
        assert default_state.total_leased_sf == 21_700
        assert default_state.tenant_count == 4

    def test_defaults_are_independent(self):
        """Each default instance gets an equal but separate roster."""
        assert ProjectState() == ProjectState()

    def test_state_is_frozen(self, default_state):
        with pytest.raises(dataclasses.FrozenInstanceError):
            default_state.land_cost = 1


class TestTenant:
    """Tests for Tenant."""

    def test_annual_rent(self):
        tenant = Tenant("x", "Cafe", TenantCategory.DINING, sf=2_000, rent_psf=40, operating_hours=10)
        assert tenant.annual_rent == 80_000

    def test_get_tenant(self, default_state):
        assert default_state.get_tenant("2").name == "The Daily Brew"

    def test_get_unknown_tenant_raises(self, default_state):
        with pytest.raises(KeyError):
            default_state.get_tenant("missing")

    def test_from_dict_camel_case(self):
        tenant = Tenant.from_dict({
            "id": "7", "name": "Yoga", "category": "Wellness",
            "sf": 1800, "rentPsf": 33, "operatingHours": 9, "nightActive": True,
        })

        assert tenant.category is TenantCategory.WELLNESS
        assert tenant.rent_psf == 33
        assert tenant.operating_hours == 9
        assert tenant.night_active is True

    def test_from_dict_bad_category(self):
        with pytest.raises(ValueError):
            Tenant.from_dict({"id": "1", "name": "X", "category": "Casino"})


class TestValidate:
    """Tests for ProjectState.validate."""

    def test_default_is_valid(self, default_state):
        assert default_state.validate() == []

    def test_negative_cost(self, default_state):
        errors = dataclasses.replace(default_state, land_cost=-1).validate()
        assert any("land_cost" in e for e in errors)

    def test_ltc_over_100(self, default_state):
        errors = dataclasses.replace(default_state, max_ltc=120).validate()
        assert any("max_ltc" in e for e in errors)

    def test_phase1_larger_than_total(self, default_state):
        errors = dataclasses.replace(default_state, phase1_sf=50_000).validate()
        assert any("phase1_sf" in e for e in errors)

    def test_zero_build_sf(self, default_state):
        errors = dataclasses.replace(default_state, total_build_sf=0, phase1_sf=0).validate()
        assert any("total_build_sf" in e for e in errors)

    def test_duplicate_tenant_ids(self, default_state):
        dup = dataclasses.replace(default_state.tenants[0], name="Copy")
        errors = dataclasses.replace(default_state, tenants=default_state.tenants + (dup,)).validate()
        assert any("duplicate" in e for e in errors)

    def test_tenant_hours_out_of_range(self, default_state):
        bad = dataclasses.replace(default_state.tenants[0], operating_hours=30)
        errors = dataclasses.replace(default_state, tenants=(bad,)).validate()
        assert any("operating_hours" in e for e in errors)

    def test_validation_does_not_block_calculation(self, default_state):
        """Invalid inputs are reported, not clamped."""
        state = dataclasses.replace(default_state, max_ltc=120)
        assert state.max_ltc == 120


class TestSerialization:
    """Tests for to_dict / from_dict."""

    def test_round_trip(self, default_state):
        assert ProjectState.from_dict(default_state.to_dict()) == default_state

    def test_to_dict_is_plain(self, default_state):
        data = default_state.to_dict()

        assert data["land_cost"] == 1_500_000
        assert isinstance(data["tenants"], list)
        assert data["tenants"][0]["category"] == "Retail"

    def test_from_dict_camel_case_keys(self):
        state = ProjectState.from_dict({
            "landCost": 2_000_000,
            "totalBuildSf": 60_000,
            "amortYears": 30.0,
            "numNodes": "4",
            "tenants": [
                {"id": "a", "name": "Shop", "category": "Retail", "sf": 1000, "rentPsf": 30,
                 "operatingHours": 10, "nightActive": False},
            ],
        })

        assert state.land_cost == 2_000_000
        assert state.total_build_sf == 60_000
        assert state.amort_years == 30
        assert isinstance(state.amort_years, int)
        assert state.num_nodes == 4
        assert state.tenant_count == 1

    def test_from_dict_missing_keys_use_defaults(self):
        state = ProjectState.from_dict({"land_cost": 900_000})

        assert state.land_cost == 900_000
        assert state.hard_cost_psf == 220
        assert state.tenant_count == 4

    def test_from_dict_ignores_unknown_keys(self):
        state = ProjectState.from_dict({"landCost": 1, "somethingElse": "x"})
        assert state.land_cost == 1

    def test_from_dict_null_values_use_defaults(self):
        state = ProjectState.from_dict({"landCost": None, "numNodes": None, "tenants": None})

        assert state.land_cost == ProjectState().land_cost
        assert state.num_nodes == ProjectState().num_nodes
        assert state.tenant_count == 4

    @pytest.mark.parametrize("raw,expected", [
        (True, True), (False, False), ("false", False), ("true", True), ("", False), (None, False),
    ])
    def test_from_dict_night_active_flag(self, raw, expected):
        tenant = Tenant.from_dict({
            "id": "t1", "name": "Late Bar", "category": "Dining",
            "sf": 1000, "rentPsf": 30, "operatingHours": 10, "nightActive": raw,
        })
        assert tenant.night_active is expected
