"""Tests for the typed ProjectState update functions."""

import pytest

from src.models.project import Tenant, TenantCategory
from src.models.updates import (
    update_land,
    update_construction,
    update_capital,
    update_urbanism,
    new_tenant,
    add_tenant,
    update_tenant,
    remove_tenant,
)


class TestGroupUpdates:
    """Updates return a new snapshot and leave the original unchanged."""

    def test_update_land(self, default_state):
        state = update_land(default_state, land_cost=2_000_000)

        assert state.land_cost == 2_000_000
        assert state.land_closing_pct == default_state.land_closing_pct
        assert default_state.land_cost == 1_500_000

    def test_update_construction(self, default_state):
        state = update_construction(default_state, hard_cost_psf=250, phase1_sf=20_000)

        assert state.hard_cost_psf == 250
        assert state.phase1_sf == 20_000
        assert state.total_build_sf == 45_000

    def test_update_capital(self, default_state):
        state = update_capital(default_state, interest_rate=6.5, io_months=12)

        assert state.interest_rate == 6.5
        assert state.io_months == 12
        assert state.max_ltc == 65

    def test_update_urbanism(self, default_state):
        state = update_urbanism(default_state, shade_pct=80, car_crossings_count=0)

        assert state.shade_pct == 80
        assert state.car_crossings_count == 0
        assert state.num_nodes == 3

    def test_zero_is_applied(self, default_state):
        """Only None means 'leave unchanged'."""
        assert update_capital(default_state, interest_rate=0).interest_rate == 0

    def test_no_arguments_is_identity(self, default_state):
        assert update_land(default_state) == default_state


class TestTenantUpdates:
    """Tests for roster edits."""

    def test_new_tenant_placeholder(self):
        tenant = new_tenant()

        assert tenant.name == "New Tenant"
        assert tenant.category is TenantCategory.RETAIL
        assert tenant.sf == 1500
        assert tenant.rent_psf == 30
        assert tenant.operating_hours == 10
        assert tenant.night_active is False
        assert len(tenant.id) == 9

    def test_new_tenant_ids_are_unique(self):
        assert len({new_tenant().id for _ in range(50)}) == 50

    def test_add_placeholder(self, default_state):
        state = add_tenant(default_state)

        assert state.tenant_count == 5
        assert state.tenants[-1].name == "New Tenant"
        assert default_state.tenant_count == 4

    def test_add_given_tenant(self, default_state):
        tenant = Tenant("gym", "Gym", TenantCategory.WELLNESS, sf=5_000, rent_psf=22, operating_hours=16)
        state = add_tenant(default_state, tenant)

        assert state.get_tenant("gym") == tenant

    def test_update_tenant_keeps_order(self, default_state):
        state = update_tenant(default_state, "2", rent_psf=45, night_active=True)

        assert [t.id for t in state.tenants] == ["1", "2", "3", "4"]
        assert state.get_tenant("2").rent_psf == 45
        assert state.get_tenant("2").night_active is True
        assert state.get_tenant("2").name == "The Daily Brew"

    def test_update_unknown_tenant_raises(self, default_state):
        with pytest.raises(KeyError):
            update_tenant(default_state, "missing", sf=100)

    def test_remove_tenant(self, default_state):
        state = remove_tenant(default_state, "3")

        assert [t.id for t in state.tenants] == ["1", "2", "4"]

    def test_remove_unknown_tenant_is_noop(self, default_state):
        assert remove_tenant(default_state, "missing") == default_state
