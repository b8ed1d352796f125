"""Tests for vehicle profiles and route cost estimates."""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from dayplanner.routing.cost_estimator import (
    VEHICLE_PROFILES,
    CostEstimator,
    get_vehicle_profile,
    route_distance_km,
)
from dayplanner.routing.traffic import TravelHints
from dayplanner.types import ValidationError
from helpers import make_activity


class TestVehicleProfiles:
    """Tests for fuel economy and derived emissions."""

    def test_co2_from_fuel_economy(self) -> None:
        """2.31 kg CO2 per liter at 11 km/L is 0.21 kg/km."""
        assert VEHICLE_PROFILES["standard"].co2_kg_per_km == pytest.approx(0.21)

    def test_electric_has_no_tailpipe_co2(self) -> None:
        assert VEHICLE_PROFILES["electric"].km_per_liter is None
        assert VEHICLE_PROFILES["electric"].co2_kg_per_km == 0

    def test_larger_vehicles_emit_more(self) -> None:
        compact = VEHICLE_PROFILES["compact"].co2_kg_per_km
        standard = VEHICLE_PROFILES["standard"].co2_kg_per_km
        suv = VEHICLE_PROFILES["suv"].co2_kg_per_km
        assert compact < standard < suv

    def test_unknown_vehicle_rejected(self) -> None:
        with pytest.raises(ValueError, match="Unknown vehicle type"):
            get_vehicle_profile("tank")


class TestCostEstimator:
    """Tests for the per-route breakdown."""

    @pytest.fixture
    def route(self):
        return [
            make_activity("a", "09:00", "10:00", km=0),
            make_activity("b", "11:00", "12:00", km=14.5),
            make_activity("c", "13:00", "14:00", km=29),
        ]

    def test_route_distance(self, route) -> None:
        assert route_distance_km(route) == pytest.approx(29)

    def test_compact_fuel(self, route) -> None:
        """29 km at 14.5 km/L is 2 liters."""
        cost = CostEstimator(vehicle_type="compact", fuel_price=1.5).estimate(route)

        assert cost.fuel_liters == pytest.approx(2.0)
        assert cost.fuel == pytest.approx(3.0)

    def test_no_fuel_when_not_driving(self, route) -> None:
        cost = CostEstimator(mode="public_transport").estimate(route)
        assert cost.fuel == 0
        assert cost.fuel_liters == 0

    def test_tolls_and_parking_verbatim(self, route) -> None:
        hints = TravelHints(tolls={("a", "b"): 2.5, ("b", "c"): 1.25}, parking={"c": 9.0})

        cost = CostEstimator().estimate(route, hints, include_tolls=True, include_parking=True)

        assert cost.tolls == 3.75
        assert cost.parking == 9.0
        assert cost.total == pytest.approx(cost.fuel + 12.75)

    def test_tolls_follow_direction(self, route) -> None:
        """A toll on a -> b doesn't apply when driving b -> a."""
        hints = TravelHints(tolls={("a", "b"): 2.5})

        cost = CostEstimator().estimate(list(reversed(route)), hints, include_tolls=True)

        assert cost.tolls == 0

    def test_negative_fuel_price_rejected(self) -> None:
        with pytest.raises(ValueError, match="Fuel price"):
            CostEstimator(fuel_price=-0.5)

    def test_unknown_mode_rejected(self) -> None:
        with pytest.raises(ValidationError, match="bike"):
            CostEstimator(mode="bike")

    def test_negative_parking_rejected(self, route) -> None:
        hints = TravelHints(parking={"a": -1.0})
        with pytest.raises(ValueError, match="Parking"):
            CostEstimator().estimate(route, hints, include_parking=True)

    def test_single_stop_costs_nothing_to_drive(self) -> None:
        cost = CostEstimator().estimate([make_activity("a")])
        assert cost.fuel == 0
