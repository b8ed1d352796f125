"""
Fuel, toll, parking and CO2 estimates for a route.

Fuel economy figures are typical real-world values; CO2 per km is
derived from 2.31 kg CO2 per liter of gasoline burned.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from ..geo_math import distance_km
from ..types import Activity, CostBreakdown, TravelMode, VehicleType
from ..validation import validate_mode
from .traffic import TravelHints

CO2_KG_PER_LITER = 2.31


@dataclass(frozen=True)
class VehicleProfile:
    """Fuel economy for a vehicle class (None = no fuel burned)."""

    km_per_liter: float | None

    @property
    def co2_kg_per_km(self) -> float:
        if self.km_per_liter is None:
            return 0.0
        return CO2_KG_PER_LITER / self.km_per_liter


VEHICLE_PROFILES: dict[VehicleType, VehicleProfile] = {
    "compact": VehicleProfile(km_per_liter=14.5),
    "standard": VehicleProfile(km_per_liter=11.0),
    "suv": VehicleProfile(km_per_liter=8.5),
    "electric": VehicleProfile(km_per_liter=None),
}

# Per-passenger emissions when not driving
NON_DRIVING_CO2_KG_PER_KM: dict[TravelMode, float] = {
    "walking": 0.0,
    "public_transport": 0.06,
}


def get_vehicle_profile(vehicle_type: str) -> VehicleProfile:
    if vehicle_type not in VEHICLE_PROFILES:
        valid = ", ".join(VEHICLE_PROFILES)
        raise ValueError(f"Unknown vehicle type '{vehicle_type}' (expected one of: {valid})")
    return VEHICLE_PROFILES[vehicle_type]


class CostEstimator:
    """Estimate money and emissions for an ordered route."""

    def __init__(
        self,
        mode: TravelMode = "driving",
        vehicle_type: VehicleType = "standard",
        fuel_price: float = 1.45,
    ) -> None:
        """
        Initialize estimator.

        Args:
            mode: Travel mode; fuel is only burned when driving
            vehicle_type: Vehicle class for fuel economy
            fuel_price: Price per liter (caller's currency)

        Raises:
            ValidationError: Unknown travel mode
            ValueError: Unknown vehicle type or negative fuel price
        """
        validate_mode(mode)
        if fuel_price < 0:
            raise ValueError(f"Fuel price must be non-negative, got {fuel_price}")
        self.mode = mode
        self.vehicle = get_vehicle_profile(vehicle_type)
        self.fuel_price = fuel_price

    def fuel_liters(self, km: float) -> float:
        if self.mode != "driving" or self.vehicle.km_per_liter is None:
            return 0.0
        return km / self.vehicle.km_per_liter

    def co2_kg(self, km: float) -> float:
        if self.mode == "driving":
            return km * self.vehicle.co2_kg_per_km
        return km * NON_DRIVING_CO2_KG_PER_KM[self.mode]

    def estimate(
        self,
        ordered: Sequence[Activity],
        hints: TravelHints | None = None,
        include_tolls: bool = False,
        include_parking: bool = False,
    ) -> CostBreakdown:
        """
        Cost breakdown for visiting activities in the given order.

        Tolls are looked up per (from_id, to_id) leg, parking per stop.
        Both are used verbatim and only when their flag is set.
        """
        hints = hints or TravelHints()
        km = route_distance_km(ordered)
        liters = self.fuel_liters(km)

        tolls = 0.0
        if include_tolls:
            for current, following in zip(ordered, ordered[1:]):
                toll = hints.tolls.get((current.id, following.id), 0.0)
                if toll < 0:
                    raise ValueError(f"Toll must be non-negative, got {toll} for {current.id} -> {following.id}")
                tolls += toll

        parking = 0.0
        if include_parking:
            for activity in ordered:
                fee = hints.parking.get(activity.id, 0.0)
                if fee < 0:
                    raise ValueError(f"Parking cost must be non-negative, got {fee} for {activity.id}")
                parking += fee

        return CostBreakdown(
            fuel=liters * self.fuel_price,
            fuel_liters=liters,
            tolls=tolls,
            parking=parking,
        )


def route_distance_km(ordered: Sequence[Activity]) -> float:
    return sum(distance_km(a.coordinates, b.coordinates) for a, b in zip(ordered, ordered[1:]))
