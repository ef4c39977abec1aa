"""Chart builders for the lap telemetry dashboard."""

from .comparison import (
    build_delta_chart,
    build_inputs_chart,
    build_speed_chart,
    build_steering_chart,
)
from .fuel import (
    build_consumption_scatter,
    build_fuel_curve_chart,
    build_fuel_curves_chart,
    build_fuel_delta_chart,
    build_fuel_track_map,
)

__all__ = [
    "build_consumption_scatter",
    "build_delta_chart",
    "build_fuel_curve_chart",
    "build_fuel_curves_chart",
    "build_fuel_delta_chart",
    "build_fuel_track_map",
    "build_inputs_chart",
    "build_speed_chart",
    "build_steering_chart",
]
