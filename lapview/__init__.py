"""Request orchestration and series alignment for the lap telemetry dashboard."""
