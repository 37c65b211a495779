"""Metric name prefixes used when naming transactions."""

CUSTOM = "Custom"
CONTROLLER = "Controller"
URI = "Uri"
NORMALIZED = "NormalizedUri"
