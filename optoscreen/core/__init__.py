"""Core evaluation layers: measurements (input) and clinical (rules and criteria)."""
