"""Boundary layer: external services, filesystem walker and fragment store."""
