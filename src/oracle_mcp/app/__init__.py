"""Application wiring: bootstrap and command-line interface."""
