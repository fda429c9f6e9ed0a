"""SMS engine command-line interface."""
