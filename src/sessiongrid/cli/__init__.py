"""sessiongrid command line interface."""
