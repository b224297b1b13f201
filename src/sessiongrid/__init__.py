"""
sessiongrid - container-backed browser session routing for grid nodes.

- sessiongrid.core: errors, logging, settings, sectioned configuration
- sessiongrid.docker: docker endpoint, probe, image warm-up, session routes
- sessiongrid.cli: ``sessiongrid`` command line
"""

__version__ = "0.1.0"
