"""hostkit command line interface."""
