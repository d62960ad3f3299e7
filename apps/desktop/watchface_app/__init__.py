"""Command line app for the analog watch face renderer."""
