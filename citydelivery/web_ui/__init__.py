"""NiceGUI web runtime for the delivery ranking page."""
