"""Client Layer: Python consumer of the report API."""
