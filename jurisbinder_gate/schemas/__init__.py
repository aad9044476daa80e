"""Request and response schemas of the gate boundary."""
