"""HTTP command surface for floor plan editing sessions."""
