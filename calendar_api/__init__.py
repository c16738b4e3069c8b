"""HTTP surface for the appointment calendar."""
