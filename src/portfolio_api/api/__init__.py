"""HTTP surface for the portfolio API."""
