"""OnlyUs profile client."""
