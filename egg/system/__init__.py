"""System-wide types shared across the Egg packages."""
