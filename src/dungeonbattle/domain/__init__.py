"""Battle domain: models, formulas and per-turn rules."""
