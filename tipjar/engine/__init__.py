"""Tip selection engine: models, rules, selection and persistence."""
