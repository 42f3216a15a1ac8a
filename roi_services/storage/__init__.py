"""Persistence for saved scenarios and report leads.

- scenarios.py: ScenarioStore, one JSON document per scenario, unique names
- leads.py: LeadStore, append-only JSON Lines log of report downloads
- errors.py: StorageError hierarchy mapped to 400s by the API
"""
