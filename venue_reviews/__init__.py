"""
Anonymous venue reviews service.

Responsibilities:
- Register venues by normalized (name, city, address) identity.
- Accept anonymous 13-category ratings, one per submitter per cooldown window.
- Maintain weighted venue averages, per-category breakdowns and rankings.
- Persist the venue collection to a JSON file.
"""
