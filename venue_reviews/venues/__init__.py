"""
Venue registry layer.

Responsibilities:
- Define the persisted Venue and RatingSubmission records.
- Create-or-find venues by normalized identity and look them up by id.
- Produce top/bottom rankings by weighted average.
- Load and save the venue collection through a pluggable store.
"""
