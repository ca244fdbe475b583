"""
Rating aggregation layer.

Responsibilities:
- Define the 13 weighted rating categories.
- Validate submitted rating vectors and pseudonymize submitters.
- Enforce the one-vote-per-cooldown-window rule.
- Compute weighted venue averages and unweighted category breakdowns.
"""
