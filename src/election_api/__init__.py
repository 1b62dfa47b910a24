"""Election management API: voters, candidates, elections, ballots, and results."""

__version__ = "0.1.0"
