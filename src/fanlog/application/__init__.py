"""Application – ports for outbound collaborators."""
