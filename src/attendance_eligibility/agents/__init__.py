"""Agents that evaluate, track and report eligibility."""
