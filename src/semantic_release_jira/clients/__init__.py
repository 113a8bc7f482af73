"""Clients for the external issue tracker.

The plugin codes against TrackerClientProtocol so the orchestrator and its
tests can swap the real Jira client for an in-memory one.
"""
