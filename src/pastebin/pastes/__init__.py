"""Paste domain: identifiers, classification, service and reaper."""
