"""Techfest events back end: event import, runtime settings and registration control."""
