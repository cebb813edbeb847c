"""Routing: templates compiled into one alternation per scope.

Routes are registered on a scope, compiled lazily into a combined matcher
on first dispatch, and recompiled after any further registration.
"""
