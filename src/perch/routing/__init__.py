"""Routing: pattern compilation, query parsing, and first-match lookup.

Routes are compiled into segment tuples when registered and matched
in registration order on every navigation.
"""
