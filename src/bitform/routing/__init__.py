"""Routing — provider-neutral routes, verbs, and the Router capability.

Routes are registered while the application prepares and resolved by
the provider once it starts serving.
"""
