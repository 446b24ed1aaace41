"""Business logic services used by handlers.

Handlers build services lazily (see ``handlers.common``) so importing a
handler never opens AWS clients.
"""
