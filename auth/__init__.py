"""auth/ -- Credential storage, password hashing, session tokens, and the auth gate.

Layer rule: auth/ imports only stdlib + third-party libraries.
It does NOT import from api/, core/, or accounts/.
accounts/ and api/ import from auth/, not the other way around.
"""
