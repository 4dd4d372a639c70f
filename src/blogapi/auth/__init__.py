"""Authentication.

Learn: one authentication path — email/password → bcrypt check →
signed JWT. Protected routes turn the bearer token back into a typed
Claims object and then into the caller's numeric user id, which every
post query is scoped by.
"""
