"""Business logic layer for accounts app.

- Identity store: registration, credential checks, user lookup
- Session manager: turning a request into an explicit principal

Views only call into this package; file operations receive the
principal it produces and never look at the request themselves.
"""
